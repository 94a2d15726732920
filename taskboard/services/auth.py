"""Registration, login with lockout, session tokens and profile changes."""

import logging
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskboard.core.errors import (
    AccountLockedError,
    DuplicateEmailError,
    InvalidCredentialsError,
    NotFoundError,
    WrongPasswordError,
)
from taskboard.core.security import AuthContext, PasswordHasher, TokenManager
from taskboard.db.models import UserDB

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(
        self,
        db: Session,
        passwords: PasswordHasher,
        tokens: TokenManager,
        max_login_attempts: int = 3,
    ):
        self.db = db
        self.passwords = passwords
        self.tokens = tokens
        self.max_login_attempts = max_login_attempts

    def get_user_by_email(self, email: str) -> Optional[UserDB]:
        return self.db.query(UserDB).filter(UserDB.email == email).first()

    def get_profile(self, user_id: int) -> UserDB:
        user = self.db.query(UserDB).filter(UserDB.id == user_id).first()
        if not user:
            raise NotFoundError("User not found.")
        return user

    def register(self, email: str, password: str, display_name: str) -> UserDB:
        if self.get_user_by_email(email):
            raise DuplicateEmailError()

        user = UserDB(
            email=email,
            password_hash=self.passwords.hash(password),
            display_name=display_name,
            is_active=True,
            failed_login_attempts=0,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # lost a race against a concurrent registration of the same email
            self.db.rollback()
            raise DuplicateEmailError()
        self.db.refresh(user)

        logger.info("Registered user id=%s", user.id)
        return user

    def _is_locked(self, user: UserDB) -> bool:
        return user.failed_login_attempts >= self.max_login_attempts

    def login(self, email: str, password: str) -> Tuple[str, UserDB]:
        """
        Check credentials and issue a session token.

        Unknown email and wrong password both surface as InvalidCredentialsError;
        only the locked state is reported separately.
        """
        user = self.get_user_by_email(email)
        if not user:
            raise InvalidCredentialsError()

        if self._is_locked(user):
            logger.warning("Login refused for locked user id=%s", user.id)
            raise AccountLockedError()

        if not self.passwords.verify(password, user.password_hash):
            self.db.query(UserDB).filter(UserDB.id == user.id).update(
                {UserDB.failed_login_attempts: UserDB.failed_login_attempts + 1},
                synchronize_session=False,
            )
            self.db.commit()
            self.db.refresh(user)

            if self._is_locked(user):
                logger.warning(
                    "User id=%s locked after %s failed login attempts",
                    user.id,
                    user.failed_login_attempts,
                )
                raise AccountLockedError()
            raise InvalidCredentialsError()

        if user.failed_login_attempts:
            user.failed_login_attempts = 0
            self.db.commit()
            self.db.refresh(user)

        token = self.tokens.create_access_token(user.id, user.email)
        logger.info("User id=%s logged in", user.id)
        return token, user

    def verify_session(self, token: str) -> AuthContext:
        return self.tokens.decode(token)

    def change_password(self, user_id: int, old_password: str, new_password: str) -> None:
        # tokens issued before the change stay valid until they expire
        user = self.get_profile(user_id)
        if not self.passwords.verify(old_password, user.password_hash):
            raise WrongPasswordError()

        user.password_hash = self.passwords.hash(new_password)
        self.db.commit()
        logger.info("Password changed for user id=%s", user_id)

    def update_display_name(self, user_id: int, display_name: str) -> UserDB:
        user = self.get_profile(user_id)
        user.display_name = display_name
        self.db.commit()
        self.db.refresh(user)
        return user
