from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from taskboard.core.errors import TokenExpiredError, TokenInvalidError


@dataclass(frozen=True)
class AuthContext:
    """Identity decoded from a session token, passed into every protected operation."""

    id: int
    email: str


# ====== password hashing ======

class PasswordHasher:
    def __init__(self, rounds: int = 10):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, plain: str, hashed: str) -> bool:
        return self._context.verify(plain, hashed)


# ====== JWT ======

class TokenManager:
    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 24 * 60):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def create_access_token(
        self,
        user_id: int,
        email: str,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.expire_minutes))
        to_encode = {
            "sub": str(user_id),
            "email": email,
            "iat": now,
            "exp": expire,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> AuthContext:
        # ExpiredSignatureError subclasses JWTError, so it has to be caught first
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError:
            raise TokenInvalidError()

        user_id = payload.get("sub")
        email = payload.get("email")
        if not user_id or not email:
            raise TokenInvalidError("Invalid token payload.")

        try:
            return AuthContext(id=int(user_id), email=email)
        except ValueError:
            raise TokenInvalidError("Invalid token payload.")
