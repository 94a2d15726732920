from typing import Iterator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from taskboard.core.config import Settings
from taskboard.core.errors import AuthenticationError
from taskboard.core.security import AuthContext
from taskboard.services.auth import AuthService
from taskboard.services.lists import ListService
from taskboard.services.tasks import TaskService

# missing header is reported by get_current_user as 401
security = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Iterator[Session]:
    yield from request.app.state.database.session()


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthContext:
    """
    Decode the bearer token into an AuthContext.

    No database lookup happens here; handlers receive the context explicitly.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Missing or malformed authentication token.")
    return request.app.state.tokens.decode(credentials.credentials)


def get_auth_service(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(
        db,
        passwords=request.app.state.passwords,
        tokens=request.app.state.tokens,
        max_login_attempts=settings.MAX_LOGIN_ATTEMPTS,
    )


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    return TaskService(db)


def get_list_service(db: Session = Depends(get_db)) -> ListService:
    return ListService(db)
