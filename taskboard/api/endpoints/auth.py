from fastapi import APIRouter, Depends, status

from taskboard.api import deps
from taskboard.schemas.common import Envelope
from taskboard.schemas.users import LoginData, UserCreate, UserData, UserLogin, UserOut
from taskboard.services.auth import AuthService

router = APIRouter(tags=["auth"], prefix="/auth")


@router.post("/register", response_model=Envelope[UserData], status_code=status.HTTP_201_CREATED)
def register_user(
    user_in: UserCreate,
    service: AuthService = Depends(deps.get_auth_service),
):
    user = service.register(user_in.email, user_in.password, user_in.display_name)
    return Envelope(data=UserData(user=UserOut.model_validate(user)))


@router.post("/login", response_model=Envelope[LoginData])
def login(
    user_in: UserLogin,
    service: AuthService = Depends(deps.get_auth_service),
):
    token, user = service.login(user_in.email, user_in.password)
    return Envelope(data=LoginData(token=token, user=UserOut.model_validate(user)))
