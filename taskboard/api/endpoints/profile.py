from fastapi import APIRouter, Depends

from taskboard.api import deps
from taskboard.core.security import AuthContext
from taskboard.schemas.common import Envelope, MessageData
from taskboard.schemas.users import PasswordChange, ProfileUpdate, UserData, UserOut
from taskboard.services.auth import AuthService

router = APIRouter(tags=["profile"], prefix="/profile")


@router.get("", response_model=Envelope[UserData])
def get_profile(
    current_user: AuthContext = Depends(deps.get_current_user),
    service: AuthService = Depends(deps.get_auth_service),
):
    user = service.get_profile(current_user.id)
    return Envelope(data=UserData(user=UserOut.model_validate(user)))


@router.patch("", response_model=Envelope[UserData])
def update_profile(
    profile_in: ProfileUpdate,
    current_user: AuthContext = Depends(deps.get_current_user),
    service: AuthService = Depends(deps.get_auth_service),
):
    user = service.update_display_name(current_user.id, profile_in.display_name)
    return Envelope(data=UserData(user=UserOut.model_validate(user)))


@router.patch("/password", response_model=Envelope[MessageData])
def change_password(
    password_in: PasswordChange,
    current_user: AuthContext = Depends(deps.get_current_user),
    service: AuthService = Depends(deps.get_auth_service),
):
    service.change_password(current_user.id, password_in.old_password, password_in.new_password)
    return Envelope(data=MessageData(message="Password changed."))
