from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field


def _clean_display_name(value: str) -> str:
    value = value.strip()
    if not 1 <= len(value) <= 100:
        raise ValueError("display name must be between 1 and 100 characters")
    return value


DisplayName = Annotated[str, AfterValidator(_clean_display_name)]


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    display_name: DisplayName


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class ProfileUpdate(BaseModel):
    display_name: DisplayName


class PasswordChange(BaseModel):
    old_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6)


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: EmailStr
    display_name: str
    created_at: datetime


class UserData(BaseModel):
    user: UserOut


class LoginData(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserOut
