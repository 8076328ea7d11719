from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from sinceonearth.schemas.base import BaseSchema


# ---------- register ----------
class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=2)
    username: str = Field(..., min_length=3, pattern=r"^[a-zA-Z0-9_]+$")
    email: EmailStr
    password: str = Field(..., min_length=6)
    country: Optional[str] = None
    invite_code: Optional[str] = Field(default=None, alias="inviteCode")


# ---------- login ----------
class LoginRequest(BaseModel):
    # email or username
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


# ---------- token payload user ----------
class SessionUser(BaseSchema):
    id: str
    email: str
    username: str
    country: Optional[str] = None
    alien: str
    is_admin: bool
    approved: bool


class AuthResponse(BaseModel):
    message: str
    token: str
    user: SessionUser


# ---------- profile ----------
class UserProfileOut(BaseSchema):
    id: str
    email: str
    username: str
    name: str = ""
    country: Optional[str] = None
    alien: str
    is_admin: bool = False
    profile_icon: Optional[str] = None
    profile_color: Optional[str] = None
    profile_setup_complete: bool = False


class ProfileUpdateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    username: str = Field(..., min_length=3, pattern=r"^[a-zA-Z0-9_]+$")
    email: EmailStr
    country: Optional[str] = None


class PasswordChangeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: str = Field(..., min_length=1, alias="currentPassword")
    new_password: str = Field(..., min_length=6, alias="newPassword")


class ProfileSetupRequest(BaseModel):
    profile_icon: str = Field(..., min_length=1)
    profile_color: str = Field(..., min_length=1)


class ProfileIconRequest(BaseModel):
    profile_icon: str = Field(..., min_length=1)


class ProfileUpdateResponse(BaseModel):
    message: str
    user: UserProfileOut


# ---------- admin listing ----------
class AdminUserOut(BaseSchema):
    id: str
    alien: str
    username: str
    email: str
    name: str
    country: Optional[str] = None
    profile_icon: Optional[str] = None
    is_admin: bool
    approved: bool
    invite_code_used: Optional[str] = None
    created_at: Optional[datetime] = None
