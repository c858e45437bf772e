# attendance-server/attendance_api/schemas/user.py
from typing import Optional

from attendance_api.schemas.base import CamelModel, UtcDatetime

class UserBase(CamelModel):
    username: Optional[str] = None
    full_name: Optional[str] = None

class UserCreate(UserBase):
    password: Optional[str] = None
    role: str = "employee"

class UserUpdate(UserBase):
    role: Optional[str] = None

class User(CamelModel):
    id: int
    username: str
    full_name: str
    role: str
    profile_picture_url: Optional[str] = None
    created_at: Optional[UtcDatetime] = None

class UserCreated(CamelModel):
    message: str
    user_id: int

class PasswordUpdate(CamelModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None

class PasswordReset(CamelModel):
    new_password: Optional[str] = None

class PictureUpdated(CamelModel):
    message: str
    profile_picture_url: str
