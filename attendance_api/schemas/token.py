# attendance-server/attendance_api/schemas/token.py
from pydantic import BaseModel
from typing import Optional

from attendance_api.db.models import Role
from attendance_api.schemas.base import CamelModel
from attendance_api.schemas.user import User

class Token(BaseModel):
    """ OAuth2 token response; the field names are fixed by OAuth2 (RFC 6749). """
    access_token: str
    token_type: str

class TokenData(BaseModel):
    """The identity a verified token asserts."""
    user_id: int
    username: str
    role: Role

class LoginRequest(CamelModel):
    username: Optional[str] = None
    password: Optional[str] = None

class LoginResponse(CamelModel):
    message: str
    token: str
    token_type: str = "bearer"
    user: User
