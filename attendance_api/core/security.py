# attendance-server/attendance_api/core/security.py
# Handles password hashing, JWTs, and the role-checking dependencies.
import logging
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError
from datetime import datetime, timedelta, timezone

from attendance_api.core.config import settings
from attendance_api.core.exceptions import Forbidden, Unauthenticated
from attendance_api.db.models import Role
from attendance_api.schemas import token as token_schema

logger = logging.getLogger(__name__)

# --- Password Hashing ---
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")
def verify_password(plain: str, hashed: str) -> bool: return pwd_context.verify(plain, hashed)
def get_password_hash(pwd: str) -> str: return pwd_context.hash(pwd)

# --- JWT Creation ---
def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

def create_token_for_user(user) -> str:
    return create_access_token(data={"sub": user.username, "user_id": user.id, "role": user.role})

def authenticate(token: str | None) -> token_schema.TokenData:
    """
    Verifies a bearer token and returns the identity it carries.
    No token is a 401; a bad, foreign or expired token is a 403.
    """
    if not token:
        raise Unauthenticated()
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        return token_schema.TokenData(
            user_id=payload.get("user_id"),
            username=payload.get("sub"),
            role=payload.get("role"),
        )
    except (JWTError, ValidationError) as e:
        logger.info("Token verification failed: %s", type(e).__name__)
        raise Forbidden()

def require_role(identity: token_schema.TokenData, role: Role) -> None:
    """Fails closed unless the identity holds exactly the given role."""
    if identity.role is not role:
        raise Forbidden(f"Forbidden: {role.value.capitalize()} role required.")

# --- Role-Checking Dependencies ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)

def get_current_user(token: str | None = Depends(oauth2_scheme)) -> token_schema.TokenData:
    return authenticate(token)

def get_current_admin_user(current_user: token_schema.TokenData = Depends(get_current_user)) -> token_schema.TokenData:
    require_role(current_user, Role.admin)
    return current_user
