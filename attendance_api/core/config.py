# attendance-server/attendance_api/core/config.py
from typing import List, Optional
from pydantic_settings import BaseSettings; from dotenv import load_dotenv
load_dotenv()
class Settings(BaseSettings):
    DATABASE_URL: str; JWT_SECRET_KEY: str; JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    UPLOAD_DIR: str = "uploads"; MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    LOG_LEVEL: str = "INFO"; AUTO_CREATE_TABLES: bool = True
    # One-time bootstrap admin, created only when no admin exists yet
    BOOTSTRAP_ADMIN_USERNAME: Optional[str] = None
    BOOTSTRAP_ADMIN_PASSWORD: Optional[str] = None
    BOOTSTRAP_ADMIN_FULL_NAME: str = "Administrator"
settings = Settings()
