# attendance-server/attendance_api/db/init_db.py
# Creates the schema and the one-time bootstrap admin.
#   python -m attendance_api.db.init_db
import logging

from sqlalchemy.orm import Session

from attendance_api.core import security
from attendance_api.core.config import settings
from attendance_api.core.log_config import setup_logging
from attendance_api.db import models
from attendance_api.db.session import SessionLocal, engine

logger = logging.getLogger(__name__)

def create_tables(bind=engine) -> None:
    models.Base.metadata.create_all(bind=bind)

def bootstrap_admin(db: Session, username: str | None, password: str | None, full_name: str = "Administrator") -> models.User | None:
    """Creates the first admin account unless one already exists."""
    if not username or not password:
        return None
    if db.query(models.User).filter(models.User.role == models.Role.admin.value).first():
        return None

    admin = models.User(
        username=username, full_name=full_name,
        password_hash=security.get_password_hash(password),
        role=models.Role.admin.value,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("Created bootstrap admin account '%s'", username)
    return admin

def init_db(db: Session) -> None:
    create_tables(bind=db.get_bind())
    bootstrap_admin(
        db,
        settings.BOOTSTRAP_ADMIN_USERNAME,
        settings.BOOTSTRAP_ADMIN_PASSWORD,
        settings.BOOTSTRAP_ADMIN_FULL_NAME,
    )

def main() -> None:
    setup_logging(settings.LOG_LEVEL)
    db = SessionLocal()
    try:
        init_db(db)
    finally:
        db.close()
    logger.info("Database initialised")

if __name__ == "__main__":
    main()
