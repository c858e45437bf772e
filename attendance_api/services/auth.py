# attendance-server/attendance_api/services/auth.py
import logging
from sqlalchemy.orm import Session

from attendance_api.core import security
from attendance_api.core.exceptions import InvalidCredentials, InvalidInput
from attendance_api.db import models

logger = logging.getLogger(__name__)

def login(db: Session, username: str | None, password: str | None) -> tuple[str, models.User]:
    """
    Checks a username/password pair and issues a token for it.
    Unknown usernames and wrong passwords fail with the same message.
    """
    if not username or not password:
        raise InvalidInput("Username and password are required.")

    user = db.query(models.User).filter(models.User.username == username).first()
    if not user or not security.verify_password(password, user.password_hash):
        raise InvalidCredentials()

    logger.info("User '%s' logged in", user.username)
    return security.create_token_for_user(user), user
