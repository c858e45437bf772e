# attendance-server/attendance_api/services/profile.py
import logging
import mimetypes
import uuid
from pathlib import Path
from sqlalchemy.orm import Session

from attendance_api.core import security
from attendance_api.core.config import settings
from attendance_api.core.exceptions import FileTooLarge, InvalidFileType, InvalidInput
from attendance_api.services.admin import check_password_length, get_user

logger = logging.getLogger(__name__)

def get_upload_dir() -> Path:
    return Path(settings.UPLOAD_DIR)

def new_picture_name(content_type: str) -> str:
    suffix = mimetypes.guess_extension(content_type.split(";")[0].strip()) or ""
    return f"profilePicture-{uuid.uuid4().hex}{suffix}"

def remove_picture(upload_dir: Path, filename: str | None) -> None:
    """Best-effort removal of a stored picture."""
    if not filename:
        return
    path = upload_dir / Path(filename).name
    if not path.exists():
        return
    try:
        path.unlink()
        logger.info("Deleted old profile picture: %s", filename)
    except OSError as e:
        logger.warning("Could not delete profile picture %s: %s", filename, e)

def update_profile_picture(
    db: Session,
    user_id: int,
    data: bytes,
    content_type: str | None,
    upload_dir: Path,
    max_bytes: int,
) -> str:
    """
    Stores a new picture for the user and points their record at it.

    The reference is committed before the old file is removed, so a failure
    can at worst leave an unreferenced file behind, never a dangling reference.
    """
    if not content_type or not content_type.startswith("image/"):
        raise InvalidFileType()
    if len(data) > max_bytes:
        raise FileTooLarge(f"File too large. Maximum size is {max_bytes} bytes.")

    db_user = get_user(db, user_id)
    old_picture = db_user.profile_picture_url

    upload_dir.mkdir(parents=True, exist_ok=True)
    filename = new_picture_name(content_type)
    (upload_dir / filename).write_bytes(data)

    try:
        db_user.profile_picture_url = filename
        db.commit()
    except Exception:
        db.rollback()
        remove_picture(upload_dir, filename)
        raise

    remove_picture(upload_dir, old_picture)
    return filename

def change_password(db: Session, user_id: int, current_password: str | None, new_password: str | None) -> None:
    db_user = get_user(db, user_id)
    if not current_password or not security.verify_password(current_password, db_user.password_hash):
        raise InvalidInput("Incorrect current password")
    check_password_length(new_password)

    db_user.password_hash = security.get_password_hash(new_password)
    db.commit()
