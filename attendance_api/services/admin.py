# attendance-server/attendance_api/services/admin.py
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from attendance_api.core import security
from attendance_api.core.exceptions import DuplicateUsername, InvalidInput, NotFound, SelfDeleteForbidden
from attendance_api.db import models

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

def _parse_role(role: str | None) -> models.Role:
    try:
        return models.Role(role)
    except ValueError:
        raise InvalidInput(f"Invalid role '{role}'. Expected 'employee' or 'admin'.")

def check_password_length(password: str | None) -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInput(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.")

def _username_taken(db: Session, username: str, exclude_id: int | None = None) -> bool:
    query = db.query(models.User).filter(models.User.username == username)
    if exclude_id is not None:
        query = query.filter(models.User.id != exclude_id)
    return query.first() is not None

def get_user(db: Session, user_id: int) -> models.User:
    db_user = db.query(models.User).filter(models.User.id == user_id).first()
    if not db_user:
        raise NotFound(f"User with ID {user_id} not found.")
    return db_user

def create_employee(db: Session, username: str | None, password: str | None, full_name: str | None, role: str | None = "employee") -> models.User:
    if not username or not password or not full_name:
        raise InvalidInput("Username, password, and full name are required.")
    check_password_length(password)
    user_role = _parse_role(role or models.Role.employee.value)

    if _username_taken(db, username):
        raise DuplicateUsername()

    db_user = models.User(
        username=username, full_name=full_name,
        password_hash=security.get_password_hash(password),
        role=user_role.value,
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateUsername()
    db.refresh(db_user)
    logger.info("Created %s account '%s' (id %s)", db_user.role, db_user.username, db_user.id)
    return db_user

def list_employees(db: Session) -> list[models.User]:
    return db.query(models.User).order_by(models.User.full_name).all()

def update_employee(db: Session, user_id: int, full_name: str | None, username: str | None, role: str | None) -> models.User:
    if not full_name or not username or not role:
        raise InvalidInput("Full name, username, and role are required.")
    user_role = _parse_role(role)
    db_user = get_user(db, user_id)

    if _username_taken(db, username, exclude_id=user_id):
        raise DuplicateUsername(f"Username '{username}' already exists.")

    db_user.full_name = full_name
    db_user.username = username
    db_user.role = user_role.value
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateUsername(f"Username '{username}' already exists.")
    db.refresh(db_user)
    return db_user

def reset_password(db: Session, user_id: int, new_password: str | None) -> None:
    check_password_length(new_password)
    db_user = get_user(db, user_id)
    db_user.password_hash = security.get_password_hash(new_password)
    db.commit()

def delete_employee(db: Session, user_id: int, caller_id: int) -> str | None:
    """
    Deletes a user and, through the cascade, all of their attendance rows.
    Returns the stored profile picture name, if any, so the caller can remove the file.
    """
    if user_id == caller_id:
        raise SelfDeleteForbidden()
    db_user = get_user(db, user_id)
    picture = db_user.profile_picture_url

    db.delete(db_user)
    db.commit()
    logger.info("Deleted user id %s and their attendance records", user_id)
    return picture

def list_all_attendance(db: Session, user_id: int | None = None) -> list[dict]:
    query = db.query(
        models.AttendanceRecord.record_id,
        models.AttendanceRecord.user_id,
        models.User.full_name,
        models.User.username,
        models.AttendanceRecord.attendance_date,
        models.AttendanceRecord.check_in_time,
        models.AttendanceRecord.check_out_time,
        models.AttendanceRecord.status,
    ).join(models.User, models.AttendanceRecord.user_id == models.User.id)

    if user_id is not None:
        query = query.filter(models.AttendanceRecord.user_id == user_id)

    rows = query.order_by(
        models.AttendanceRecord.attendance_date.desc(),
        models.AttendanceRecord.check_in_time.desc(),
        models.User.full_name.asc(),
    ).all()
    return [dict(row._mapping) for row in rows]
