# attendance-server/attendance_api/api/v1/endpoints/admin.py
from pathlib import Path
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List

from attendance_api.core import security
from attendance_api.core.exceptions import InvalidInput
from attendance_api.db import session
from attendance_api.schemas import attendance as attendance_schema
from attendance_api.schemas import user as user_schema
from attendance_api.schemas.token import TokenData
from attendance_api.services import admin as admin_service
from attendance_api.services import profile as profile_service

router = APIRouter()

def _parse_user_filter(user_id: str | None) -> int | None:
    if user_id is None or user_id in ("", "all"):
        return None
    try:
        return int(user_id)
    except ValueError:
        raise InvalidInput(f"Invalid userId '{user_id}'.")

# --- API Endpoints ---

@router.post("/users", response_model=user_schema.UserCreated, status_code=status.HTTP_201_CREATED)
def create_user(
    user_in: user_schema.UserCreate,
    db: Session = Depends(session.get_db),
    admin: TokenData = Depends(security.get_current_admin_user)
):
    """ Creates a new employee account. """
    db_user = admin_service.create_employee(
        db, user_in.username, user_in.password, user_in.full_name, user_in.role
    )
    return {"message": "Employee created successfully", "user_id": db_user.id}

@router.get("/users", response_model=List[user_schema.User])
def get_all_users(
    db: Session = Depends(session.get_db),
    admin: TokenData = Depends(security.get_current_admin_user)
):
    """ Retrieves all users, ordered by full name. """
    return admin_service.list_employees(db)

@router.put("/users/{user_id}", response_model=attendance_schema.Message)
def update_user_details(
    user_id: int,
    updates: user_schema.UserUpdate,
    db: Session = Depends(session.get_db),
    admin: TokenData = Depends(security.get_current_admin_user)
):
    """ Updates a user's full name, username and role. """
    db_user = admin_service.update_employee(db, user_id, updates.full_name, updates.username, updates.role)
    return {"message": f"User {db_user.full_name} (ID: {user_id}) updated successfully."}

@router.put("/users/{user_id}/password", response_model=attendance_schema.Message)
def reset_user_password(
    user_id: int,
    password_in: user_schema.PasswordReset,
    db: Session = Depends(session.get_db),
    admin: TokenData = Depends(security.get_current_admin_user)
):
    """ Resets any user's password. """
    admin_service.reset_password(db, user_id, password_in.new_password)
    return {"message": f"Password for user ID {user_id} has been reset."}

@router.delete("/users/{user_id}", response_model=attendance_schema.Message)
def remove_user(
    user_id: int,
    db: Session = Depends(session.get_db),
    upload_dir: Path = Depends(profile_service.get_upload_dir),
    admin: TokenData = Depends(security.get_current_admin_user)
):
    """
    Deletes a user and all of their attendance records. Admins cannot delete themselves.
    """
    picture = admin_service.delete_employee(db, user_id, caller_id=admin.user_id)
    profile_service.remove_picture(upload_dir, picture)
    return {"message": f"User with ID {user_id} and all their attendance records have been deleted."}

@router.get("/attendance/all", response_model=List[attendance_schema.AdminAttendanceRecord])
def get_all_attendance(
    user_id: str | None = Query(None, alias="userId"),
    db: Session = Depends(session.get_db),
    admin: TokenData = Depends(security.get_current_admin_user)
):
    """ All attendance records across users, optionally filtered to one user. """
    return admin_service.list_all_attendance(db, _parse_user_filter(user_id))
