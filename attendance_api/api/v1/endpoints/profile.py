# attendance-server/attendance_api/api/v1/endpoints/profile.py
from pathlib import Path
from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from attendance_api.core import security
from attendance_api.core.config import settings
from attendance_api.core.exceptions import InvalidInput
from attendance_api.db import session
from attendance_api.schemas import attendance as attendance_schema
from attendance_api.schemas import user as user_schema
from attendance_api.schemas.token import TokenData
from attendance_api.services import admin as admin_service
from attendance_api.services import profile as profile_service

router = APIRouter()

@router.get("/me", response_model=user_schema.User)
def read_user_me(
    db: Session = Depends(session.get_db),
    current_user: TokenData = Depends(security.get_current_user)
):
    """
    Get the details for the currently logged-in user.
    """
    return admin_service.get_user(db, current_user.user_id)

@router.put("/me/password", response_model=attendance_schema.Message)
def update_user_password(
    passwords: user_schema.PasswordUpdate,
    db: Session = Depends(session.get_db),
    current_user: TokenData = Depends(security.get_current_user)
):
    """
    Allows a logged-in user to change their own password.
    """
    profile_service.change_password(db, current_user.user_id, passwords.current_password, passwords.new_password)
    return {"message": "Password updated successfully."}

@router.post("/update-picture", response_model=user_schema.PictureUpdated)
async def update_picture(
    profilePicture: UploadFile | None = File(None),
    db: Session = Depends(session.get_db),
    upload_dir: Path = Depends(profile_service.get_upload_dir),
    current_user: TokenData = Depends(security.get_current_user)
):
    if profilePicture is None:
        raise InvalidInput("No profile picture file uploaded.")

    # One byte past the limit is enough to know it is too large
    data = await profilePicture.read(settings.MAX_UPLOAD_BYTES + 1)
    filename = profile_service.update_profile_picture(
        db,
        current_user.user_id,
        data=data,
        content_type=profilePicture.content_type,
        upload_dir=upload_dir,
        max_bytes=settings.MAX_UPLOAD_BYTES,
    )
    return {"message": "Profile picture updated successfully!", "profile_picture_url": filename}
