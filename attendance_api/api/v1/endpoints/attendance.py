# attendance-server/attendance_api/api/v1/endpoints/attendance.py
from typing import List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from attendance_api.core import security
from attendance_api.db import session
from attendance_api.schemas import attendance as attendance_schema
from attendance_api.schemas.token import TokenData
from attendance_api.services import attendance as attendance_service

router = APIRouter()

@router.post("/check-in", response_model=attendance_schema.CheckInResult, status_code=status.HTTP_201_CREATED)
def check_in(
    db: Session = Depends(session.get_db),
    current_user: TokenData = Depends(security.get_current_user)
):
    record = attendance_service.check_in(db, current_user.user_id)
    return {"message": "Checked in successfully", "record_id": record.record_id, "check_in_time": record.check_in_time}

@router.post("/check-out", response_model=attendance_schema.CheckOutResult)
def check_out(
    db: Session = Depends(session.get_db),
    current_user: TokenData = Depends(security.get_current_user)
):
    record = attendance_service.check_out(db, current_user.user_id)
    return {"message": "Checked out successfully", "check_out_time": record.check_out_time}

@router.get("/status/today", response_model=attendance_schema.TodayStatus)
def read_status_today(
    db: Session = Depends(session.get_db),
    current_user: TokenData = Depends(security.get_current_user)
):
    """ Today's record for the caller, or all-null fields when nothing is marked. """
    return attendance_service.status_today(db, current_user.user_id)

@router.get("/my-records", response_model=List[attendance_schema.AttendanceRecord])
def read_my_records(
    db: Session = Depends(session.get_db),
    current_user: TokenData = Depends(security.get_current_user)
):
    return attendance_service.my_records(db, current_user.user_id)

@router.get("/my-summary", response_model=attendance_schema.AttendanceSummary)
def read_my_summary(
    db: Session = Depends(session.get_db),
    current_user: TokenData = Depends(security.get_current_user)
):
    return attendance_service.my_summary(db, current_user.user_id)

@router.post("/mark-status", response_model=attendance_schema.Message)
def mark_status(
    payload: attendance_schema.MarkStatusRequest,
    response: Response,
    db: Session = Depends(session.get_db),
    current_user: TokenData = Depends(security.get_current_user)
):
    """ Marks a past or present day as Present/Absent, or clears it. """
    message, created = attendance_service.mark_status(
        db, current_user.user_id, payload.attendance_date, payload.status
    )
    if created:
        response.status_code = status.HTTP_201_CREATED
    return {"message": message}
