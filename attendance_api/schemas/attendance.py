# attendance-server/attendance_api/schemas/attendance.py
from pydantic import BaseModel, Field
from datetime import date
from typing import Optional

from attendance_api.schemas.base import CamelModel, UtcDatetime

class Message(BaseModel):
    message: str

class AttendanceRecord(CamelModel):
    record_id: int
    user_id: int
    attendance_date: date
    check_in_time: Optional[UtcDatetime] = None
    check_out_time: Optional[UtcDatetime] = None
    status: str

class AdminAttendanceRecord(AttendanceRecord):
    full_name: str
    username: str

class TodayStatus(CamelModel):
    check_in_time: Optional[UtcDatetime] = None
    check_out_time: Optional[UtcDatetime] = None
    status: Optional[str] = None

class CheckInResult(CamelModel):
    message: str
    record_id: int
    check_in_time: UtcDatetime

class CheckOutResult(CamelModel):
    message: str
    check_out_time: UtcDatetime

class AttendanceSummary(CamelModel):
    days_with_activity: int = 0
    days_present: int = 0
    days_absent: int = 0
    days_holiday: int = 0

class MarkStatusRequest(CamelModel):
    attendance_date: Optional[date] = Field(default=None, alias="date")
    status: Optional[str] = None
