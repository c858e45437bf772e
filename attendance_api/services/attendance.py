# attendance-server/attendance_api/services/attendance.py
"""
Per-day attendance rules for the authenticated user.

A (user, date) pair is in one of these states:

* Unmarked   - no row
* CheckedIn  - check_in_time set, check_out_time null
* Completed  - both timestamps set
* Absent / Present without timestamps - marked by hand
* Holiday    - never written by any path here

All functions take an optional ``now`` so callers (and tests) can pin the clock.
"""
import logging
from datetime import date, datetime, timezone

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from attendance_api.core.exceptions import AlreadyCheckedIn, Forbidden, InvalidInput, NoActiveCheckIn
from attendance_api.db import models
from attendance_api.schemas import attendance as attendance_schema
from attendance_api.services.admin import get_user

logger = logging.getLogger(__name__)

CLEAR = "Clear"
MARKABLE_STATUSES = {models.AttendanceStatus.Present.value, models.AttendanceStatus.Absent.value, CLEAR}

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def _get_record(db: Session, user_id: int, day: date) -> models.AttendanceRecord | None:
    return db.query(models.AttendanceRecord).filter(
        models.AttendanceRecord.user_id == user_id,
        models.AttendanceRecord.attendance_date == day,
    ).first()

def check_in(db: Session, user_id: int, now: datetime | None = None) -> models.AttendanceRecord:
    now = now or utcnow()
    today = now.date()
    # Tokens outlive deleted accounts
    get_user(db, user_id)

    record = _get_record(db, user_id, today)
    if record is not None:
        if record.check_in_time is not None:
            raise AlreadyCheckedIn()
        if record.status == models.AttendanceStatus.Holiday.value:
            raise Forbidden("Forbidden: cannot check in on a holiday.")
        # A day marked by hand earlier picks up the check-in on the same row
        record.check_in_time = now
        record.status = models.AttendanceStatus.Present.value
        db.commit()
        db.refresh(record)
        return record

    record = models.AttendanceRecord(
        user_id=user_id, attendance_date=today,
        check_in_time=now, status=models.AttendanceStatus.Present.value,
    )
    db.add(record)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        if _get_record(db, user_id, today) is None:
            raise
        # A concurrent request inserted today's row first
        raise AlreadyCheckedIn()
    db.refresh(record)
    logger.info("User %s checked in at %s", user_id, now.isoformat())
    return record

def check_out(db: Session, user_id: int, now: datetime | None = None) -> models.AttendanceRecord:
    now = now or utcnow()
    record = db.query(models.AttendanceRecord).filter(
        models.AttendanceRecord.user_id == user_id,
        models.AttendanceRecord.attendance_date == now.date(),
        models.AttendanceRecord.check_in_time.isnot(None),
        models.AttendanceRecord.check_out_time.is_(None),
    ).first()
    if record is None:
        raise NoActiveCheckIn()

    record.check_out_time = now
    db.commit()
    db.refresh(record)
    logger.info("User %s checked out at %s", user_id, now.isoformat())
    return record

def mark_status(db: Session, user_id: int, day: date | None, status: str | None, now: datetime | None = None) -> tuple[str, bool]:
    """
    Marks ``day`` as Present or Absent, or clears it.

    Returns ``(message, created)``; ``created`` is True only when a new row was inserted.
    Clearing a day with nothing on it is a no-op success.
    """
    if not day or not status:
        raise InvalidInput("Date and status are required.")
    if status == models.AttendanceStatus.Holiday.value:
        raise Forbidden("Forbidden: marking Holiday status is not permitted via this path.")
    if status not in MARKABLE_STATUSES:
        raise InvalidInput(f"Invalid status '{status}'.")
    now = now or utcnow()
    if day > now.date():
        raise InvalidInput("Cannot mark attendance for a future date.")

    get_user(db, user_id)
    record = _get_record(db, user_id, day)
    if record is not None and record.status == models.AttendanceStatus.Holiday.value:
        raise Forbidden(f"Forbidden: {day} is a holiday and cannot be changed.")

    if status == CLEAR:
        if record is None:
            return f"No entry found for {day} to clear.", False
        db.delete(record)
        db.commit()
        return f"Attendance entry for {day} cleared.", False

    created = False
    if record is None:
        record = models.AttendanceRecord(user_id=user_id, attendance_date=day, status=status)
        db.add(record)
        try:
            db.commit()
            created = True
        except IntegrityError:
            db.rollback()
            record = _get_record(db, user_id, day)
            if record is None:
                raise
            if record.status == models.AttendanceStatus.Holiday.value:
                raise Forbidden(f"Forbidden: {day} is a holiday and cannot be changed.")

    if not created:
        _apply_status(record, status)
        db.commit()

    return f"Attendance for {day} marked as {status}.", created

def _apply_status(record: models.AttendanceRecord, status: str) -> None:
    record.status = status
    if status == models.AttendanceStatus.Absent.value:
        # Absent demotes a completed day; the timestamps go with it
        record.check_in_time = None
        record.check_out_time = None

def status_today(db: Session, user_id: int, now: datetime | None = None) -> attendance_schema.TodayStatus:
    today = (now or utcnow()).date()
    record = db.query(models.AttendanceRecord).filter(
        models.AttendanceRecord.user_id == user_id,
        models.AttendanceRecord.attendance_date == today,
    ).order_by(models.AttendanceRecord.check_in_time.desc()).first()

    if record is None:
        return attendance_schema.TodayStatus()
    return attendance_schema.TodayStatus(
        check_in_time=record.check_in_time,
        check_out_time=record.check_out_time,
        status=record.status,
    )

def my_records(db: Session, user_id: int) -> list[models.AttendanceRecord]:
    return db.query(models.AttendanceRecord).filter(
        models.AttendanceRecord.user_id == user_id
    ).order_by(models.AttendanceRecord.attendance_date.desc()).all()

def my_summary(db: Session, user_id: int) -> attendance_schema.AttendanceSummary:
    days_with_activity = db.query(
        func.count(func.distinct(models.AttendanceRecord.attendance_date))
    ).filter(models.AttendanceRecord.user_id == user_id).scalar()

    status_counts = db.query(
        models.AttendanceRecord.status,
        func.count(models.AttendanceRecord.record_id).label("count")
    ).filter(
        models.AttendanceRecord.user_id == user_id
    ).group_by(models.AttendanceRecord.status).all()
    counts = {item.status: item.count for item in status_counts}

    return attendance_schema.AttendanceSummary(
        days_with_activity=days_with_activity or 0,
        days_present=counts.get(models.AttendanceStatus.Present.value, 0),
        days_absent=counts.get(models.AttendanceStatus.Absent.value, 0),
        days_holiday=counts.get(models.AttendanceStatus.Holiday.value, 0),
    )
