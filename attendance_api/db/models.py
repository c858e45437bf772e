# attendance-server/attendance_api/db/models.py
import enum
from sqlalchemy import ( Column, Integer, String, ForeignKey, Date, DateTime, CheckConstraint, UniqueConstraint, func )
from sqlalchemy.orm import relationship
from sqlalchemy.ext.declarative import declarative_base

Base = declarative_base()

class Role(str, enum.Enum):
    employee = "employee"
    admin = "admin"

class AttendanceStatus(str, enum.Enum):
    Present = "Present"
    Absent = "Absent"
    Holiday = "Holiday"

class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False, default=Role.employee.value)
    profile_picture_url = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    __table_args__ = ( CheckConstraint("role IN ('employee', 'admin')"), )
    records = relationship(
        "AttendanceRecord", back_populates="owner",
        cascade="all, delete-orphan",
    )

class AttendanceRecord(Base):
    __tablename__ = "attendance_records"
    record_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    attendance_date = Column(Date, nullable=False)
    check_in_time = Column(DateTime(timezone=True), nullable=True)
    check_out_time = Column(DateTime(timezone=True), nullable=True)
    status = Column(String(20), nullable=False)
    __table_args__ = (
        CheckConstraint("status IN ('Present', 'Absent', 'Holiday')"),
        CheckConstraint("check_out_time IS NULL OR check_in_time IS NOT NULL"),
        UniqueConstraint("user_id", "attendance_date", name="uq_attendance_user_date"),
    )
    owner = relationship("User", back_populates="records")
