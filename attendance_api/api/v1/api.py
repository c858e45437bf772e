# attendance-server/attendance_api/api/v1/api.py
from fastapi import APIRouter
from attendance_api.api.v1.endpoints import admin, attendance, auth, profile

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
api_router.include_router(attendance.router, prefix="/attendance", tags=["Attendance"])
api_router.include_router(profile.router, prefix="/profile", tags=["Profile"])
