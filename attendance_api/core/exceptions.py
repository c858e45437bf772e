# attendance-server/attendance_api/core/exceptions.py
# Domain errors raised by the services. The app turns each one into a
# {"message": ...} response with the matching status code.
from fastapi import status


class AttendanceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(AttendanceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input."


class InvalidCredentials(AttendanceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid username or password."


class Unauthenticated(AttendanceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized: No token provided."


class Forbidden(AttendanceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden: Invalid or expired token."


class NotFound(AttendanceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found."


class DuplicateUsername(AttendanceError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Username already exists."


class AlreadyCheckedIn(AttendanceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "You have already checked in for today."


class NoActiveCheckIn(AttendanceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "No active check-in found for today to check out, or already checked out."


class SelfDeleteForbidden(AttendanceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Admins cannot delete their own account."


class InvalidFileType(AttendanceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Only image files are allowed!"


class FileTooLarge(AttendanceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "File too large."
