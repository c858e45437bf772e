# attendance-server/attendance_api/main.py
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from attendance_api.api.v1.api import api_router
from attendance_api.core.config import settings
from attendance_api.core.exceptions import AttendanceError
from attendance_api.core.log_config import setup_logging
from attendance_api.db import session
from attendance_api.db.init_db import init_db

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
    if settings.AUTO_CREATE_TABLES:
        db = session.SessionLocal()
        try:
            init_db(db)
        finally:
            db.close()
    logger.info("Attendance Tracker API started")
    yield

app = FastAPI(title="Attendance Tracker API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)

# --- Error Handlers: every failure leaves as {"message": ...} ---

@app.exception_handler(AttendanceError)
async def attendance_error_handler(request: Request, exc: AttendanceError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)}, headers=getattr(exc, "headers", None))

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid value for '{field}': {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request."
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"message": "Internal server error."})

# All routes live under /api
app.include_router(api_router, prefix="/api")

# Uploaded profile pictures are served back by their stored name
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")

@app.get("/")
def read_root():
    return {"message": "Welcome to the Attendance Tracker API"}
