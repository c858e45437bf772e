# attendance-server/attendance_api/api/v1/endpoints/auth.py
from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from attendance_api.db import session
from attendance_api.schemas import token as token_schema
from attendance_api.services import auth as auth_service

router = APIRouter()

@router.post("/login", response_model=token_schema.LoginResponse)
def login(credentials: token_schema.LoginRequest, db: Session = Depends(session.get_db)):
    token, user = auth_service.login(db, credentials.username, credentials.password)
    return {"message": "Login successful!", "token": token, "token_type": "bearer", "user": user}

@router.post("/token", response_model=token_schema.Token)
def login_for_access_token(db: Session = Depends(session.get_db), form_data: OAuth2PasswordRequestForm = Depends()):
    """ OAuth2 password flow, used by the interactive docs. """
    token, _ = auth_service.login(db, form_data.username, form_data.password)
    return {"access_token": token, "token_type": "bearer"}
