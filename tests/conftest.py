from __future__ import annotations

import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("AUTO_CREATE_TABLES", "0")

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from attendance_api.core import security
from attendance_api.db import models, session
from attendance_api.main import app
from attendance_api.services import admin as admin_service
from attendance_api.services import profile as profile_service

NOW = datetime(2024, 3, 4, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine():
    engine = session.create_db_engine("sqlite://", poolclass=StaticPool)
    models.Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def client(session_factory, upload_dir):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[session.get_db] = override_get_db
    app.dependency_overrides[profile_service.get_upload_dir] = lambda: upload_dir
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin(db):
    return admin_service.create_employee(db, "root", "rootpass", "Root Admin", "admin")


@pytest.fixture
def alice(db):
    return admin_service.create_employee(db, "alice", "secret1", "Alice A")


def auth_headers(user) -> dict[str, str]:
    return {"Authorization": f"Bearer {security.create_token_for_user(user)}"}
