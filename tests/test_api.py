from __future__ import annotations

from datetime import date, datetime, timezone

from attendance_api.core import security
from attendance_api.db import models
from attendance_api.services import admin as admin_service

from conftest import auth_headers


def _login(client, username, password):
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


def test_root(client):
    assert client.get("/").json() == {"message": "Welcome to the Attendance Tracker API"}


def test_login_returns_sanitized_user(client, alice):
    response = client.post("/api/auth/login", json={"username": "alice", "password": "secret1"})
    body = response.json()

    assert response.status_code == 200
    assert body["user"]["username"] == "alice"
    assert body["user"]["fullName"] == "Alice A"
    assert body["user"]["role"] == "employee"
    assert "password_hash" not in body["user"]
    assert security.authenticate(body["token"]).user_id == alice.id


def test_login_failure(client, alice):
    wrong = client.post("/api/auth/login", json={"username": "alice", "password": "nope"})
    unknown = client.post("/api/auth/login", json={"username": "ghost", "password": "nope"})

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json() == {"message": "Invalid username or password."}


def test_login_missing_fields(client):
    response = client.post("/api/auth/login", json={"username": "alice"})
    assert response.status_code == 400
    assert response.json() == {"message": "Username and password are required."}


def test_oauth2_token_endpoint(client, alice):
    response = client.post("/api/auth/token", data={"username": "alice", "password": "secret1"})
    assert response.status_code == 200
    assert response.json()["token_type"] == "bearer"


def test_missing_token_is_401(client):
    response = client.get("/api/attendance/my-records")
    assert response.status_code == 401
    assert response.json() == {"message": "Unauthorized: No token provided."}


def test_bad_token_is_403(client):
    response = client.get("/api/attendance/my-records", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 403
    assert response.json() == {"message": "Forbidden: Invalid or expired token."}


def test_employee_cannot_use_admin_routes(client, alice):
    response = client.get("/api/admin/users", headers=auth_headers(alice))
    assert response.status_code == 403
    assert response.json() == {"message": "Forbidden: Admin role required."}


def test_check_in_check_out_flow(client, alice):
    headers = _login(client, "alice", "secret1")

    response = client.post("/api/attendance/check-in", headers=headers)
    assert response.status_code == 201
    assert response.json()["message"] == "Checked in successfully"

    today = client.get("/api/attendance/status/today", headers=headers).json()
    assert today["checkInTime"] is not None
    assert today["checkOutTime"] is None
    assert today["status"] == "Present"

    again = client.post("/api/attendance/check-in", headers=headers)
    assert again.status_code == 400
    assert again.json() == {"message": "You have already checked in for today."}

    assert client.post("/api/attendance/check-out", headers=headers).status_code == 200

    today = client.get("/api/attendance/status/today", headers=headers).json()
    assert today["checkInTime"] is not None
    assert today["checkOutTime"] is not None


def test_check_out_without_check_in(client, alice):
    response = client.post("/api/attendance/check-out", headers=auth_headers(alice))
    assert response.status_code == 400


def test_status_today_when_unmarked(client, alice):
    response = client.get("/api/attendance/status/today", headers=auth_headers(alice))
    assert response.json() == {"checkInTime": None, "checkOutTime": None, "status": None}


def test_mark_status_flow(client, alice):
    headers = auth_headers(alice)

    created = client.post("/api/attendance/mark-status", json={"date": "2024-01-01", "status": "Absent"}, headers=headers)
    assert created.status_code == 201
    assert created.json() == {"message": "Attendance for 2024-01-01 marked as Absent."}

    updated = client.post("/api/attendance/mark-status", json={"date": "2024-01-01", "status": "Present"}, headers=headers)
    assert updated.status_code == 200

    [record] = client.get("/api/attendance/my-records", headers=headers).json()
    assert record["attendanceDate"] == "2024-01-01"
    assert record["status"] == "Present"
    assert record["checkInTime"] is None

    summary = client.get("/api/attendance/my-summary", headers=headers).json()
    assert summary == {"daysWithActivity": 1, "daysPresent": 1, "daysAbsent": 0, "daysHoliday": 0}

    cleared = client.post("/api/attendance/mark-status", json={"date": "2024-01-01", "status": "Clear"}, headers=headers)
    assert cleared.json() == {"message": "Attendance entry for 2024-01-01 cleared."}
    again = client.post("/api/attendance/mark-status", json={"date": "2024-01-01", "status": "Clear"}, headers=headers)
    assert again.status_code == 200
    assert again.json() == {"message": "No entry found for 2024-01-01 to clear."}


def test_mark_holiday_is_forbidden(client, admin):
    response = client.post(
        "/api/attendance/mark-status", json={"date": "2024-01-01", "status": "Holiday"}, headers=auth_headers(admin)
    )
    assert response.status_code == 403


def test_mark_status_bad_date_is_400(client, alice):
    response = client.post(
        "/api/attendance/mark-status", json={"date": "yesterday", "status": "Present"}, headers=auth_headers(alice)
    )
    assert response.status_code == 400
    assert "message" in response.json()


def test_admin_user_lifecycle(client, admin):
    headers = auth_headers(admin)

    short = client.post("/api/admin/users", json={"username": "bob", "password": "short", "fullName": "Bob B"}, headers=headers)
    assert short.status_code == 400

    created = client.post("/api/admin/users", json={"username": "bob", "password": "secret1", "fullName": "Bob B"}, headers=headers)
    assert created.status_code == 201
    bob_id = created.json()["userId"]

    duplicate = client.post("/api/admin/users", json={"username": "bob", "password": "secret1", "fullName": "Bob C"}, headers=headers)
    assert duplicate.status_code == 409

    users = client.get("/api/admin/users", headers=headers).json()
    assert [u["username"] for u in users] == ["bob", "root"]
    assert all("password_hash" not in u for u in users)

    updated = client.put(
        f"/api/admin/users/{bob_id}", json={"fullName": "Robert B", "username": "robert", "role": "employee"}, headers=headers
    )
    assert updated.status_code == 200

    bob_headers = _login(client, "robert", "secret1")
    client.post("/api/attendance/check-in", headers=bob_headers)

    deleted = client.delete(f"/api/admin/users/{bob_id}", headers=headers)
    assert deleted.status_code == 200
    assert client.get("/api/admin/attendance/all", headers=headers).json() == []

    missing = client.delete(f"/api/admin/users/{bob_id}", headers=headers)
    assert missing.status_code == 404


def test_admin_cannot_delete_self(client, admin):
    response = client.delete(f"/api/admin/users/{admin.id}", headers=auth_headers(admin))
    assert response.status_code == 400
    assert response.json() == {"message": "Admins cannot delete their own account."}


def test_admin_attendance_filter(client, admin, alice):
    client.post("/api/attendance/check-in", headers=auth_headers(alice))
    client.post("/api/attendance/check-in", headers=auth_headers(admin))
    headers = auth_headers(admin)

    everyone = client.get("/api/admin/attendance/all", params={"userId": "all"}, headers=headers).json()
    assert {r["username"] for r in everyone} == {"alice", "root"}

    only_alice = client.get("/api/admin/attendance/all", params={"userId": alice.id}, headers=headers).json()
    assert [r["fullName"] for r in only_alice] == ["Alice A"]

    bad = client.get("/api/admin/attendance/all", params={"userId": "alice"}, headers=headers)
    assert bad.status_code == 400


def test_profile_picture_upload(client, alice, upload_dir):
    headers = auth_headers(alice)

    response = client.post(
        "/api/profile/update-picture",
        files={"profilePicture": ("me.png", b"\x89PNG\r\n\x1a\nfake", "image/png")},
        headers=headers,
    )
    assert response.status_code == 200
    name = response.json()["profilePictureUrl"]
    assert (upload_dir / name).exists()
    assert client.get("/api/profile/me", headers=headers).json()["profilePictureUrl"] == name

    wrong_type = client.post(
        "/api/profile/update-picture",
        files={"profilePicture": ("notes.txt", b"hello", "text/plain")},
        headers=headers,
    )
    assert wrong_type.status_code == 400
    assert wrong_type.json() == {"message": "Only image files are allowed!"}

    nothing = client.post("/api/profile/update-picture", headers=headers)
    assert nothing.status_code == 400


def test_change_own_password(client, alice):
    headers = auth_headers(alice)
    response = client.put(
        "/api/profile/me/password", json={"current_password": "secret1", "new_password": "secret2"}, headers=headers
    )
    assert response.status_code == 200
    _login(client, "alice", "secret2")


def test_token_of_deleted_account_gets_404(client, db, admin):
    bob = admin_service.create_employee(db, "bob", "secret1", "Bob B")
    bob_id = bob.id
    headers = auth_headers(bob)
    admin_service.delete_employee(db, bob_id, caller_id=admin.id)

    marked = client.post("/api/attendance/mark-status", json={"date": "2024-01-01", "status": "Present"}, headers=headers)
    checked_in = client.post("/api/attendance/check-in", headers=headers)

    assert marked.status_code == checked_in.status_code == 404
    assert checked_in.json() == {"message": f"User with ID {bob_id} not found."}


def test_holiday_row_is_read_only(client, db, alice):
    db.add(models.AttendanceRecord(user_id=alice.id, attendance_date=date(2024, 1, 1), status="Holiday"))
    db.commit()

    response = client.post(
        "/api/attendance/mark-status", json={"date": "2024-01-01", "status": "Clear"}, headers=auth_headers(alice)
    )
    assert response.status_code == 403
    [record] = client.get("/api/attendance/my-records", headers=auth_headers(alice)).json()
    assert record["status"] == "Holiday"


def test_responses_use_camel_case_and_utc(client, alice):
    headers = auth_headers(alice)

    checked_in = client.post("/api/attendance/check-in", headers=headers).json()
    assert set(checked_in) == {"message", "recordId", "checkInTime"}
    stamp = datetime.fromisoformat(checked_in["checkInTime"].replace("Z", "+00:00"))
    assert stamp.utcoffset() == timezone.utc.utcoffset(None)

    checked_out = client.post("/api/attendance/check-out", headers=headers).json()
    assert set(checked_out) == {"message", "checkOutTime"}

    [record] = client.get("/api/attendance/my-records", headers=headers).json()
    assert set(record) == {"recordId", "userId", "attendanceDate", "checkInTime", "checkOutTime", "status"}

    login = client.post("/api/auth/login", json={"username": "alice", "password": "secret1"}).json()
    assert set(login["user"]) == {"id", "username", "fullName", "role", "profilePictureUrl", "createdAt"}


def test_upload_suffix_ignores_client_filename(client, alice, upload_dir):
    response = client.post(
        "/api/profile/update-picture",
        files={"profilePicture": ("x.html", b"<script>alert(1)</script>", "image/png")},
        headers=auth_headers(alice),
    )
    name = response.json()["profilePictureUrl"]
    assert name.endswith(".png")
    assert (upload_dir / name).exists()
