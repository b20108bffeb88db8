"""
Tests for user registration and employee maintenance
"""
from datetime import date
from fastapi import status
from vivaponto.models.adjustment_request import AdjustmentRequest
from vivaponto.models.audit_log import AuditLog
from vivaponto.models.shift import Shift
from vivaponto.models.time_record import TimeRecord
from vivaponto.models.user import User, UserShiftHistory
from vivaponto.utils.datetime_utils import today_local


def _register_payload(**overrides):
    payload = {
        "name": "Ana Costa",
        "email": "Ana@Test.com",
        "cpf": "123.456.789-09",
        "password": "secret123",
        "role": "employee",
    }
    payload.update(overrides)
    return payload


def test_admin_registers_employee(client, db, shift, admin_headers):
    response = client.post(
        "/api/v1/auth/register",
        json=_register_payload(shift_id=shift.id),
        headers=admin_headers
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["email"] == "ana@test.com"
    assert data["cpf"] == "12345678909"
    assert data["role"] == "employee"
    assert data["shift"]["name"] == shift.name
    assert "password_hash" not in data

    history = db.query(UserShiftHistory).filter(UserShiftHistory.user_id == data["id"]).all()
    assert len(history) == 1
    assert history[0].shift_id == shift.id
    assert history[0].end_date is None


def test_register_duplicate_email_is_conflict(client, employee_user, admin_headers):
    response = client.post(
        "/api/v1/auth/register",
        json=_register_payload(email=employee_user.email),
        headers=admin_headers
    )
    assert response.status_code == status.HTTP_409_CONFLICT


def test_register_duplicate_cpf_is_conflict(client, employee_user, admin_headers):
    response = client.post(
        "/api/v1/auth/register",
        json=_register_payload(cpf=employee_user.cpf),
        headers=admin_headers
    )
    assert response.status_code == status.HTTP_409_CONFLICT


def test_register_admin_with_shift_is_rejected(client, shift, admin_headers):
    response = client.post(
        "/api/v1/auth/register",
        json=_register_payload(role="admin", shift_id=shift.id),
        headers=admin_headers
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_register_with_unknown_shift_is_not_found(client, admin_headers):
    response = client.post(
        "/api/v1/auth/register",
        json=_register_payload(shift_id=9999),
        headers=admin_headers
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_register_invalid_cpf(client, admin_headers):
    response = client.post(
        "/api/v1/auth/register",
        json=_register_payload(cpf="123"),
        headers=admin_headers
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_employee_cannot_register(client, employee_headers):
    response = client.post("/api/v1/auth/register", json=_register_payload(), headers=employee_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_list_employees_excludes_admins(client, employee_user, other_employee, admin_headers):
    response = client.get("/api/v1/users", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    names = [u["name"] for u in response.json()]
    assert names == sorted([employee_user.name, other_employee.name])


def test_me_returns_current_user(client, employee_user, employee_headers):
    response = client.get("/api/v1/users/me", headers=employee_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["id"] == employee_user.id
    assert data["shift"]["total_minutes"] == 480


def test_update_employee_shift_closes_history(client, db, employee_user, shift, admin_headers):
    db.add(UserShiftHistory(user_id=employee_user.id, shift_id=shift.id, start_date=date(2024, 1, 1)))
    afternoon = Shift(
        name="Tarde",
        start_time="13:00",
        break_start="17:00",
        break_end="18:00",
        end_time="22:00",
        total_minutes=480,
    )
    db.add(afternoon)
    db.commit()

    response = client.put(
        f"/api/v1/users/{employee_user.id}",
        json={"name": "Maria S.", "email": employee_user.email, "shift_id": afternoon.id},
        headers=admin_headers
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["shift_id"] == afternoon.id
    assert response.json()["name"] == "Maria S."

    history = db.query(UserShiftHistory).filter(
        UserShiftHistory.user_id == employee_user.id
    ).order_by(UserShiftHistory.id).all()
    assert len(history) == 2
    assert history[0].end_date == today_local()
    assert history[1].shift_id == afternoon.id
    assert history[1].end_date is None


def test_update_email_taken_is_conflict(client, employee_user, other_employee, admin_headers):
    response = client.put(
        f"/api/v1/users/{employee_user.id}",
        json={"name": employee_user.name, "email": other_employee.email, "shift_id": None},
        headers=admin_headers
    )
    assert response.status_code == status.HTTP_409_CONFLICT


def test_update_unknown_user_is_not_found(client, admin_headers):
    response = client.put(
        "/api/v1/users/9999",
        json={"name": "X", "email": "x@test.com", "shift_id": None},
        headers=admin_headers
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_employee_cascades(client, db, admin_user, employee_user, admin_headers):
    db.add(TimeRecord(user_id=employee_user.id, date=date(2024, 1, 2), time="08:00", type="entry"))
    db.add(AdjustmentRequest(
        user_id=employee_user.id,
        date=date(2024, 1, 2),
        new_time="08:00",
        type="entry",
        reason="late",
    ))
    db.commit()
    user_id = employee_user.id

    response = client.delete(f"/api/v1/users/{user_id}", headers=admin_headers)
    assert response.status_code == status.HTTP_204_NO_CONTENT

    db.expire_all()
    assert db.query(User).filter(User.id == user_id).first() is None
    assert db.query(TimeRecord).filter(TimeRecord.user_id == user_id).count() == 0
    assert db.query(AdjustmentRequest).filter(AdjustmentRequest.user_id == user_id).count() == 0
    assert db.query(AuditLog).filter(AuditLog.action == "USER_DELETE").count() == 1


def test_admin_cannot_be_deleted(client, admin_user, admin_headers):
    response = client.delete(f"/api/v1/users/{admin_user.id}", headers=admin_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_stats(client, db, employee_user, other_employee, admin_headers):
    db.add(TimeRecord(user_id=employee_user.id, date=today_local(), time="08:00", type="entry"))
    db.add(AdjustmentRequest(
        user_id=other_employee.id,
        date=today_local(),
        new_time="08:00",
        type="entry",
        reason="late",
    ))
    db.commit()

    response = client.get("/api/v1/users/stats", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"total_employees": 2, "pending_requests": 1, "present_today": 1}


def test_register_short_password(client, admin_headers):
    response = client.post(
        "/api/v1/auth/register",
        json=_register_payload(password="abc"),
        headers=admin_headers
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
