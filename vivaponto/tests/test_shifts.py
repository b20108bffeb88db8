"""
Tests for the shift catalog
"""
from datetime import date
from fastapi import status
from vivaponto.models.user import UserShiftHistory

SHIFT_PAYLOAD = {
    "name": "Integral",
    "start_time": "08:00",
    "break_start": "12:00",
    "break_end": "13:00",
    "end_time": "18:00",
}


def test_create_shift_computes_total(client, admin_headers):
    response = client.post("/api/v1/shifts", json=SHIFT_PAYLOAD, headers=admin_headers)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["total_minutes"] == 540


def test_create_shift_keeps_supplied_total(client, admin_headers):
    response = client.post(
        "/api/v1/shifts",
        json={**SHIFT_PAYLOAD, "total_minutes": 528},
        headers=admin_headers
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["total_minutes"] == 528


def test_create_shift_rejects_non_positive_total(client, admin_headers):
    response = client.post(
        "/api/v1/shifts",
        json={**SHIFT_PAYLOAD, "start_time": "18:00", "end_time": "08:00"},
        headers=admin_headers
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_create_shift_rejects_malformed_time(client, admin_headers):
    response = client.post(
        "/api/v1/shifts",
        json={**SHIFT_PAYLOAD, "end_time": "6pm"},
        headers=admin_headers
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_employee_cannot_create_shift(client, employee_headers):
    response = client.post("/api/v1/shifts", json=SHIFT_PAYLOAD, headers=employee_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_list_shifts_by_name(client, shift, admin_headers):
    client.post("/api/v1/shifts", json={**SHIFT_PAYLOAD, "name": "Alfa"}, headers=admin_headers)

    response = client.get("/api/v1/shifts", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    assert [s["name"] for s in response.json()] == ["Alfa", "Comercial"]


def test_update_shift(client, shift, admin_headers):
    response = client.put(
        f"/api/v1/shifts/{shift.id}",
        json={**SHIFT_PAYLOAD, "name": "Comercial 9h"},
        headers=admin_headers
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "Comercial 9h"
    assert response.json()["total_minutes"] == 540


def test_update_unknown_shift_is_not_found(client, admin_headers):
    response = client.put("/api/v1/shifts/9999", json=SHIFT_PAYLOAD, headers=admin_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_unused_shift(client, admin_headers):
    created = client.post("/api/v1/shifts", json=SHIFT_PAYLOAD, headers=admin_headers).json()

    response = client.delete(f"/api/v1/shifts/{created['id']}", headers=admin_headers)
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert client.get("/api/v1/shifts", headers=admin_headers).json() == []


def test_delete_assigned_shift_is_conflict(client, shift, employee_user, admin_headers):
    response = client.delete(f"/api/v1/shifts/{shift.id}", headers=admin_headers)
    assert response.status_code == status.HTTP_409_CONFLICT


def test_delete_shift_in_history_is_conflict(client, db, shift, other_employee, admin_headers):
    db.add(UserShiftHistory(
        user_id=other_employee.id,
        shift_id=shift.id,
        start_date=date(2023, 1, 1),
        end_date=date(2023, 12, 31),
    ))
    db.commit()

    response = client.delete(f"/api/v1/shifts/{shift.id}", headers=admin_headers)
    assert response.status_code == status.HTTP_409_CONFLICT
