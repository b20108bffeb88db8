"""
Tests for clock-in sequencing and the punch ledger endpoints
"""
from datetime import date, datetime
import pytest
from fastapi import status
from vivaponto.core.errors import ConflictError
from vivaponto.models.audit_log import AuditLog
from vivaponto.models.time_record import PunchType, TimeRecord
from vivaponto.services.time_record_service import (
    aggregate_by_date,
    clock_in,
    get_today,
    next_punch_type,
)
from vivaponto.utils.datetime_utils import local_tz, today_local


def _at(hour, minute, day=date(2024, 1, 2)):
    return datetime(day.year, day.month, day.day, hour, minute, 42, tzinfo=local_tz())


def test_clock_in_follows_daily_sequence(db, employee_user):
    """Four clock-ins record entry, break_start, break_end and exit in order"""
    times = [(8, 0), (12, 0), (13, 0), (17, 0)]
    records = [clock_in(db, employee_user, now=_at(h, m)) for h, m in times]

    assert [r.type for r in records] == [t.value for t in (
        PunchType.ENTRY, PunchType.BREAK_START, PunchType.BREAK_END, PunchType.EXIT
    )]
    assert [r.time for r in records] == ["08:00", "12:00", "13:00", "17:00"]
    assert all(r.date == date(2024, 1, 2) for r in records)
    assert all(r.edited_by_admin is False for r in records)


def test_fifth_clock_in_is_conflict(db, employee_user):
    for h in (8, 12, 13, 17):
        clock_in(db, employee_user, now=_at(h, 0))

    with pytest.raises(ConflictError):
        clock_in(db, employee_user, now=_at(18, 0))

    assert db.query(TimeRecord).filter(TimeRecord.user_id == employee_user.id).count() == 4


def test_next_punch_type_is_idempotent(db, employee_user):
    day = date(2024, 1, 2)
    assert next_punch_type(db, employee_user.id, day) == PunchType.ENTRY
    assert next_punch_type(db, employee_user.id, day) == PunchType.ENTRY

    clock_in(db, employee_user, now=_at(8, 0))
    assert next_punch_type(db, employee_user.id, day) == PunchType.BREAK_START
    assert next_punch_type(db, employee_user.id, day) == PunchType.BREAK_START


def test_next_punch_type_fills_first_gap(db, employee_user):
    """A day with only break_start (e.g. a manual add) still starts at entry"""
    day = date(2024, 1, 2)
    db.add(TimeRecord(user_id=employee_user.id, date=day, time="12:00", type=PunchType.BREAK_START.value))
    db.commit()

    assert next_punch_type(db, employee_user.id, day) == PunchType.ENTRY
    record = clock_in(db, employee_user, now=_at(8, 10))
    assert record.type == PunchType.ENTRY.value
    assert next_punch_type(db, employee_user.id, day) == PunchType.BREAK_END


def test_next_punch_type_new_day_starts_over(db, employee_user):
    for h in (8, 12, 13, 17):
        clock_in(db, employee_user, now=_at(h, 0))

    record = clock_in(db, employee_user, now=_at(8, 0, day=date(2024, 1, 3)))
    assert record.type == PunchType.ENTRY.value


def test_clock_in_is_audited(db, employee_user):
    record = clock_in(db, employee_user, now=_at(8, 0))

    audit = db.query(AuditLog).filter(AuditLog.action == "CLOCK_IN").first()
    assert audit is not None
    assert audit.actor_id == employee_user.id
    assert audit.entity_id == record.id


def test_get_today_projection(db, employee_user):
    now = _at(12, 5)
    clock_in(db, employee_user, now=_at(8, 0))
    clock_in(db, employee_user, now=now)

    today = get_today(db, employee_user, now=now)
    assert today["entry"] == "08:00"
    assert today["break_start"] == "12:05"
    assert today["break_end"] is None
    assert today["exit"] is None
    assert today["next_type"] == PunchType.BREAK_END
    assert today["complete"] is False
    assert today["id"] is not None


def test_get_today_empty(db, employee_user):
    today = get_today(db, employee_user, now=_at(7, 0))
    assert today["id"] is None
    assert today["entry"] is None
    assert today["next_type"] == PunchType.ENTRY


def test_aggregate_by_date_folds_types(db, employee_user):
    for h in (8, 12, 13, 17):
        clock_in(db, employee_user, now=_at(h, 0))
    clock_in(db, employee_user, now=_at(9, 0, day=date(2024, 1, 4)))

    aggregates = aggregate_by_date(db, employee_user.id, date(2024, 1, 1), date(2024, 1, 7))
    assert set(aggregates) == {date(2024, 1, 2), date(2024, 1, 4)}
    assert aggregates[date(2024, 1, 2)]["exit"] == "17:00"
    assert aggregates[date(2024, 1, 4)]["entry"] == "09:00"
    assert aggregates[date(2024, 1, 4)]["exit"] is None


def test_clock_in_endpoint(client, employee_headers):
    response = client.post("/api/v1/time-records", headers=employee_headers)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["type"] == "entry"
    assert data["date"] == today_local().isoformat()
    assert len(data["time"]) == 5

    response = client.get("/api/v1/time-records/today", headers=employee_headers)
    assert response.status_code == status.HTTP_200_OK
    today = response.json()
    assert today["entry"] == data["time"]
    assert today["next_type"] == "break_start"


def test_clock_in_endpoint_conflict_after_four_punches(client, employee_headers):
    for _ in range(4):
        assert client.post("/api/v1/time-records", headers=employee_headers).status_code == 201

    response = client.post("/api/v1/time-records", headers=employee_headers)
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error"] is True


def test_clock_in_requires_auth(client):
    response = client.post("/api/v1/time-records")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_employee_lists_only_own_records(client, db, employee_user, other_employee, employee_headers):
    db.add_all([
        TimeRecord(user_id=employee_user.id, date=date(2024, 1, 2), time="08:00", type="entry"),
        TimeRecord(user_id=other_employee.id, date=date(2024, 1, 2), time="09:00", type="entry"),
    ])
    db.commit()

    response = client.get(
        f"/api/v1/time-records?user_id={other_employee.id}",
        headers=employee_headers
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert len(data) == 1
    assert data[0]["user_id"] == employee_user.id
    assert data[0]["user_name"] == employee_user.name


def test_admin_lists_records_by_user_newest_first(client, db, employee_user, other_employee, admin_headers):
    db.add_all([
        TimeRecord(user_id=employee_user.id, date=date(2024, 1, 2), time="08:00", type="entry"),
        TimeRecord(user_id=employee_user.id, date=date(2024, 1, 3), time="08:00", type="entry"),
        TimeRecord(user_id=employee_user.id, date=date(2024, 1, 3), time="12:00", type="break_start"),
        TimeRecord(user_id=other_employee.id, date=date(2024, 1, 2), time="09:00", type="entry"),
    ])
    db.commit()

    response = client.get(f"/api/v1/time-records?user_id={employee_user.id}", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [(r["date"], r["time"]) for r in data] == [
        ("2024-01-03", "12:00"),
        ("2024-01-03", "08:00"),
        ("2024-01-02", "08:00"),
    ]


def test_list_records_rejects_inverted_range(client, employee_headers):
    response = client.get(
        "/api/v1/time-records?start_date=2024-01-10&end_date=2024-01-01",
        headers=employee_headers
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_raw_report_only_dates_with_punches(client, db, employee_user, employee_headers):
    db.add_all([
        TimeRecord(user_id=employee_user.id, date=date(2024, 1, 2), time="08:00", type="entry"),
        TimeRecord(user_id=employee_user.id, date=date(2024, 1, 2), time="17:00", type="exit"),
        TimeRecord(user_id=employee_user.id, date=date(2024, 1, 5), time="08:30", type="entry"),
    ])
    db.commit()

    response = client.get(
        "/api/v1/time-records/report?start_date=2024-01-01&end_date=2024-01-07",
        headers=employee_headers
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [row["date"] for row in data] == ["2024-01-02", "2024-01-05"]
    assert data[0]["exit"] == "17:00"
    assert data[1]["exit"] is None


def test_list_records_applies_single_bound(client, db, employee_user, employee_headers):
    db.add_all([
        TimeRecord(user_id=employee_user.id, date=date(2024, 1, 2), time="08:00", type="entry"),
        TimeRecord(user_id=employee_user.id, date=date(2024, 1, 9), time="08:00", type="entry"),
    ])
    db.commit()

    response = client.get("/api/v1/time-records?start_date=2024-01-05", headers=employee_headers)
    assert response.status_code == status.HTTP_200_OK
    assert [r["date"] for r in response.json()] == ["2024-01-09"]

    response = client.get("/api/v1/time-records?end_date=2024-01-05", headers=employee_headers)
    assert [r["date"] for r in response.json()] == ["2024-01-02"]
