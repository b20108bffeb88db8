"""
Report service - hour bank per day, period totals, mirror and dashboard
"""
import logging
import math
from datetime import date
from typing import Dict, List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from vivaponto.core.config import settings
from vivaponto.core.errors import ValidationFailed
from vivaponto.models.adjustment_request import AdjustmentStatus
from vivaponto.models.time_record import TimeRecord, PunchType
from vivaponto.models.user import User
from vivaponto.services.adjustment_service import list_requests
from vivaponto.services.time_record_service import aggregate_by_date
from vivaponto.services.user_service import get_stats, get_user
from vivaponto.utils.datetime_utils import generate_date_range, today_local, weekday_label
from vivaponto.utils.time_calc import balance, expected_minutes, format_minutes, worked_minutes

logger = logging.getLogger(__name__)

# Columns of the CSV export, in order
CSV_HEADERS = [
    "date",
    "weekday",
    "entry",
    "break_start",
    "break_end",
    "exit",
    "worked",
    "expected",
    "balance",
    "worked_minutes",
    "expected_minutes",
    "balance_minutes",
]


def resolve_report_target(db: Session, current_user: User, user_id: Optional[int]) -> User:
    """Employees report on themselves only; admins pick any user (default: themselves)."""
    if user_id is None or user_id == current_user.id:
        return current_user
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only view your own report"
        )
    return get_user(db, user_id)


def _expected_for_day(day: date, has_punches: bool, daily_expected: int) -> int:
    if (
        settings.REPORT_ZERO_PUNCH_DAYS == "skip_weekends"
        and not has_punches
        and day.weekday() >= 5
    ):
        return 0
    return daily_expected


def build_rows(user: User, start_date: date, end_date: date, aggregates: Dict[date, Dict]) -> List[Dict]:
    """
    One row per calendar date in [start_date, end_date], punches or not.

    Days without punches get null times, zero worked minutes and the user's
    full expected minutes (subject to REPORT_ZERO_PUNCH_DAYS).
    """
    daily_expected = expected_minutes(user.shift, default=settings.DEFAULT_EXPECTED_MINUTES)
    rows = []
    for day in generate_date_range(start_date, end_date):
        record = aggregates.get(day)
        times = record or {}
        worked = worked_minutes(
            times.get("entry"),
            times.get("break_start"),
            times.get("break_end"),
            times.get("exit"),
        )
        expected = _expected_for_day(day, record is not None, daily_expected)
        day_balance = balance(worked, expected)
        rows.append({
            "date": day,
            "weekday": weekday_label(day),
            "entry": times.get("entry"),
            "break_start": times.get("break_start"),
            "break_end": times.get("break_end"),
            "exit": times.get("exit"),
            "worked_minutes": worked,
            "expected_minutes": expected,
            "balance_minutes": day_balance,
            "worked": format_minutes(worked),
            "expected": format_minutes(expected),
            "balance": format_minutes(day_balance),
        })
    return rows


def compute_totals(rows: List[Dict]) -> Dict:
    worked = sum(row["worked_minutes"] for row in rows)
    expected = sum(row["expected_minutes"] for row in rows)
    total_balance = sum(row["balance_minutes"] for row in rows)
    return {
        "worked_minutes": worked,
        "expected_minutes": expected,
        "balance_minutes": total_balance,
        "worked": format_minutes(worked),
        "expected": format_minutes(expected),
        "balance": format_minutes(total_balance),
    }


def build_report(
    db: Session,
    current_user: User,
    user_id: Optional[int],
    start_date: date,
    end_date: date,
) -> Dict:
    """
    Calendar-complete report for one user over an inclusive date range.

    Raises:
        ValidationFailed: start_date after end_date, or a range longer than REPORT_MAX_DAYS
        HTTPException: 403 when an employee asks for someone else
        NotFoundError: unknown user
    """
    if start_date > end_date:
        raise ValidationFailed("start_date must be less than or equal to end_date")
    if (end_date - start_date).days + 1 > settings.REPORT_MAX_DAYS:
        raise ValidationFailed(f"Report range cannot exceed {settings.REPORT_MAX_DAYS} days")

    user = resolve_report_target(db, current_user, user_id)
    aggregates = aggregate_by_date(db, user.id, start_date, end_date)
    rows = build_rows(user, start_date, end_date, aggregates)
    logger.debug(
        "report built: user_id=%s range=%s..%s days=%s with_punches=%s",
        user.id, start_date, end_date, len(rows), len(aggregates),
    )
    return {
        "user": user,
        "start_date": start_date,
        "end_date": end_date,
        "rows": rows,
        "totals": compute_totals(rows),
    }


def paginate_report(report: Dict, page: int = 1, page_size: Optional[int] = None) -> Dict:
    """Flat table view: totals cover the whole period, rows only the requested page."""
    page_size = page_size or settings.REPORT_PAGE_SIZE
    rows = report["rows"]
    total_pages = max(1, math.ceil(len(rows) / page_size))
    offset = (page - 1) * page_size
    return {
        "user_id": report["user"].id,
        "start_date": report["start_date"],
        "end_date": report["end_date"],
        "rows": rows[offset:offset + page_size],
        "totals": report["totals"],
        "page": page,
        "page_size": page_size,
        "total_rows": len(rows),
        "total_pages": total_pages,
    }


def mirror_report(report: Dict) -> Dict:
    """Printable timesheet: employee and shift header above every day of the period."""
    user = report["user"]
    return {
        "employee": {"id": user.id, "name": user.name, "cpf": user.cpf, "email": user.email},
        "shift": user.shift,
        "start_date": report["start_date"],
        "end_date": report["end_date"],
        "rows": report["rows"],
        "totals": report["totals"],
    }


def csv_rows(report: Dict) -> List[Dict]:
    """Report rows plus a trailing totals line, keyed by CSV_HEADERS"""
    rows = [dict(row, date=row["date"].isoformat()) for row in report["rows"]]
    totals = report["totals"]
    rows.append({
        "date": "TOTAL",
        "worked": totals["worked"],
        "expected": totals["expected"],
        "balance": totals["balance"],
        "worked_minutes": totals["worked_minutes"],
        "expected_minutes": totals["expected_minutes"],
        "balance_minutes": totals["balance_minutes"],
    })
    return rows


def present_today(db: Session, today: Optional[date] = None) -> List[Dict]:
    """Users with an entry punch today, earliest arrival first"""
    today = today or today_local()
    results = db.query(TimeRecord, User).join(User, TimeRecord.user_id == User.id).filter(
        TimeRecord.date == today,
        TimeRecord.type == PunchType.ENTRY.value
    ).order_by(TimeRecord.time, User.name).all()
    return [
        {"user_id": user.id, "name": user.name, "entry": record.time}
        for record, user in results
    ]


def dashboard_summary(db: Session, admin: User, today: Optional[date] = None) -> Dict:
    """Admin landing page: counters, latest pending requests and who is in today."""
    today = today or today_local()
    summary = get_stats(db, today)
    summary["latest_pending"] = list_requests(
        db,
        admin,
        status_filter=AdjustmentStatus.PENDING,
        limit=settings.DASHBOARD_PENDING_LIMIT,
    )
    summary["present"] = present_today(db, today)
    return summary
