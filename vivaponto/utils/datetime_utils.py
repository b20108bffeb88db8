"""
Timezone-aware datetime helpers.
- Audit/review timestamps are stored in UTC.
- Punch date and clock time use the wall clock of settings.APP_TIMEZONE (America/Sao_Paulo by default).
"""
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo

from vivaponto.core.config import settings

UTC = timezone.utc

PERIODS = ("today", "week", "month", "year", "custom")

WEEKDAY_LABELS = ("Seg", "Ter", "Qua", "Qui", "Sex", "Sáb", "Dom")


def local_tz() -> ZoneInfo:
    return ZoneInfo(settings.APP_TIMEZONE)


def now_utc() -> datetime:
    """Current time in UTC (timezone-aware). Use for reviewed_at, edited_at, created_at."""
    return datetime.now(UTC)


def now_local() -> datetime:
    """Current wall-clock time in the configured timezone."""
    return datetime.now(local_tz())


def today_local() -> date:
    return now_local().date()


def hhmm(dt: datetime) -> str:
    """Clock time truncated to the minute."""
    return dt.strftime("%H:%M")


def generate_date_range(start: date, end: date) -> List[date]:
    """Every calendar date in [start, end], ascending; empty when start > end."""
    days = (end - start).days
    return [start + timedelta(days=offset) for offset in range(days + 1)]


def week_start(day: date) -> date:
    """Monday of the week containing day (Sunday belongs to the week that started 6 days before)."""
    return day - timedelta(days=day.isoweekday() - 1)


def resolve_period(
    period: str,
    today: Optional[date] = None,
    custom_start: Optional[date] = None,
    custom_end: Optional[date] = None,
) -> Tuple[date, date]:
    """
    Translate a named period into an inclusive (start, end) range ending today.

    Unknown periods, and "custom" without both bounds, fall back to today.
    """
    today = today or today_local()

    if period == "week":
        return week_start(today), today
    if period == "month":
        return today.replace(day=1), today
    if period == "year":
        return today.replace(month=1, day=1), today
    if period == "custom" and custom_start and custom_end:
        return custom_start, custom_end
    return today, today


def weekday_label(day: date) -> str:
    """Short pt-BR weekday name used on the printed mirror."""
    return WEEKDAY_LABELS[day.weekday()]
