"""
Worked-time arithmetic over "HH:MM" strings.

Every function here is total: malformed or missing input degrades to NaN,
zero or a neutral display value and never raises. Reports run these over
days with partial or absent punches.
"""
import math
from typing import Optional, Union

Number = Union[int, float]

DEFAULT_EXPECTED_MINUTES = 480


def time_to_minutes(value: Optional[str]) -> float:
    """Minutes since midnight for "HH:MM", or NaN when value is empty or malformed."""
    if not value or not isinstance(value, str):
        return math.nan

    parts = value.split(":")
    if len(parts) != 2:
        return math.nan

    hours, minutes = (part.strip() for part in parts)
    # ASCII digits only; int() would also take "1_0" or other scripts' digits
    if not all(part.isascii() and part.isdigit() for part in (hours, minutes)):
        return math.nan

    return int(hours) * 60 + int(minutes)


def _is_missing(value: Optional[Number]) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def worked_minutes(
    entry: Optional[str],
    break_start: Optional[str],
    break_end: Optional[str],
    exit: Optional[str],
) -> int:
    """
    Net minutes between entry and exit, less the break when it is valid.

    The break is subtracted only when both boundaries parse and
    break_end > break_start; otherwise it is ignored. The result is floored at 0.
    """
    if not entry or not exit:
        return 0

    entry_minutes = time_to_minutes(entry)
    exit_minutes = time_to_minutes(exit)
    if math.isnan(entry_minutes) or math.isnan(exit_minutes):
        return 0

    total = exit_minutes - entry_minutes

    if break_start and break_end:
        break_start_minutes = time_to_minutes(break_start)
        break_end_minutes = time_to_minutes(break_end)
        if not math.isnan(break_start_minutes) and not math.isnan(break_end_minutes):
            break_duration = break_end_minutes - break_start_minutes
            if break_duration > 0:
                total -= break_duration

    return int(total) if total > 0 else 0


def shift_total_minutes(start: str, break_start: str, break_end: str, end: str) -> int:
    """(break_start - start) + (end - break_end); 0 when any boundary is malformed."""
    values = [time_to_minutes(v) for v in (start, break_start, break_end, end)]
    if any(math.isnan(v) for v in values):
        return 0
    start_m, break_start_m, break_end_m, end_m = values
    return int((break_start_m - start_m) + (end_m - break_end_m))


def expected_minutes(shift, default: int = DEFAULT_EXPECTED_MINUTES) -> int:
    """Shift's daily total; a user with no shift is expected to work a standard day."""
    if shift is None:
        return default
    total = getattr(shift, "total_minutes", None)
    if total is None and isinstance(shift, dict):
        total = shift.get("total_minutes")
    try:
        return int(total)
    except (TypeError, ValueError):
        return default


def balance(worked: Optional[Number], expected: Optional[Number]) -> int:
    """worked - expected, or 0 when expected is zero or absent."""
    if _is_missing(worked) or _is_missing(expected) or not expected:
        return 0
    return int(worked - expected)


def format_minutes(minutes: Optional[Number]) -> str:
    """Render minutes as "Hh MMm", signed only when negative; "--" when missing."""
    if _is_missing(minutes):
        return "--"

    minutes = int(minutes)
    hours, mins = divmod(abs(minutes), 60)
    sign = "-" if minutes < 0 else ""
    return f"{sign}{hours}h {mins:02d}m"
