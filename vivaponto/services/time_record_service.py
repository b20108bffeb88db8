"""
Punch ledger service - clock-in, today projection and record queries
"""
import logging
from datetime import date, datetime
from typing import Dict, List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from vivaponto.core.errors import ConflictError, ValidationFailed
from vivaponto.models.time_record import TimeRecord, PunchType, PUNCH_SEQUENCE
from vivaponto.models.user import User
from vivaponto.services.audit_service import log_audit
from vivaponto.utils.datetime_utils import hhmm, now_local

logger = logging.getLogger(__name__)


def get_records_for_day(db: Session, user_id: int, day: date) -> List[TimeRecord]:
    """All punches of a user on one day, in creation order"""
    return db.query(TimeRecord).filter(
        TimeRecord.user_id == user_id,
        TimeRecord.date == day
    ).order_by(TimeRecord.created_at, TimeRecord.id).all()


def find_record(db: Session, user_id: int, day: date, punch_type: str) -> Optional[TimeRecord]:
    """The punch for a (user, date, type) triple, if any"""
    return db.query(TimeRecord).filter(
        TimeRecord.user_id == user_id,
        TimeRecord.date == day,
        TimeRecord.type == punch_type
    ).first()


def next_punch_type(db: Session, user_id: int, day: date) -> Optional[PunchType]:
    """
    First punch type missing on the day, scanning entry -> break_start -> break_end -> exit.

    Returns None when all four punches exist. Read-only, so repeated calls
    without a clock-in in between return the same type.
    """
    present = {record.type for record in get_records_for_day(db, user_id, day)}
    for punch_type in PUNCH_SEQUENCE:
        if punch_type.value not in present:
            return punch_type
    return None


def clock_in(db: Session, current_user: User, now: Optional[datetime] = None) -> TimeRecord:
    """
    Record the next punch of the day for the current user.

    The punch is stamped with the server's local clock truncated to the minute;
    existing punches are never overwritten.

    Raises:
        ConflictError: all four punches already exist today, or a concurrent
            clock-in stored the same type first
    """
    now = now or now_local()
    day = now.date()

    punch_type = next_punch_type(db, current_user.id, day)
    if punch_type is None:
        logger.warning("clock-in refused: user_id=%s date=%s already complete", current_user.id, day)
        raise ConflictError("All punches for today have already been recorded")

    record = TimeRecord(
        user_id=current_user.id,
        date=day,
        time=hhmm(now),
        type=punch_type.value,
        edited_by_admin=False,
    )
    db.add(record)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("clock-in race: user_id=%s date=%s type=%s", current_user.id, day, punch_type.value)
        raise ConflictError(f"Punch '{punch_type.value}' was already recorded for today")
    db.refresh(record)

    log_audit(
        db=db,
        actor_id=current_user.id,
        action="CLOCK_IN",
        entity_type="time_records",
        entity_id=record.id,
        meta={"date": day, "time": record.time, "type": record.type},
    )
    return record


def get_today(db: Session, current_user: User, now: Optional[datetime] = None) -> Dict:
    """
    Fold today's punches into one record for display.

    id and created_at come from the first row encountered; the typed fields
    are None when the punch is missing.
    """
    now = now or now_local()
    day = now.date()
    records = get_records_for_day(db, current_user.id, day)

    projection = {
        "id": None,
        "user_id": current_user.id,
        "date": day,
        "entry": None,
        "break_start": None,
        "break_end": None,
        "exit": None,
        "created_at": None,
    }
    for record in records:
        if record.type in (t.value for t in PUNCH_SEQUENCE):
            projection[record.type] = record.time
        if projection["id"] is None:
            projection["id"] = record.id
        if projection["created_at"] is None:
            projection["created_at"] = record.created_at

    next_type = next((t for t in PUNCH_SEQUENCE if projection[t.value] is None), None)
    projection["next_type"] = next_type
    projection["complete"] = next_type is None
    return projection


def list_records(
    db: Session,
    current_user: User,
    user_id: Optional[int] = None,
    day: Optional[date] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[TimeRecord]:
    """
    List punches with role-based scoping

    - admin: everyone, optionally filtered by user_id
    - employee: only their own rows (user_id is ignored)

    Ordered newest date first, then latest time first.
    """
    query = db.query(TimeRecord)

    if current_user.is_admin:
        if user_id is not None:
            query = query.filter(TimeRecord.user_id == user_id)
    else:
        query = query.filter(TimeRecord.user_id == current_user.id)

    if day is not None:
        query = query.filter(TimeRecord.date == day)

    if start_date is not None and end_date is not None and start_date > end_date:
        raise ValidationFailed("start_date must be less than or equal to end_date")
    if start_date is not None:
        query = query.filter(TimeRecord.date >= start_date)
    if end_date is not None:
        query = query.filter(TimeRecord.date <= end_date)

    return query.order_by(TimeRecord.date.desc(), TimeRecord.time.desc()).all()


def get_day_records(db: Session, user_id: int, day: date) -> List[TimeRecord]:
    """Admin view of one user's punches for a day, earliest clock time first"""
    return db.query(TimeRecord).filter(
        TimeRecord.user_id == user_id,
        TimeRecord.date == day
    ).order_by(TimeRecord.time).all()


def aggregate_by_date(db: Session, user_id: int, start_date: date, end_date: date) -> Dict[date, Dict]:
    """
    Per-date fold of the four typed times for a user over [start_date, end_date].

    Dates without punches are absent from the result.
    """
    rows = db.query(TimeRecord).filter(
        TimeRecord.user_id == user_id,
        TimeRecord.date >= start_date,
        TimeRecord.date <= end_date
    ).all()

    aggregates: Dict[date, Dict] = {}
    for record in rows:
        day = aggregates.setdefault(record.date, {
            "date": record.date,
            "entry": None,
            "break_start": None,
            "break_end": None,
            "exit": None,
        })
        if record.type in day:
            day[record.type] = record.time
    return aggregates
