"""
Shift catalog service
"""
import logging
from typing import List
from sqlalchemy.orm import Session
from vivaponto.core.errors import ConflictError, NotFoundError, ValidationFailed
from vivaponto.models.shift import Shift
from vivaponto.models.user import User, UserShiftHistory
from vivaponto.schemas.shift import ShiftCreate, ShiftUpdate
from vivaponto.services.audit_service import log_audit
from vivaponto.utils.time_calc import shift_total_minutes

logger = logging.getLogger(__name__)


def _resolve_total_minutes(data: ShiftCreate) -> int:
    """
    Total expected minutes for the shift.

    The boundary times must describe a positive working day; a supplied
    total_minutes is stored as given, otherwise the computed one is used.
    """
    computed = shift_total_minutes(data.start_time, data.break_start, data.break_end, data.end_time)
    if computed <= 0:
        raise ValidationFailed("Shift times must add up to a positive number of minutes")
    return data.total_minutes if data.total_minutes is not None else computed


def list_shifts(db: Session) -> List[Shift]:
    return db.query(Shift).order_by(Shift.name).all()


def get_shift(db: Session, shift_id: int) -> Shift:
    shift = db.query(Shift).filter(Shift.id == shift_id).first()
    if not shift:
        raise NotFoundError(f"Shift with id {shift_id} not found")
    return shift


def create_shift(db: Session, data: ShiftCreate, actor: User) -> Shift:
    shift = Shift(
        name=data.name,
        start_time=data.start_time,
        break_start=data.break_start,
        break_end=data.break_end,
        end_time=data.end_time,
        total_minutes=_resolve_total_minutes(data),
    )
    db.add(shift)
    db.commit()
    db.refresh(shift)

    log_audit(
        db=db,
        actor_id=actor.id,
        action="SHIFT_CREATE",
        entity_type="shifts",
        entity_id=shift.id,
        meta=data.model_dump(),
    )
    return shift


def update_shift(db: Session, shift_id: int, data: ShiftUpdate, actor: User) -> Shift:
    shift = get_shift(db, shift_id)
    total = _resolve_total_minutes(data)

    shift.name = data.name
    shift.start_time = data.start_time
    shift.break_start = data.break_start
    shift.break_end = data.break_end
    shift.end_time = data.end_time
    shift.total_minutes = total
    db.commit()
    db.refresh(shift)

    log_audit(
        db=db,
        actor_id=actor.id,
        action="SHIFT_UPDATE",
        entity_type="shifts",
        entity_id=shift.id,
        meta=data.model_dump(),
    )
    return shift


def delete_shift(db: Session, shift_id: int, actor: User) -> None:
    """
    Delete a shift.

    Shifts still assigned to a user, or present in someone's shift history,
    cannot be deleted (409).
    """
    shift = get_shift(db, shift_id)

    in_use = db.query(User.id).filter(User.shift_id == shift_id).first()
    in_history = db.query(UserShiftHistory.id).filter(UserShiftHistory.shift_id == shift_id).first()
    if in_use or in_history:
        logger.warning("shift delete refused: shift_id=%s still referenced", shift_id)
        raise ConflictError("Shift is assigned to employees and cannot be deleted")

    name = shift.name
    db.delete(shift)
    db.commit()

    log_audit(
        db=db,
        actor_id=actor.id,
        action="SHIFT_DELETE",
        entity_type="shifts",
        entity_id=shift_id,
        meta={"name": name},
    )
