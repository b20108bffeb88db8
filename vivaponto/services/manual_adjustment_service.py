"""
Manual override service - admin add/edit/delete of punches

Every operation requires a justification and bypasses the adjustment
request workflow entirely.
"""
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from vivaponto.core.errors import ConflictError, NotFoundError, ValidationFailed
from vivaponto.models.time_record import TimeRecord
from vivaponto.models.user import User
from vivaponto.schemas.manual_adjustment import ManualAddRequest
from vivaponto.services.audit_service import log_audit
from vivaponto.services.time_record_service import find_record
from vivaponto.services.user_service import get_user
from vivaponto.utils.datetime_utils import now_utc

logger = logging.getLogger(__name__)


def _require_justification(justification) -> str:
    text = (justification or "").strip()
    if not text:
        raise ValidationFailed("Justification is required for manual adjustments")
    return text


def _get_record(db: Session, record_id: int) -> TimeRecord:
    record = db.query(TimeRecord).filter(TimeRecord.id == record_id).first()
    if not record:
        raise NotFoundError(f"Time record with id {record_id} not found")
    return record


def manual_add(db: Session, admin: User, data: ManualAddRequest) -> TimeRecord:
    """
    Insert a punch for an arbitrary (user, date, type).

    Raises:
        ValidationFailed: blank justification
        NotFoundError: unknown user
        ConflictError: a punch of that type already exists on that date (use edit)
    """
    justification = _require_justification(data.justification)
    get_user(db, data.user_id)

    if find_record(db, data.user_id, data.date, data.type.value):
        raise ConflictError("A punch of this type already exists for this date. Use edit instead.")

    record = TimeRecord(
        user_id=data.user_id,
        date=data.date,
        time=data.time,
        type=data.type.value,
        edited_by_admin=True,
        admin_id=admin.id,
        admin_justification=justification,
        edited_at=now_utc(),
    )
    db.add(record)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("A punch of this type already exists for this date. Use edit instead.")
    db.refresh(record)
    logger.info(
        "manual punch added: record_id=%s user_id=%s date=%s type=%s admin_id=%s justification=%r",
        record.id, record.user_id, record.date, record.type, admin.id, justification,
    )

    log_audit(
        db=db,
        actor_id=admin.id,
        action="MANUAL_ADD",
        entity_type="time_records",
        entity_id=record.id,
        meta={
            "user_id": record.user_id,
            "date": record.date,
            "type": record.type,
            "time": record.time,
            "justification": justification,
        },
    )
    return record


def manual_edit(db: Session, admin: User, record_id: int, time: str, justification) -> TimeRecord:
    """
    Overwrite a punch's time and stamp the manual-edit metadata.

    Raises:
        ValidationFailed: blank justification
        NotFoundError: unknown record id
    """
    justification = _require_justification(justification)
    record = _get_record(db, record_id)
    previous_time = record.time

    record.time = time
    record.edited_by_admin = True
    record.admin_id = admin.id
    record.admin_justification = justification
    record.edited_at = now_utc()
    db.commit()
    db.refresh(record)
    logger.info(
        "manual punch edited: record_id=%s %s -> %s admin_id=%s justification=%r",
        record.id, previous_time, record.time, admin.id, justification,
    )

    log_audit(
        db=db,
        actor_id=admin.id,
        action="MANUAL_EDIT",
        entity_type="time_records",
        entity_id=record.id,
        meta={
            "user_id": record.user_id,
            "date": record.date,
            "type": record.type,
            "time_before": previous_time,
            "time_after": record.time,
            "justification": justification,
        },
    )
    return record


def manual_delete(db: Session, admin: User, record_id: int, justification) -> None:
    """
    Delete a punch. The justification survives only in the audit log.

    Raises:
        ValidationFailed: blank justification
        NotFoundError: unknown record id
    """
    justification = _require_justification(justification)
    record = _get_record(db, record_id)
    meta = {
        "user_id": record.user_id,
        "date": record.date,
        "type": record.type,
        "time": record.time,
        "justification": justification,
    }

    db.delete(record)
    db.commit()
    logger.info(
        "manual punch deleted: record_id=%s admin_id=%s justification=%r", record_id, admin.id, justification
    )

    log_audit(
        db=db,
        actor_id=admin.id,
        action="MANUAL_DELETE",
        entity_type="time_records",
        entity_id=record_id,
        meta=meta,
    )
