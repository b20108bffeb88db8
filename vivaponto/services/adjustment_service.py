"""
Adjustment request workflow

pending -> approved | rejected. Both targets are terminal: a request is
resolved exactly once, and only approval writes to the punch ledger.
"""
import logging
from typing import Dict, List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from vivaponto.core.errors import ConflictError, NotFoundError, ValidationFailed
from vivaponto.models.adjustment_request import AdjustmentRequest, AdjustmentStatus
from vivaponto.models.time_record import TimeRecord
from vivaponto.models.user import User
from vivaponto.schemas.adjustment import AdjustmentRequestCreate
from vivaponto.services.audit_service import log_audit
from vivaponto.services.time_record_service import find_record
from vivaponto.utils.datetime_utils import now_utc

logger = logging.getLogger(__name__)


def _to_dict(request: AdjustmentRequest, user: Optional[User] = None) -> Dict:
    user = user or request.user
    return {
        "id": request.id,
        "user_id": request.user_id,
        "date": request.date,
        "old_time": request.old_time,
        "new_time": request.new_time,
        "type": request.type,
        "reason": request.reason,
        "status": request.status,
        "reviewed_by": request.reviewed_by,
        "reviewed_at": request.reviewed_at,
        "created_at": request.created_at,
        "user_name": user.name if user else None,
        "user_email": user.email if user else None,
    }


def submit_request(db: Session, current_user: User, data: AdjustmentRequestCreate) -> AdjustmentRequest:
    """
    Create a pending adjustment request owned by the current user.

    old_time is stored as supplied and is not checked against the ledger.

    Raises:
        ValidationFailed: reason missing or blank
    """
    reason = (data.reason or "").strip()
    if not reason:
        raise ValidationFailed("Required fields: date, new_time, type, reason")

    request = AdjustmentRequest(
        user_id=current_user.id,
        date=data.date,
        old_time=data.old_time or None,
        new_time=data.new_time,
        type=data.type.value,
        reason=reason,
        status=AdjustmentStatus.PENDING.value,
    )
    db.add(request)
    db.commit()
    db.refresh(request)

    log_audit(
        db=db,
        actor_id=current_user.id,
        action="ADJUSTMENT_SUBMIT",
        entity_type="adjustment_requests",
        entity_id=request.id,
        meta={
            "date": request.date,
            "type": request.type,
            "old_time": request.old_time,
            "new_time": request.new_time,
        },
    )
    return request


def get_request(db: Session, request_id: int) -> AdjustmentRequest:
    request = db.query(AdjustmentRequest).filter(AdjustmentRequest.id == request_id).first()
    if not request:
        raise NotFoundError(f"Adjustment request with id {request_id} not found")
    return request


def _ensure_pending(request: AdjustmentRequest) -> None:
    if request.status != AdjustmentStatus.PENDING.value:
        logger.warning(
            "adjustment already processed: request_id=%s status=%s", request.id, request.status
        )
        raise ConflictError(f"Adjustment request was already processed (status {request.status})")


def _swap_status(db: Session, request_id: int, new_status: AdjustmentStatus, admin: User) -> bool:
    """UPDATE ... WHERE status = 'pending'; False when another reviewer got there first"""
    updated = db.query(AdjustmentRequest).filter(
        AdjustmentRequest.id == request_id,
        AdjustmentRequest.status == AdjustmentStatus.PENDING.value
    ).update(
        {
            AdjustmentRequest.status: new_status.value,
            AdjustmentRequest.reviewed_by: admin.id,
            AdjustmentRequest.reviewed_at: now_utc(),
        },
        synchronize_session=False,
    )
    return updated == 1


def approve_request(db: Session, request_id: int, admin: User) -> AdjustmentRequest:
    """
    Approve a pending request and apply it to the punch ledger.

    The punch for (user, date, type) gets the requested time (insert when
    missing, time-only update otherwise), then the status is swapped to
    approved. Both happen in one transaction, so a failed ledger write leaves
    the request pending and a lost status swap leaves the ledger untouched.

    Raises:
        NotFoundError: unknown request id
        ConflictError: request is not pending
    """
    request = get_request(db, request_id)
    _ensure_pending(request)

    existing = find_record(db, request.user_id, request.date, request.type)
    old_ledger_time = existing.time if existing else None
    if existing:
        # Approval corrections do not carry manual-override metadata
        existing.time = request.new_time
        record = existing
    else:
        record = TimeRecord(
            user_id=request.user_id,
            date=request.date,
            time=request.new_time,
            type=request.type,
            edited_by_admin=False,
        )
        db.add(record)

    try:
        db.flush()
        if not _swap_status(db, request.id, AdjustmentStatus.APPROVED, admin):
            db.rollback()
            raise ConflictError("Adjustment request was already processed")
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("adjustment approval lost ledger race: request_id=%s", request_id)
        raise ConflictError("Punch was changed concurrently; try again")

    db.refresh(request)
    db.refresh(record)
    logger.info(
        "adjustment status transition: request_id=%s before=pending after=approved record_id=%s",
        request.id, record.id,
    )

    log_audit(
        db=db,
        actor_id=admin.id,
        action="ADJUSTMENT_APPROVE",
        entity_type="adjustment_requests",
        entity_id=request.id,
        meta={
            "time_record_id": record.id,
            "user_id": request.user_id,
            "date": request.date,
            "type": request.type,
            "ledger_time_before": old_ledger_time,
            "ledger_time_after": request.new_time,
        },
    )
    return request


def reject_request(db: Session, request_id: int, admin: User) -> AdjustmentRequest:
    """
    Reject a pending request. The punch ledger is never touched.

    Raises:
        NotFoundError: unknown request id
        ConflictError: request is not pending
    """
    request = get_request(db, request_id)
    _ensure_pending(request)

    if not _swap_status(db, request.id, AdjustmentStatus.REJECTED, admin):
        db.rollback()
        raise ConflictError("Adjustment request was already processed")
    db.commit()
    db.refresh(request)
    logger.info(
        "adjustment status transition: request_id=%s before=pending after=rejected", request.id
    )

    log_audit(
        db=db,
        actor_id=admin.id,
        action="ADJUSTMENT_REJECT",
        entity_type="adjustment_requests",
        entity_id=request.id,
        meta={"user_id": request.user_id, "date": request.date, "type": request.type},
    )
    return request


def list_requests(
    db: Session,
    current_user: User,
    status_filter: Optional[AdjustmentStatus] = None,
    limit: Optional[int] = None,
) -> List[Dict]:
    """
    List adjustment requests, newest first.

    Employees see only their own requests; admins see everyone's.
    """
    query = db.query(AdjustmentRequest, User).join(User, AdjustmentRequest.user_id == User.id)

    if not current_user.is_admin:
        query = query.filter(AdjustmentRequest.user_id == current_user.id)

    if status_filter is not None:
        query = query.filter(AdjustmentRequest.status == status_filter.value)

    query = query.order_by(AdjustmentRequest.created_at.desc(), AdjustmentRequest.id.desc())
    if limit is not None:
        query = query.limit(limit)

    return [_to_dict(request, user) for request, user in query.all()]


def request_to_dict(request: AdjustmentRequest) -> Dict:
    return _to_dict(request)
