"""
User service - registration, employee maintenance and shift history
"""
import logging
from datetime import date
from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from vivaponto.core.errors import ConflictError, NotFoundError, ValidationFailed
from vivaponto.core.security import hash_password, verify_password
from vivaponto.models.adjustment_request import AdjustmentRequest, AdjustmentStatus
from vivaponto.models.time_record import TimeRecord, PunchType
from vivaponto.models.user import User, Role, UserShiftHistory
from vivaponto.schemas.user import UserCreate, UserUpdate
from vivaponto.services.audit_service import log_audit
from vivaponto.services.shift_service import get_shift
from vivaponto.utils.datetime_utils import today_local

logger = logging.getLogger(__name__)


def authenticate(db: Session, email: str, password: str) -> User:
    """
    Identity check for login.

    Raises:
        HTTPException: 401 for unknown email or wrong password (same message for both)
    """
    user = db.query(User).filter(User.email == email.strip().lower()).first()
    if not user or not verify_password(password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )
    return user


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError(f"User with id {user_id} not found")
    return user


def get_employee(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id, User.role == Role.EMPLOYEE.value).first()
    if not user:
        raise NotFoundError(f"Employee with id {user_id} not found")
    return user


def _ensure_unique(db: Session, email: str, cpf: Optional[str] = None, exclude_id: Optional[int] = None) -> None:
    query = db.query(User).filter(User.email == email)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    if query.first():
        raise ConflictError("Email already in use")

    if cpf is not None:
        query = db.query(User).filter(User.cpf == cpf)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        if query.first():
            raise ConflictError("CPF already registered")


def _record_shift_change(db: Session, user: User, new_shift_id: Optional[int], on: date) -> None:
    """Close the open history interval and open a new one starting on the given day."""
    open_entry = db.query(UserShiftHistory).filter(
        UserShiftHistory.user_id == user.id,
        UserShiftHistory.end_date.is_(None)
    ).first()
    if open_entry:
        open_entry.end_date = on

    if new_shift_id is not None:
        db.add(UserShiftHistory(user_id=user.id, shift_id=new_shift_id, start_date=on))

    logger.info(
        "shift change: user_id=%s before=%s after=%s from=%s",
        user.id, user.shift_id, new_shift_id, on,
    )


def register_user(db: Session, data: UserCreate, actor: Optional[User] = None) -> User:
    """
    Create a user account.

    Only employees carry a shift; a shift on an admin is rejected.

    Raises:
        ValidationFailed: admin with a shift
        NotFoundError: shift_id does not exist
        ConflictError: email or CPF already registered
    """
    if data.role == Role.ADMIN and data.shift_id is not None:
        raise ValidationFailed("Administrators cannot be assigned a shift")
    if data.shift_id is not None:
        get_shift(db, data.shift_id)

    _ensure_unique(db, data.email, data.cpf)

    user = User(
        name=data.name,
        email=data.email,
        cpf=data.cpf,
        password_hash=hash_password(data.password),
        role=data.role.value,
        shift_id=data.shift_id,
    )
    db.add(user)
    try:
        db.flush()
        if data.shift_id is not None:
            db.add(UserShiftHistory(user_id=user.id, shift_id=data.shift_id, start_date=today_local()))
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email or CPF already registered")
    db.refresh(user)

    log_audit(
        db=db,
        actor_id=actor.id if actor else user.id,
        action="USER_REGISTER",
        entity_type="users",
        entity_id=user.id,
        meta={"email": user.email, "role": user.role, "shift_id": user.shift_id},
    )
    return user


def update_user(db: Session, user_id: int, data: UserUpdate, actor: User) -> User:
    """
    Update an employee's name, email and shift.

    A shift change closes the open shift-history interval and opens a new one dated today.
    """
    user = get_employee(db, user_id)
    _ensure_unique(db, data.email, exclude_id=user.id)
    if data.shift_id is not None:
        get_shift(db, data.shift_id)

    before = {"name": user.name, "email": user.email, "shift_id": user.shift_id}

    if data.shift_id != user.shift_id:
        _record_shift_change(db, user, data.shift_id, today_local())

    user.name = data.name
    user.email = data.email
    user.shift_id = data.shift_id
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email already in use")
    db.refresh(user)

    log_audit(
        db=db,
        actor_id=actor.id,
        action="USER_UPDATE",
        entity_type="users",
        entity_id=user.id,
        meta={"before": before, "after": data.model_dump()},
    )
    return user


def delete_user(db: Session, user_id: int, actor: User) -> None:
    """
    Delete an employee together with their punches, requests and shift history.

    Administrators cannot be deleted through this path.
    """
    user = get_employee(db, user_id)
    meta = {"email": user.email, "name": user.name}

    db.delete(user)
    db.commit()
    logger.info("employee deleted: user_id=%s by admin_id=%s", user_id, actor.id)

    log_audit(
        db=db,
        actor_id=actor.id,
        action="USER_DELETE",
        entity_type="users",
        entity_id=user_id,
        meta=meta,
    )


def list_employees(db: Session) -> List[User]:
    return db.query(User).filter(User.role == Role.EMPLOYEE.value).order_by(User.name).all()


def get_stats(db: Session, today: Optional[date] = None) -> dict:
    """Dashboard counters: employees, pending requests and employees with an entry punch today."""
    today = today or today_local()
    total_employees = db.query(User).filter(User.role == Role.EMPLOYEE.value).count()
    pending_requests = db.query(AdjustmentRequest).filter(
        AdjustmentRequest.status == AdjustmentStatus.PENDING.value
    ).count()
    present_today = db.query(TimeRecord.user_id).filter(
        TimeRecord.date == today,
        TimeRecord.type == PunchType.ENTRY.value
    ).distinct().count()
    return {
        "total_employees": total_employees,
        "pending_requests": pending_requests,
        "present_today": present_today,
    }
