"""
Database initialization
Seeds the first administrator and a default shift when none exist
"""
import logging
from sqlalchemy.orm import Session
from vivaponto.core.config import settings
from vivaponto.core.security import hash_password
from vivaponto.models.shift import Shift
from vivaponto.models.user import User, Role
from vivaponto.utils.time_calc import shift_total_minutes

logger = logging.getLogger(__name__)

DEFAULT_SHIFT = {
    "name": "Comercial",
    "start_time": "08:00",
    "break_start": "12:00",
    "break_end": "13:00",
    "end_time": "18:00",
}


def init_db(db: Session) -> None:
    """
    Initialize database with a default shift and the initial admin user

    Safe to call on every startup: each seed is skipped when something of
    its kind already exists.
    """
    if not db.query(Shift).first():
        shift = Shift(total_minutes=shift_total_minutes(
            DEFAULT_SHIFT["start_time"],
            DEFAULT_SHIFT["break_start"],
            DEFAULT_SHIFT["break_end"],
            DEFAULT_SHIFT["end_time"],
        ), **DEFAULT_SHIFT)
        db.add(shift)
        logger.info("Created default shift: %s", DEFAULT_SHIFT["name"])

    admin_exists = db.query(User).filter(User.role == Role.ADMIN.value).first()
    if admin_exists:
        logger.info("Admin user already exists, skipping initial bootstrap")
        db.commit()
        return

    initial_admin = User(
        name=settings.INITIAL_ADMIN_NAME,
        email=settings.INITIAL_ADMIN_EMAIL.lower(),
        cpf=settings.INITIAL_ADMIN_CPF,
        password_hash=hash_password(settings.INITIAL_ADMIN_PASSWORD),
        role=Role.ADMIN.value,
    )
    db.add(initial_admin)
    db.commit()

    logger.info("Initial admin user created successfully")
    logger.info("Email: %s", initial_admin.email)
    logger.info("Password: [set via INITIAL_ADMIN_PASSWORD environment variable]")
