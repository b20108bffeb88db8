"""
User model
"""
import enum
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from vivaponto.db.base import Base


class Role(str, enum.Enum):
    ADMIN = "admin"
    EMPLOYEE = "employee"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    cpf = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default=Role.EMPLOYEE.value)
    shift_id = Column(Integer, ForeignKey("shifts.id"), nullable=True, index=True)  # employees only
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)

    # Relationships
    shift = relationship("Shift", back_populates="users")
    shift_history = relationship(
        "UserShiftHistory",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="UserShiftHistory.start_date",
    )
    time_records = relationship(
        "TimeRecord",
        foreign_keys="TimeRecord.user_id",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    adjustment_requests = relationship(
        "AdjustmentRequest",
        foreign_keys="AdjustmentRequest.user_id",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


class UserShiftHistory(Base):
    """One row per shift assignment interval; end_date is NULL for the current one."""
    __tablename__ = "user_shift_history"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    shift_id = Column(Integer, ForeignKey("shifts.id"), nullable=False, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)

    user = relationship("User", back_populates="shift_history")
    shift = relationship("Shift")
