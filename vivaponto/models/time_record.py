"""
Time record (punch) model
"""
import enum
from sqlalchemy import Column, Integer, String, Date, DateTime, Boolean, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from vivaponto.db.base import Base


class PunchType(str, enum.Enum):
    ENTRY = "entry"
    BREAK_START = "break_start"
    BREAK_END = "break_end"
    EXIT = "exit"


# Order in which punches are expected during a day
PUNCH_SEQUENCE = (
    PunchType.ENTRY,
    PunchType.BREAK_START,
    PunchType.BREAK_END,
    PunchType.EXIT,
)


class TimeRecord(Base):
    __tablename__ = "time_records"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    time = Column(String(5), nullable=False)  # "HH:MM"
    type = Column(String, nullable=False)
    edited_by_admin = Column(Boolean, nullable=False, default=False)
    admin_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    admin_justification = Column(Text, nullable=True)
    edited_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "date", "type", name="uq_time_records_user_date_type"),
    )

    # Relationships
    user = relationship("User", foreign_keys=[user_id], back_populates="time_records")

    @property
    def user_name(self):
        return self.user.name if self.user else None
