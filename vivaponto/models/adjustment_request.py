"""
Adjustment request model
"""
import enum
from sqlalchemy import Column, Integer, String, Date, DateTime, Text, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func, text
from vivaponto.db.base import Base


class AdjustmentStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AdjustmentRequest(Base):
    __tablename__ = "adjustment_requests"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    old_time = Column(String(5), nullable=True)  # NULL when the punch never existed
    new_time = Column(String(5), nullable=False)
    type = Column(String, nullable=False)
    reason = Column(Text, nullable=False)
    status = Column(String, nullable=False, server_default=text("'pending'"), default=AdjustmentStatus.PENDING.value)
    reviewed_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)

    __table_args__ = (
        Index("ix_adjustment_requests_status_created", "status", "created_at"),
    )

    # Relationships
    user = relationship("User", foreign_keys=[user_id], back_populates="adjustment_requests")
