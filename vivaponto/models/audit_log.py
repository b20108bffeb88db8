"""
Audit log model
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON
from vivaponto.db.base import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    actor_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    action = Column(String, nullable=False)  # e.g., "CLOCK_IN", "ADJUSTMENT_APPROVE", "MANUAL_DELETE"
    entity_type = Column(String, nullable=False)  # e.g., "time_records", "adjustment_requests"
    entity_id = Column(Integer, nullable=True)
    meta_json = Column(JSON, nullable=True)
    # Set explicitly by log_audit; SQLite server defaults are naive
    created_at = Column(DateTime(timezone=True), nullable=False)
