"""
Shift model
"""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from vivaponto.db.base import Base


class Shift(Base):
    __tablename__ = "shifts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    start_time = Column(String(5), nullable=False)  # "HH:MM"
    break_start = Column(String(5), nullable=False)
    break_end = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    # Stored as supplied; must equal (break_start - start) + (end - break_end)
    total_minutes = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)

    users = relationship("User", back_populates="shift")
