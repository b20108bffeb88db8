"""
Shift schemas
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from vivaponto.schemas.common import ClockTime, NonBlank


class ShiftBase(BaseModel):
    name: NonBlank = Field(..., description="Shift name")
    start_time: ClockTime = Field(..., description="Start of the day (HH:MM)")
    break_start: ClockTime = Field(..., description="Break start (HH:MM)")
    break_end: ClockTime = Field(..., description="Break end (HH:MM)")
    end_time: ClockTime = Field(..., description="End of the day (HH:MM)")


class ShiftCreate(ShiftBase):
    """Schema for creating a shift; total_minutes is computed when omitted"""
    total_minutes: Optional[int] = Field(None, gt=0, description="Expected minutes for a full day")


class ShiftUpdate(ShiftCreate):
    """Schema for updating a shift (full replacement, like create)"""


class ShiftOut(ShiftBase):
    id: int
    total_minutes: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
