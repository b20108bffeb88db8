"""
Time record (punch) schemas
"""
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from vivaponto.models.time_record import PunchType


class TimeRecordOut(BaseModel):
    id: int
    user_id: int
    date: date
    time: str
    type: PunchType
    edited_by_admin: bool = False
    admin_id: Optional[int] = None
    admin_justification: Optional[str] = None
    edited_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    user_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class TodayRecordOut(BaseModel):
    """All of today's punches folded into one row, for the clock-in screen"""
    id: Optional[int] = None
    user_id: int
    date: date
    entry: Optional[str] = None
    break_start: Optional[str] = None
    break_end: Optional[str] = None
    exit: Optional[str] = None
    created_at: Optional[datetime] = None
    next_type: Optional[PunchType] = Field(None, description="Punch the next clock-in will record")
    complete: bool = False


class DayAggregateOut(BaseModel):
    date: date
    entry: Optional[str] = None
    break_start: Optional[str] = None
    break_end: Optional[str] = None
    exit: Optional[str] = None
