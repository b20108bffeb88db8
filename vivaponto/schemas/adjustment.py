"""
Adjustment request schemas
"""
from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from vivaponto.models.adjustment_request import AdjustmentStatus
from vivaponto.models.time_record import PunchType
from vivaponto.schemas.common import ClockTime, OptionalClockTime


class AdjustmentRequestCreate(BaseModel):
    """Employee claim that a punch is wrong or missing"""
    date: date
    type: PunchType
    new_time: ClockTime
    old_time: OptionalClockTime = Field(None, description="Currently observed time, if any")
    # Blank reasons are rejected by the service with a 400
    reason: Optional[str] = Field(None, description="Why the punch should change (required)")


class AdjustmentRequestOut(BaseModel):
    id: int
    user_id: int
    date: date
    old_time: Optional[str] = None
    new_time: str
    type: PunchType
    reason: Optional[str] = None
    status: AdjustmentStatus
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    user_name: Optional[str] = None
    user_email: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AdjustmentRequestListResponse(BaseModel):
    items: List[AdjustmentRequestOut]
    total: int
