"""
Manual override schemas
"""
from datetime import date
from typing import Optional
from pydantic import BaseModel, Field
from vivaponto.models.time_record import PunchType
from vivaponto.schemas.common import ClockTime


class ManualAddRequest(BaseModel):
    user_id: int
    date: date
    time: ClockTime
    type: PunchType
    # Blank justifications are rejected by the service with a 400
    justification: Optional[str] = Field(None, description="Mandatory reason for the override")


class ManualEditRequest(BaseModel):
    time: ClockTime
    justification: Optional[str] = Field(None, description="Mandatory reason for the override")


class ManualDeleteRequest(BaseModel):
    justification: Optional[str] = Field(None, description="Mandatory reason for the deletion")


class ManualActionResponse(BaseModel):
    message: str
    id: int
