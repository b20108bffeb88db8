"""
User schemas
"""
from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from vivaponto.core.security import validate_password
from vivaponto.models.user import Role
from vivaponto.schemas.common import NonBlank
from vivaponto.schemas.shift import ShiftOut


class UserCreate(BaseModel):
    """Schema for registering a user"""
    name: NonBlank = Field(..., description="Full name")
    email: NonBlank = Field(..., description="Email (unique)")
    cpf: NonBlank = Field(..., description="CPF (unique)")
    password: str = Field(..., description="Password (4 to 72 bytes)")
    role: Role = Field(default=Role.EMPLOYEE, description="admin or employee")
    shift_id: Optional[int] = Field(None, description="Assigned shift (employees only)")

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        if "@" not in v:
            raise ValueError("Invalid email")
        return v.lower()

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return validate_password(v)

    @field_validator("cpf", mode="after")
    @classmethod
    def normalize_cpf(cls, v: str) -> str:
        """Keep digits only so 123.456.789-09 and 12345678909 collide"""
        digits = "".join(ch for ch in v if ch.isdigit())
        if len(digits) != 11:
            raise ValueError("CPF must have 11 digits")
        return digits


class UserUpdate(BaseModel):
    """Schema for an admin updating an employee"""
    name: NonBlank = Field(..., description="Full name")
    email: NonBlank = Field(..., description="Email (unique)")
    shift_id: Optional[int] = Field(None, description="Assigned shift; null clears it")

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        if "@" not in v:
            raise ValueError("Invalid email")
        return v.lower()


class ShiftHistoryOut(BaseModel):
    id: int
    shift_id: int
    start_date: date
    end_date: Optional[date] = None

    model_config = ConfigDict(from_attributes=True)


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    cpf: str
    role: Role
    shift_id: Optional[int] = None
    shift: Optional[ShiftOut] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserDetailOut(UserOut):
    shift_history: List[ShiftHistoryOut] = []


class UserStatsOut(BaseModel):
    total_employees: int
    pending_requests: int
    present_today: int
