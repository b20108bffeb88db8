"""
Database models
"""
from vivaponto.models.shift import Shift
from vivaponto.models.user import User, Role, UserShiftHistory
from vivaponto.models.time_record import TimeRecord, PunchType, PUNCH_SEQUENCE
from vivaponto.models.adjustment_request import AdjustmentRequest, AdjustmentStatus
from vivaponto.models.audit_log import AuditLog

__all__ = [
    "Shift",
    "User",
    "Role",
    "UserShiftHistory",
    "TimeRecord",
    "PunchType",
    "PUNCH_SEQUENCE",
    "AdjustmentRequest",
    "AdjustmentStatus",
    "AuditLog",
]
