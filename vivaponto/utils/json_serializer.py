"""
JSON serializer utility for audit metadata
"""
from datetime import date, datetime, time
from enum import Enum
from typing import Any

from pydantic import BaseModel


def sanitize_for_json(value: Any) -> Any:
    """
    Recursively convert Python objects to JSON-safe values.
    Use before saving to JSON columns (audit_logs.meta_json).

    Punch types and statuses are str enums and are stored by value.
    """
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (date, datetime, time)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): sanitize_for_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [sanitize_for_json(item) for item in value]
    if isinstance(value, BaseModel):
        return sanitize_for_json(value.model_dump())
    return str(value)
