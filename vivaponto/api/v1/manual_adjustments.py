"""
Manual override endpoints (admin only)
"""
from datetime import date
from typing import List
from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session
from vivaponto.core.deps import get_db, require_admin
from vivaponto.models.user import User
from vivaponto.schemas.manual_adjustment import (
    ManualActionResponse,
    ManualAddRequest,
    ManualDeleteRequest,
    ManualEditRequest,
)
from vivaponto.schemas.time_record import TimeRecordOut
from vivaponto.services.manual_adjustment_service import manual_add, manual_delete, manual_edit
from vivaponto.services.time_record_service import get_day_records

router = APIRouter()


@router.post("/add", response_model=TimeRecordOut, status_code=201)
async def manual_add_endpoint(
    add_data: ManualAddRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Insert a punch for any user and date; 409 when that punch type already exists"""
    return manual_add(db, current_user, add_data)


@router.put("/edit/{record_id}", response_model=TimeRecordOut)
async def manual_edit_endpoint(
    record_id: int,
    edit_data: ManualEditRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Overwrite a punch's time"""
    return manual_edit(db, current_user, record_id, edit_data.time, edit_data.justification)


@router.delete("/delete/{record_id}", response_model=ManualActionResponse)
async def manual_delete_endpoint(
    record_id: int,
    delete_data: ManualDeleteRequest = Body(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """
    Delete a punch

    The justification travels in the request body and is kept in the audit log.
    """
    manual_delete(db, current_user, record_id, delete_data.justification)
    return ManualActionResponse(message="Time record deleted", id=record_id)


@router.get("/records/{user_id}/{day}", response_model=List[TimeRecordOut])
async def day_records_endpoint(
    user_id: int,
    day: date,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """One user's punches on one day, earliest first"""
    return get_day_records(db, user_id, day)
