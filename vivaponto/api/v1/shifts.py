"""
Shift catalog endpoints
"""
from typing import List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from vivaponto.core.deps import get_db, get_current_user, require_admin
from vivaponto.models.user import User
from vivaponto.schemas.shift import ShiftCreate, ShiftOut, ShiftUpdate
from vivaponto.services.shift_service import create_shift, delete_shift, list_shifts, update_shift

router = APIRouter()


@router.get("", response_model=List[ShiftOut])
async def list_shifts_endpoint(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List shifts ordered by name"""
    return list_shifts(db)


@router.post("", response_model=ShiftOut, status_code=201)
async def create_shift_endpoint(
    shift_data: ShiftCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """
    Create a shift (admin only)

    total_minutes is computed from the four boundary times when omitted.
    """
    return create_shift(db, shift_data, current_user)


@router.put("/{shift_id}", response_model=ShiftOut)
async def update_shift_endpoint(
    shift_id: int,
    shift_data: ShiftUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Replace a shift's name and times (admin only)"""
    return update_shift(db, shift_id, shift_data, current_user)


@router.delete("/{shift_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shift_endpoint(
    shift_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Delete a shift no user references (admin only)"""
    delete_shift(db, shift_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
