"""
User management endpoints
"""
from typing import List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from vivaponto.core.deps import get_db, get_current_user, require_admin
from vivaponto.models.user import User
from vivaponto.schemas.user import UserDetailOut, UserOut, UserStatsOut, UserUpdate
from vivaponto.services.user_service import delete_user, get_stats, list_employees, update_user

router = APIRouter()


@router.get("", response_model=List[UserOut])
async def list_users_endpoint(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """List employees with their shift, ordered by name (admin only)"""
    return list_employees(db)


@router.get("/me", response_model=UserDetailOut)
async def get_me_endpoint(
    current_user: User = Depends(get_current_user),
):
    """Current authenticated user's profile, shift and shift history"""
    return current_user


@router.get("/stats", response_model=UserStatsOut)
async def get_stats_endpoint(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Dashboard counters (admin only)"""
    return get_stats(db)


@router.put("/{user_id}", response_model=UserOut)
async def update_user_endpoint(
    user_id: int,
    user_data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """
    Update an employee's name, email and shift (admin only)

    Changing the shift closes the current shift-history interval.
    """
    return update_user(db, user_id, user_data, current_user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_endpoint(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Delete an employee with their punches and requests (admin only)"""
    delete_user(db, user_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
