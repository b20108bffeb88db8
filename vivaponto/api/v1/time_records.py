"""
Punch ledger endpoints
"""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from vivaponto.core.deps import get_db, get_current_user
from vivaponto.core.errors import ValidationFailed
from vivaponto.models.user import User
from vivaponto.schemas.time_record import DayAggregateOut, TimeRecordOut, TodayRecordOut
from vivaponto.services.time_record_service import (
    aggregate_by_date,
    clock_in,
    get_today,
    list_records,
)
from vivaponto.services.report_service import resolve_report_target

router = APIRouter()


@router.get("", response_model=List[TimeRecordOut])
async def list_time_records_endpoint(
    user_id: Optional[int] = Query(None, description="Filter by user (admin only)"),
    day: Optional[date] = Query(None, alias="date", description="Single day (YYYY-MM-DD)"),
    start_date: Optional[date] = Query(None, description="Range start (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="Range end (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    List punches, newest first

    Role-based scoping:
    - admin: everyone, optionally one user
    - employee: only own punches
    """
    return list_records(
        db,
        current_user,
        user_id=user_id,
        day=day,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("/today", response_model=TodayRecordOut)
async def get_today_endpoint(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Today's punches folded into one row, plus the next expected punch"""
    return get_today(db, current_user)


@router.post("", response_model=TimeRecordOut, status_code=201)
async def clock_in_endpoint(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Clock in

    Records the next missing punch of the day (entry, break_start, break_end,
    exit) at the server's current time. 409 once all four exist.
    """
    return clock_in(db, current_user)


@router.get("/report", response_model=List[DayAggregateOut])
async def raw_report_endpoint(
    start_date: date = Query(..., description="Range start (YYYY-MM-DD)"),
    end_date: date = Query(..., description="Range end (YYYY-MM-DD)"),
    user_id: Optional[int] = Query(None, description="Target user (admin only)"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Dates with at least one punch, each folded into the four typed times"""
    if start_date > end_date:
        raise ValidationFailed("start_date must be less than or equal to end_date")
    target = resolve_report_target(db, current_user, user_id)
    aggregates = aggregate_by_date(db, target.id, start_date, end_date)
    return [aggregates[day] for day in sorted(aggregates)]
