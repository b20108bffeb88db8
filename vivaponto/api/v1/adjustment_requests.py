"""
Adjustment request endpoints
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from vivaponto.core.deps import get_db, get_current_user, require_admin
from vivaponto.models.adjustment_request import AdjustmentStatus
from vivaponto.models.user import User
from vivaponto.schemas.adjustment import (
    AdjustmentRequestCreate,
    AdjustmentRequestListResponse,
    AdjustmentRequestOut,
)
from vivaponto.services.adjustment_service import (
    approve_request,
    list_requests,
    reject_request,
    request_to_dict,
    submit_request,
)

router = APIRouter()


@router.get("", response_model=AdjustmentRequestListResponse)
async def list_adjustment_requests_endpoint(
    status: Optional[AdjustmentStatus] = Query(None, description="Filter by status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    List adjustment requests, newest first

    Employees see their own requests; admins see everyone's.
    """
    items = list_requests(db, current_user, status_filter=status)
    return AdjustmentRequestListResponse(items=items, total=len(items))


@router.post("", response_model=AdjustmentRequestOut, status_code=201)
async def submit_adjustment_request_endpoint(
    request_data: AdjustmentRequestCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Submit a correction for one of the current user's punches"""
    request = submit_request(db, current_user, request_data)
    return request_to_dict(request)


@router.put("/{request_id}/approve", response_model=AdjustmentRequestOut)
async def approve_adjustment_request_endpoint(
    request_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """
    Approve a pending request (admin only)

    Writes the requested time into the punch ledger. 409 when the request
    was already approved or rejected.
    """
    request = approve_request(db, request_id, current_user)
    return request_to_dict(request)


@router.put("/{request_id}/reject", response_model=AdjustmentRequestOut)
async def reject_adjustment_request_endpoint(
    request_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Reject a pending request (admin only); the ledger is left untouched"""
    request = reject_request(db, request_id, current_user)
    return request_to_dict(request)
