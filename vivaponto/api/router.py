"""
Main API router
"""
from fastapi import APIRouter

from vivaponto.api.v1 import (
    health,
    version,
    auth,
    users,
    shifts,
    time_records,
    adjustment_requests,
    manual_adjustments,
    reports,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(version.router, tags=["version"])
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(shifts.router, prefix="/shifts", tags=["shifts"])
api_router.include_router(time_records.router, prefix="/time-records", tags=["time-records"])
api_router.include_router(adjustment_requests.router, prefix="/adjustment-requests", tags=["adjustment-requests"])
api_router.include_router(manual_adjustments.router, prefix="/manual", tags=["manual-adjustments"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
