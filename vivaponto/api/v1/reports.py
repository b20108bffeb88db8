"""
Reports and exports endpoints
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from vivaponto.core.config import settings
from vivaponto.core.deps import get_db, get_current_user, require_admin
from vivaponto.core.errors import ValidationFailed
from vivaponto.models.user import User
from vivaponto.schemas.report import DashboardResponse, HoursReportResponse, MirrorReportResponse
from vivaponto.services.audit_service import log_audit
from vivaponto.services.report_service import (
    CSV_HEADERS,
    build_report,
    csv_rows,
    dashboard_summary,
    mirror_report,
    paginate_report,
)
from vivaponto.utils.csv_export import stream_csv
from vivaponto.utils.datetime_utils import PERIODS, resolve_period

router = APIRouter()


def _period_range(period: str, start_date: Optional[date], end_date: Optional[date]):
    """Explicit start_date/end_date win over the named period"""
    if start_date and end_date:
        return start_date, end_date
    if start_date or end_date:
        raise ValidationFailed("start_date and end_date must be given together")
    return resolve_period(period, custom_start=start_date, custom_end=end_date)


@router.get("/hours", response_model=HoursReportResponse)
async def hours_report_endpoint(
    period: str = Query("month", pattern="^(" + "|".join(PERIODS) + ")$", description="today, week, month, year or custom"),
    start_date: Optional[date] = Query(None, description="Range start (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="Range end (YYYY-MM-DD)"),
    user_id: Optional[int] = Query(None, description="Target user (admin only)"),
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1, le=366),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Hour bank report: one row per calendar day with worked, expected and balance

    Totals cover the whole period; rows are paged.
    Employees can only see their own report.
    """
    start, end = _period_range(period, start_date, end_date)
    report = build_report(db, current_user, user_id, start, end)
    return paginate_report(report, page=page, page_size=page_size or settings.REPORT_PAGE_SIZE)


@router.get("/mirror", response_model=MirrorReportResponse)
async def mirror_report_endpoint(
    start_date: date = Query(..., description="Range start (YYYY-MM-DD)"),
    end_date: date = Query(..., description="Range end (YYYY-MM-DD)"),
    user_id: Optional[int] = Query(None, description="Target user (admin only)"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Printable timesheet with employee and shift header"""
    report = build_report(db, current_user, user_id, start_date, end_date)
    return mirror_report(report)


@router.get("/hours.csv")
async def export_hours_csv(
    start_date: date = Query(..., description="Range start (YYYY-MM-DD)"),
    end_date: date = Query(..., description="Range end (YYYY-MM-DD)"),
    user_id: Optional[int] = Query(None, description="Target user (admin only)"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Export the hour bank report as CSV

    Same rows as /reports/hours (unpaged) followed by a TOTAL line.
    """
    report = build_report(db, current_user, user_id, start_date, end_date)
    rows = csv_rows(report)

    filename = f"hours_{report['user'].id}_{start_date.strftime('%Y%m%d')}_{end_date.strftime('%Y%m%d')}.csv"

    log_audit(
        db=db,
        actor_id=current_user.id,
        action="REPORT_EXPORT",
        entity_type="report",
        entity_id=None,
        meta={
            "report_type": "hours",
            "user_id": report["user"].id,
            "start_date": str(start_date),
            "end_date": str(end_date),
            "row_count": len(report["rows"])
        }
    )

    return stream_csv(headers=CSV_HEADERS, rows=rows, filename=filename)


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard_endpoint(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Admin dashboard: counters, latest pending requests and who clocked in today"""
    return dashboard_summary(db, current_user)
