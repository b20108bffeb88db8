"""
Report schemas
"""
from datetime import date
from typing import List, Optional
from pydantic import BaseModel
from vivaponto.schemas.adjustment import AdjustmentRequestOut
from vivaponto.schemas.shift import ShiftOut


class ReportRow(BaseModel):
    date: date
    weekday: str
    entry: Optional[str] = None
    break_start: Optional[str] = None
    break_end: Optional[str] = None
    exit: Optional[str] = None
    worked_minutes: int
    expected_minutes: int
    balance_minutes: int
    worked: str
    expected: str
    balance: str


class ReportTotals(BaseModel):
    worked_minutes: int
    expected_minutes: int
    balance_minutes: int
    worked: str
    expected: str
    balance: str


class HoursReportResponse(BaseModel):
    user_id: int
    start_date: date
    end_date: date
    rows: List[ReportRow]
    totals: ReportTotals
    page: int
    page_size: int
    total_rows: int
    total_pages: int


class MirrorEmployee(BaseModel):
    id: int
    name: str
    cpf: str
    email: str


class MirrorReportResponse(BaseModel):
    """Printable timesheet (espelho de ponto): header data plus every day of the period"""
    employee: MirrorEmployee
    shift: Optional[ShiftOut] = None
    start_date: date
    end_date: date
    rows: List[ReportRow]
    totals: ReportTotals


class PresentUserOut(BaseModel):
    user_id: int
    name: str
    entry: str


class DashboardResponse(BaseModel):
    total_employees: int
    pending_requests: int
    present_today: int
    latest_pending: List[AdjustmentRequestOut]
    present: List[PresentUserOut]
