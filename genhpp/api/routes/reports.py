"""
Report API endpoints.

Dashboard analytics and monthly profit reports built from saved
calculations and recorded expenses.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from genhpp.api.schemas import DashboardResponse, ProfitReportResponse
from genhpp.api.auth import get_current_user
from genhpp.core.reports import dashboard_analytics, monthly_profit_report
from genhpp.db.connection import get_db_session
from genhpp.db.models import Calculation, User
from genhpp.db.repositories import CalculationRepository, ExpenseRepository
from genhpp.utils.date_utils import format_month, last_six_months, month_range, parse_month, previous_month


router = APIRouter()


def _calc_rows(calculations: List[Calculation]) -> List[dict]:
    return [
        {"margin": c.margin, "suggested_price": c.suggested_price, "total_hpp": c.total_hpp}
        for c in calculations
    ]


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Current calendar month against the previous one."""
    repo = CalculationRepository(db)
    this_month = date.today().replace(day=1)

    current = repo.list_in_range(current_user.id, *month_range(this_month))
    previous = repo.list_in_range(current_user.id, *month_range(previous_month(this_month)))
    return dashboard_analytics(_calc_rows(current), _calc_rows(previous))


@router.get("/profit", response_model=ProfitReportResponse)
def get_profit_report(
    month: Optional[str] = Query(None, description="Month (YYYY-MM), defaults to the current month"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    month = month or format_month(date.today())
    try:
        start, end = month_range(parse_month(month))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    calculations = CalculationRepository(db).list_in_range(current_user.id, start, end)
    expense_totals = ExpenseRepository(db).totals_by_category(current_user.id, start.date(), end.date())
    return monthly_profit_report(month, _calc_rows(calculations), expense_totals)


@router.get("/months", response_model=List[str])
def get_report_months():
    """Selectable report months, newest first."""
    return last_six_months()
