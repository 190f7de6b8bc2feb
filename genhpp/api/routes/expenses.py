"""
Expense CRUD API endpoints.

Provides REST API for recording operational expenses and the monthly total.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from genhpp.api.schemas import ExpenseCreate, ExpenseUpdate, ExpenseResponse, MonthlyExpenseSummary
from genhpp.api.auth import get_current_user
from genhpp.core.reports import monthly_expense_total
from genhpp.db.connection import get_db_session
from genhpp.db.models import User
from genhpp.db.repositories import ExpenseRepository
from genhpp.utils.date_utils import format_month, month_range, parse_month


router = APIRouter()


def _month_bounds(month: str):
    try:
        start, end = month_range(parse_month(month))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return start.date(), end.date()


@router.post("/", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
def create_expense(
    expense: ExpenseCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    repo = ExpenseRepository(db)

    try:
        new_expense = repo.create(user_id=current_user.id, **expense.model_dump())
        db.commit()
        db.refresh(new_expense)
        return new_expense
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create expense: {str(e)}",
        )


@router.get("/", response_model=List[ExpenseResponse])
def list_expenses(
    month: Optional[str] = Query(None, description="Filter by month (YYYY-MM)"),
    limit: int = 500,
    offset: int = 0,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    repo = ExpenseRepository(db)

    if month:
        start, end = _month_bounds(month)
        return repo.list_for_user(current_user.id, start=start, end=end, limit=limit, offset=offset)
    return repo.list_for_user(current_user.id, limit=limit, offset=offset)


@router.get("/summary/monthly", response_model=MonthlyExpenseSummary)
def monthly_expense_summary(
    month: Optional[str] = Query(None, description="Month (YYYY-MM), defaults to the current month"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Total spent in a month."""
    month = month or format_month(date.today())
    start, end = _month_bounds(month)
    totals = ExpenseRepository(db).totals_by_category(current_user.id, start, end)
    return {
        "month": month,
        "total": monthly_expense_total(totals),
        "count": sum(row["count"] for row in totals),
    }


@router.get("/{expense_id}", response_model=ExpenseResponse)
def get_expense(
    expense_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    expense = ExpenseRepository(db).get_by_id(expense_id)

    if not expense:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Expense {expense_id} not found",
        )

    if expense.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to access this expense",
        )

    return expense


@router.put("/{expense_id}", response_model=ExpenseResponse)
def update_expense(
    expense_id: int,
    expense_update: ExpenseUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    repo = ExpenseRepository(db)

    existing = repo.get_by_id(expense_id)
    if not existing:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Expense {expense_id} not found",
        )
    if existing.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to modify this expense",
        )

    try:
        update_data = {k: v for k, v in expense_update.model_dump().items() if v is not None}
        updated_expense = repo.update(expense_id, **update_data)
        db.commit()
        db.refresh(updated_expense)
        return updated_expense
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update expense: {str(e)}",
        )


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(
    expense_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    repo = ExpenseRepository(db)

    existing = repo.get_by_id(expense_id)
    if not existing:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Expense {expense_id} not found",
        )
    if existing.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this expense",
        )

    try:
        repo.delete(expense_id)
        db.commit()
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete expense: {str(e)}",
        )
