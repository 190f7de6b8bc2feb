"""
Expense repository for database operations.
"""

from datetime import date
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from genhpp.db.models import Expense
from genhpp.db.repositories.base import BaseRepository


class ExpenseRepository(BaseRepository[Expense]):
    """Repository for Expense database operations."""

    def __init__(self, session: Session):
        """Initialize expense repository."""
        super().__init__(Expense, session)

    def list_for_user(
        self,
        user_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: int = 500,
        offset: int = 0,
    ) -> List[Expense]:
        """
        User's expenses, newest first, optionally within [start, end].

        Args:
            user_id: User ID
            start: Inclusive first date
            end: Inclusive last date
        """
        query = self.session.query(Expense).filter(Expense.user_id == user_id)
        if start is not None:
            query = query.filter(Expense.date >= start)
        if end is not None:
            query = query.filter(Expense.date <= end)
        return (
            query.order_by(Expense.date.desc(), Expense.id.desc())
            .limit(limit)
            .offset(offset)
            .all()
        )

    def totals_by_category(self, user_id: int, start: date, end: date) -> List[Dict]:
        """
        Sum and count of expenses per category within [start, end].

        Aggregated in SQL so reports cover every row in the month.
        """
        rows = (
            self.session.query(Expense.category, func.sum(Expense.amount), func.count(Expense.id))
            .filter(Expense.user_id == user_id, Expense.date >= start, Expense.date <= end)
            .group_by(Expense.category)
            .all()
        )
        return [
            {"category": category, "amount": float(amount or 0), "count": count}
            for category, amount, count in rows
        ]
