"""
Analytics over saved calculations and expenses.

Calculations are mappings with ``margin``, ``suggested_price`` and
``total_hpp``; expenses are mappings with ``amount`` and ``category``.
Routes fetch the rows for the month(s) in question and pass them in.
"""

from typing import Any, Dict, Iterable, List, Mapping

import pandas as pd

from genhpp.utils.error_utils import error_handler
from genhpp.utils.rate_utils import percent_change

STAT_KEYS = ("total_products", "average_margin", "total_revenue", "total_production_cost", "estimated_profit")


@error_handler
def calculate_stats(calculations: Iterable[Mapping[str, Any]]) -> Dict[str, float]:
    """
    Aggregate product count, average margin, revenue and production cost.

    Revenue is the sum of suggested prices and production cost the sum of
    HPP totals. An empty input yields all zeros.
    """
    rows = list(calculations)
    if not rows:
        return {key: 0 for key in STAT_KEYS}

    total_products = len(rows)
    total_revenue = sum(float(c["suggested_price"]) for c in rows)
    total_production_cost = sum(float(c["total_hpp"]) for c in rows)
    return {
        "total_products": total_products,
        "average_margin": sum(float(c["margin"]) for c in rows) / total_products,
        "total_revenue": total_revenue,
        "total_production_cost": total_production_cost,
        "estimated_profit": total_revenue - total_production_cost,
    }


@error_handler
def compare_stats(current: Mapping[str, float], previous: Mapping[str, float]) -> Dict[str, Dict[str, float]]:
    """Absolute and percent change of every stat between two periods."""
    return {
        key: {
            "change": float(current[key]) - float(previous[key]),
            "change_pct": percent_change(float(current[key]), float(previous[key])),
        }
        for key in STAT_KEYS
    }


@error_handler
def dashboard_analytics(
    current_calculations: Iterable[Mapping[str, Any]],
    previous_calculations: Iterable[Mapping[str, Any]],
) -> Dict[str, Any]:
    current = calculate_stats(current_calculations)
    previous = calculate_stats(previous_calculations)
    return {
        "current": current,
        "previous": previous,
        "changes": compare_stats(current, previous),
    }


def expenses_by_category(expenses: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """Expense totals per category, largest first."""
    df = pd.DataFrame(list(expenses), columns=["category", "amount"])
    if df.empty:
        return []
    df["amount"] = df["amount"].astype(float)
    grouped = df.groupby("category", sort=False)["amount"].sum().sort_values(ascending=False)
    return [{"category": category, "amount": float(amount)} for category, amount in grouped.items()]


@error_handler
def monthly_profit_report(
    month: str,
    calculations: Iterable[Mapping[str, Any]],
    expenses: Iterable[Mapping[str, Any]],
) -> Dict[str, Any]:
    """
    Profit report for one month.

    estimated_profit = revenue - (production cost + operational cost)
    """
    expense_rows = list(expenses)
    stats = calculate_stats(calculations)
    total_operational_cost = sum(float(e["amount"]) for e in expense_rows)
    return {
        "month": month,
        "total_products": stats["total_products"],
        "total_revenue": stats["total_revenue"],
        "total_production_cost": stats["total_production_cost"],
        "total_operational_cost": total_operational_cost,
        "estimated_profit": stats["total_revenue"] - (stats["total_production_cost"] + total_operational_cost),
        "average_margin": stats["average_margin"],
        "expenses_by_category": expenses_by_category(expense_rows),
    }


def monthly_expense_total(expenses: Iterable[Mapping[str, Any]]) -> float:
    return float(sum(float(e["amount"]) for e in expenses))
