"""
Test suite for dashboard and profit report analytics.
"""

from decimal import Decimal

import pytest

from genhpp.core.reports import (
    calculate_stats,
    compare_stats,
    dashboard_analytics,
    expenses_by_category,
    monthly_expense_total,
    monthly_profit_report,
)


CALCS = [
    {"margin": 20, "suggested_price": 12000, "total_hpp": 10000},
    {"margin": 40, "suggested_price": Decimal("28000.00"), "total_hpp": Decimal("20000.00")},
]


def test_calculate_stats():
    stats = calculate_stats(CALCS)
    assert stats["total_products"] == 2
    assert stats["average_margin"] == pytest.approx(30)
    assert stats["total_revenue"] == pytest.approx(40000)
    assert stats["total_production_cost"] == pytest.approx(30000)
    assert stats["estimated_profit"] == pytest.approx(10000)


def test_calculate_stats_empty():
    assert set(calculate_stats([]).values()) == {0}


def test_compare_stats_percent_change():
    current = calculate_stats(CALCS)
    previous = calculate_stats(CALCS[:1])
    changes = compare_stats(current, previous)
    assert changes["total_products"] == {"change": 1.0, "change_pct": pytest.approx(100)}
    assert changes["total_revenue"]["change_pct"] == pytest.approx(233.333, rel=1e-3)


def test_compare_stats_from_zero_previous():
    """Test growth from an empty month reports 0% rather than infinity."""
    changes = compare_stats(calculate_stats(CALCS), calculate_stats([]))
    assert changes["total_revenue"]["change"] == pytest.approx(40000)
    assert changes["total_revenue"]["change_pct"] == 0.0


def test_dashboard_analytics_shape():
    result = dashboard_analytics(CALCS, [])
    assert set(result) == {"current", "previous", "changes"}
    assert result["previous"]["total_products"] == 0


def test_expenses_by_category_sorted_desc():
    expenses = [
        {"category": "Pemasaran", "amount": 100},
        {"category": "Sewa Tempat", "amount": Decimal("500")},
        {"category": "Pemasaran", "amount": 450},
    ]
    assert expenses_by_category(expenses) == [
        {"category": "Pemasaran", "amount": 550.0},
        {"category": "Sewa Tempat", "amount": 500.0},
    ]


def test_expenses_by_category_empty():
    assert expenses_by_category([]) == []


def test_monthly_profit_report():
    expenses = [{"category": "Listrik & Air", "amount": 3000}, {"category": "Lainnya", "amount": 2000}]
    report = monthly_profit_report("2026-05", CALCS, expenses)
    assert report["month"] == "2026-05"
    assert report["total_operational_cost"] == 5000.0
    assert report["estimated_profit"] == pytest.approx(40000 - 30000 - 5000)
    assert report["expenses_by_category"][0]["category"] == "Listrik & Air"


def test_monthly_expense_total():
    assert monthly_expense_total([{"amount": 10}, {"amount": Decimal("2.5")}]) == 12.5
    assert monthly_expense_total([]) == 0.0
