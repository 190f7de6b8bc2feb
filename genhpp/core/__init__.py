"""
Core calculation logic for GenHPP.

Pure functions for HPP, pricing, loans, ad campaigns, reports,
comment threading and CSV export. No database or HTTP dependencies.
"""

from genhpp.core.hpp import calculate_hpp, quick_hpp, per_product_breakdown, total_material_cost
from genhpp.core.pricing import ideal_price, pre_vat_price, simulate_profit, units_for_target
from genhpp.core.loan import calculate_loan, monthly_payment, get_schedule, schedule_records
from genhpp.core.ads import analyze_campaign, analyze_campaigns
from genhpp.core.reports import calculate_stats, dashboard_analytics, monthly_profit_report, monthly_expense_total
from genhpp.core.comments import build_comment_tree
from genhpp.core.export import calculation_to_csv, content_disposition, export_filename

__all__ = [
    "calculate_hpp",
    "quick_hpp",
    "per_product_breakdown",
    "total_material_cost",
    "ideal_price",
    "pre_vat_price",
    "simulate_profit",
    "units_for_target",
    "calculate_loan",
    "monthly_payment",
    "get_schedule",
    "schedule_records",
    "analyze_campaign",
    "analyze_campaigns",
    "calculate_stats",
    "dashboard_analytics",
    "monthly_profit_report",
    "monthly_expense_total",
    "build_comment_tree",
    "calculation_to_csv",
    "content_disposition",
    "export_filename",
]
