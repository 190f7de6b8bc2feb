"""
Ad campaign analysis.

    revenue = sales * avg_price
    ROAS    = revenue / cost              (0 when cost <= 0)
    ROI     = (revenue - cost) / cost * 100 (0 when cost <= 0)
"""

from typing import Any, Dict, Iterable, Mapping

from genhpp.utils.error_utils import error_handler


def _ratios(revenue: float, cost: float) -> Dict[str, float]:
    if cost <= 0:
        return {"roas": 0.0, "roi": 0.0}
    return {"roas": revenue / cost, "roi": (revenue - cost) / cost * 100}


@error_handler
def analyze_campaign(campaign: Mapping[str, Any]) -> Dict[str, Any]:
    cost = float(campaign["cost"])
    revenue = float(campaign["sales"]) * float(campaign["avg_price"])
    result = {
        "name": campaign["name"],
        "platform": campaign["platform"],
        "cost": cost,
        "sales": int(campaign["sales"]),
        "avg_price": float(campaign["avg_price"]),
        "revenue": revenue,
    }
    result.update(_ratios(revenue, cost))
    return result


@error_handler
def analyze_campaigns(campaigns: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Analyse each campaign and aggregate totals.

    Returns:
        Dict with ``campaigns`` (per-campaign results) and ``totals``
        (cost, revenue, roas, roi across all campaigns)
    """
    results = [analyze_campaign(c) for c in campaigns]
    total_cost = sum(r["cost"] for r in results)
    total_revenue = sum(r["revenue"] for r in results)
    totals = {"cost": total_cost, "revenue": total_revenue}
    totals.update(_ratios(total_revenue, total_cost))
    return {"campaigns": results, "totals": totals}
