"""
Pricing calculators: ideal price, pre-VAT price, price change simulation
and units needed to reach a profit target.
"""

import math
from typing import Dict

from genhpp.utils.error_utils import error_handler
from genhpp.utils.rate_utils import pct_to_decimal


@error_handler
def ideal_price(cost: float, margin: float) -> Dict[str, float]:
    """
    Apply a margin over cost.

    Examples:
        >>> ideal_price(10000, 30)
        {'cost': 10000.0, 'margin': 30.0, 'profit': 3000.0, 'suggested_price': 13000.0}
    """
    profit = float(cost) * pct_to_decimal(margin)
    return {
        "cost": float(cost),
        "margin": float(margin),
        "profit": profit,
        "suggested_price": float(cost) + profit,
    }


@error_handler
def pre_vat_price(final_price: float, vat: float) -> Dict[str, float]:
    """
    Split a VAT-inclusive price into its base price and VAT amount.

    base = final / (1 + vat / 100)
    """
    base = float(final_price) / (1 + pct_to_decimal(vat))
    return {
        "final_price": float(final_price),
        "vat": float(vat),
        "base_price": base,
        "vat_amount": float(final_price) - base,
    }


def _margin_on_cost(profit: float, hpp: float) -> float:
    return profit / hpp * 100 if hpp > 0 else 0.0


@error_handler
def simulate_profit(base_hpp: float, base_price: float, new_hpp: float, new_price: float) -> Dict[str, float]:
    """Compare profit and margin before and after a cost or price change."""
    base_profit = float(base_price) - float(base_hpp)
    new_profit = float(new_price) - float(new_hpp)
    base_margin = _margin_on_cost(base_profit, float(base_hpp))
    new_margin = _margin_on_cost(new_profit, float(new_hpp))
    return {
        "base_profit": base_profit,
        "base_margin": base_margin,
        "new_profit": new_profit,
        "new_margin": new_margin,
        "profit_change": new_profit - base_profit,
        "margin_change": new_margin - base_margin,
    }


@error_handler
def units_for_target(profit_per_product: float, profit_target: float) -> int:
    """
    Units to sell to reach profit_target, rounded up.

    Examples:
        >>> units_for_target(2500, 1000000)
        400
    """
    return int(math.ceil(float(profit_target) / float(profit_per_product)))
