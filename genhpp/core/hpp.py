"""
HPP (Harga Pokok Produksi) calculator.

HPP is the full production cost of a batch:
    HPP = sum(material cost * qty) + labor + overhead + packaging

The suggested selling price applies the margin over cost:
    suggested_price = HPP * (1 + margin / 100)

Materials are passed as mappings with ``name``, ``cost`` and ``qty`` keys.
"""

from typing import Any, Dict, Iterable, List, Mapping

from genhpp.core.constants import (
    LABEL_LABOR,
    LABEL_MATERIALS,
    LABEL_OVERHEAD,
    LABEL_PACKAGING,
)
from genhpp.utils.error_utils import error_handler
from genhpp.utils.rate_utils import pct_to_decimal


@error_handler
def total_material_cost(materials: Iterable[Mapping[str, Any]]) -> float:
    """Sum of cost * qty over all materials."""
    return float(sum(float(m["cost"]) * float(m["qty"]) for m in materials))


def _cost_breakdown(materials_cost: float, labor_cost: float, overhead: float, packaging: float) -> List[Dict[str, Any]]:
    components = [
        (LABEL_MATERIALS, materials_cost),
        (LABEL_LABOR, labor_cost),
        (LABEL_OVERHEAD, overhead),
        (LABEL_PACKAGING, packaging),
    ]
    return [{"name": name, "value": value} for name, value in components if value > 0]


def _priced(total_hpp: float, margin: float) -> Dict[str, float]:
    profit = total_hpp * pct_to_decimal(margin)
    return {
        "total_hpp": total_hpp,
        "profit": profit,
        "suggested_price": total_hpp + profit,
    }


@error_handler
def calculate_hpp(
    materials: Iterable[Mapping[str, Any]],
    labor_cost: float,
    overhead: float,
    packaging: float,
    margin: float,
) -> Dict[str, Any]:
    """
    Calculate HPP and suggested selling price for a production batch.

    Args:
        materials: Material lines ({name, cost, qty})
        labor_cost: Labor cost for the batch
        overhead: Overhead cost for the batch
        packaging: Packaging cost for the batch
        margin: Profit margin as percentage (e.g., 30.0)

    Returns:
        Dict with total_material_cost, total_hpp, profit, suggested_price
        and cost_breakdown (components with a positive value only)

    Examples:
        >>> calculate_hpp([{"name": "Tepung", "cost": 10000, "qty": 2}], 5000, 0, 1000, 50)["suggested_price"]
        39000.0
    """
    materials = list(materials)
    materials_cost = total_material_cost(materials)
    total_hpp = materials_cost + float(labor_cost) + float(overhead) + float(packaging)

    result: Dict[str, Any] = {"total_material_cost": materials_cost}
    result.update(_priced(total_hpp, margin))
    result["cost_breakdown"] = _cost_breakdown(materials_cost, float(labor_cost), float(overhead), float(packaging))
    return result


@error_handler
def quick_hpp(total_material_cost: float, labor_cost: float, packaging: float, margin: float) -> Dict[str, Any]:
    """Quick mode: a single material total and no overhead."""
    total_hpp = float(total_material_cost) + float(labor_cost) + float(packaging)

    result: Dict[str, Any] = {"total_material_cost": float(total_material_cost)}
    result.update(_priced(total_hpp, margin))
    result["cost_breakdown"] = _cost_breakdown(float(total_material_cost), float(labor_cost), 0.0, float(packaging))
    return result


def per_product_breakdown(
    materials: Iterable[Mapping[str, Any]],
    labor_cost: float,
    overhead: float,
    packaging: float,
    product_quantity: int,
) -> Dict[str, Any]:
    """
    Cost per unit for a public calculation detail view.

    Labor and overhead are spread over product_quantity; packaging is already
    per unit. Material lines are returned with their line totals.
    """
    quantity = int(product_quantity or 0)
    lines = [
        {
            "name": m["name"],
            "cost": float(m["cost"]),
            "qty": float(m["qty"]),
            "total": float(m["cost"]) * float(m["qty"]),
        }
        for m in materials
    ]
    return {
        "materials": lines,
        "labor_per_product": float(labor_cost) / quantity if quantity > 0 else 0.0,
        "overhead_per_product": float(overhead) / quantity if quantity > 0 else 0.0,
        "packaging_per_product": float(packaging),
    }
