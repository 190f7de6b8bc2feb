"""
Test suite for the HPP calculator core.
"""

import pytest

from genhpp.core.hpp import calculate_hpp, per_product_breakdown, quick_hpp, total_material_cost
from genhpp.utils.error_utils import GenHPPError


MATERIALS = [
    {"name": "Tepung", "cost": 10000, "qty": 2},
    {"name": "Telur", "cost": 2000, "qty": 5},
]


def test_total_material_cost():
    """Test material cost is the sum of cost * qty."""
    assert total_material_cost(MATERIALS) == 30000.0
    assert total_material_cost([]) == 0.0


def test_calculate_hpp():
    """Test HPP, profit and suggested price for a batch."""
    result = calculate_hpp(MATERIALS, 15000, 5000, 2000, 30)
    assert result["total_material_cost"] == 30000.0
    assert result["total_hpp"] == 52000.0
    assert result["profit"] == pytest.approx(15600)
    assert result["suggested_price"] == pytest.approx(67600)


def test_calculate_hpp_zero_margin():
    """Test that a zero margin sells at cost."""
    result = calculate_hpp(MATERIALS, 0, 0, 0, 0)
    assert result["suggested_price"] == result["total_hpp"] == 30000.0
    assert result["profit"] == 0


def test_cost_breakdown_skips_zero_components():
    """Test only positive components appear in the breakdown."""
    result = calculate_hpp(MATERIALS, 15000, 0, 0, 10)
    assert result["cost_breakdown"] == [
        {"name": "Bahan Baku", "value": 30000.0},
        {"name": "Tenaga Kerja", "value": 15000.0},
    ]


def test_calculate_hpp_accepts_string_numbers():
    """Test stored values arriving as strings or Decimals are coerced."""
    result = calculate_hpp([{"name": "Gula", "cost": "1500", "qty": "4"}], "1000", 0, 0, "50")
    assert result["total_hpp"] == 7000.0
    assert result["suggested_price"] == 10500.0


def test_bad_material_raises_genhpp_error():
    """Test malformed material rows surface as GenHPPError."""
    with pytest.raises(GenHPPError) as excinfo:
        calculate_hpp([{"name": "Gula"}], 0, 0, 0, 10)
    assert excinfo.value.details["error_type"] == "KeyError"
    assert isinstance(excinfo.value.__cause__, KeyError)


def test_quick_hpp_has_no_overhead():
    """Test quick mode adds materials, labor and packaging only."""
    result = quick_hpp(40000, 10000, 0, 50)
    assert result["total_hpp"] == 50000.0
    assert result["suggested_price"] == 75000.0
    assert [c["name"] for c in result["cost_breakdown"]] == ["Bahan Baku", "Tenaga Kerja"]


def test_per_product_breakdown():
    """Test labor and overhead are spread over the batch size."""
    breakdown = per_product_breakdown(MATERIALS, 20000, 10000, 1500, 10)
    assert breakdown["labor_per_product"] == 2000.0
    assert breakdown["overhead_per_product"] == 1000.0
    assert breakdown["packaging_per_product"] == 1500.0
    assert breakdown["materials"][1] == {"name": "Telur", "cost": 2000.0, "qty": 5.0, "total": 10000.0}


def test_per_product_breakdown_without_quantity():
    """Test a missing batch size yields zero per-unit labor and overhead."""
    breakdown = per_product_breakdown(MATERIALS, 20000, 10000, 1500, 0)
    assert breakdown["labor_per_product"] == 0.0
    assert breakdown["overhead_per_product"] == 0.0
