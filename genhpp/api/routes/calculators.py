"""
Stateless calculator endpoints.

Nothing here touches the database; every endpoint validates its input and
returns the computed figures.
"""

from fastapi import APIRouter

from genhpp.api.schemas import (
    AdsRequest,
    AdsResult,
    HPPInput,
    HPPResult,
    IdealPriceRequest,
    IdealPriceResult,
    LoanRequest,
    LoanResult,
    PreVatPriceRequest,
    PreVatPriceResult,
    ProfitSimulationRequest,
    ProfitSimulationResult,
    QuickHPPRequest,
    TargetProfitRequest,
    TargetProfitResult,
)
from genhpp.core import ads, hpp, loan, pricing


router = APIRouter()


@router.post("/hpp", response_model=HPPResult)
def hpp_calculator(payload: HPPInput):
    data = payload.model_dump()
    return hpp.calculate_hpp(data["materials"], data["labor_cost"], data["overhead"], data["packaging"], data["margin"])


@router.post("/quick-hpp", response_model=HPPResult)
def quick_hpp_calculator(payload: QuickHPPRequest):
    """HPP from a single material total, without overhead."""
    return hpp.quick_hpp(payload.total_material_cost, payload.labor_cost, payload.packaging, payload.margin)


@router.post("/ideal-price", response_model=IdealPriceResult)
def ideal_price_calculator(payload: IdealPriceRequest):
    return pricing.ideal_price(payload.cost, payload.margin)


@router.post("/pre-vat-price", response_model=PreVatPriceResult)
def pre_vat_price_calculator(payload: PreVatPriceRequest):
    return pricing.pre_vat_price(payload.final_price, payload.vat)


@router.post("/profit-simulation", response_model=ProfitSimulationResult)
def profit_simulation(payload: ProfitSimulationRequest):
    return pricing.simulate_profit(payload.base_hpp, payload.base_price, payload.new_hpp, payload.new_price)


@router.post("/target-profit", response_model=TargetProfitResult)
def target_profit_calculator(payload: TargetProfitRequest):
    return {
        "profit_per_product": payload.profit_per_product,
        "profit_target": payload.profit_target,
        "units_to_sell": pricing.units_for_target(payload.profit_per_product, payload.profit_target),
    }


@router.post("/loan", response_model=LoanResult)
def loan_calculator(payload: LoanRequest):
    """Annuity instalment, optionally with the month-by-month schedule."""
    result = loan.calculate_loan(payload.amount, payload.interest_rate_annual_pct, payload.term_months)
    if payload.include_schedule:
        result["schedule"] = loan.schedule_records(
            payload.amount, payload.interest_rate_annual_pct, payload.term_months
        )
    return result


@router.post("/ads", response_model=AdsResult)
def ads_calculator(payload: AdsRequest):
    return ads.analyze_campaigns([c.model_dump() for c in payload.campaigns])
