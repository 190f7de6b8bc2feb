"""
Loan instalment calculator.

Standard annuity:
    r = annual_rate / 100 / 12
    payment = P * r * (1 + r)^n / ((1 + r)^n - 1)
With r = 0 the payment is P / n and no interest accrues.

The amortisation schedule uses numpy_financial ipmt/ppmt so the per-month
split matches the closed-form payment.
"""

from typing import Any, Dict, List

import numpy as np
import numpy_financial as npf
import pandas as pd

from genhpp.utils.error_utils import error_handler
from genhpp.utils.rate_utils import annual_pct_to_monthly_decimal


@error_handler
def monthly_payment(amount: float, interest_rate_annual_pct: float, term_months: int) -> float:
    """Fixed monthly instalment for an annuity loan."""
    principal = float(amount)
    n = int(term_months)
    r = annual_pct_to_monthly_decimal(interest_rate_annual_pct)
    if r == 0:
        return principal / n
    growth = (1 + r) ** n
    return principal * r * growth / (growth - 1)


@error_handler
def calculate_loan(amount: float, interest_rate_annual_pct: float, term_months: int) -> Dict[str, float]:
    """
    Summarise an annuity loan.

    Returns:
        Dict with monthly_payment, total_payment and total_interest
    """
    payment = monthly_payment(amount, interest_rate_annual_pct, term_months)
    total_payment = payment * int(term_months)
    return {
        "monthly_payment": payment,
        "total_payment": total_payment,
        "total_interest": total_payment - float(amount),
    }


@error_handler
def get_schedule(amount: float, interest_rate_annual_pct: float, term_months: int) -> pd.DataFrame:
    """
    Calculate the loan amortisation schedule.

    Returns:
        DataFrame with columns: month, payment, interest_payment,
        principal_payment, remaining_balance
    """
    n = int(term_months)
    principal = float(amount)
    monthly_rate_decimal = annual_pct_to_monthly_decimal(interest_rate_annual_pct)
    periods = np.arange(1, n + 1)

    if monthly_rate_decimal == 0:
        principal_payment = np.full(n, principal / n)
        interest_payment = np.zeros(n)
    else:
        # numpy_financial returns outflows as negatives for a positive pv
        interest_payment = -npf.ipmt(rate=monthly_rate_decimal, per=periods, nper=n, pv=principal)
        principal_payment = -npf.ppmt(rate=monthly_rate_decimal, per=periods, nper=n, pv=principal)

    df = pd.DataFrame(
        {
            "month": periods,
            "interest_payment": interest_payment,
            "principal_payment": principal_payment,
        }
    )
    df["payment"] = df["interest_payment"] + df["principal_payment"]
    df["remaining_balance"] = (principal - df["principal_payment"].cumsum()).clip(lower=0)
    return df[["month", "payment", "interest_payment", "principal_payment", "remaining_balance"]]


def schedule_records(amount: float, interest_rate_annual_pct: float, term_months: int) -> List[Dict[str, Any]]:
    """Amortisation schedule as JSON-friendly rows."""
    df = get_schedule(amount, interest_rate_annual_pct, term_months)
    return [
        {
            "month": int(row.month),
            "payment": float(row.payment),
            "interest_payment": float(row.interest_payment),
            "principal_payment": float(row.principal_payment),
            "remaining_balance": float(row.remaining_balance),
        }
        for row in df.itertuples(index=False)
    ]
