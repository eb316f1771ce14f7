"""Repayment terms for Cash and PayGo loans - core pricing logic"""

import re
from datetime import datetime, timedelta
from typing import Callable

from soshopay_mock.domain.exceptions import ValidationError
from soshopay_mock.domain.models import CashLoanQuote, PayGoLoanQuote
from soshopay_mock.domain.ports import ProductCatalog
from soshopay_mock.domain.validation import require_fields
from soshopay_mock.utils.date_utils import to_epoch_ms, utc_now

DAYS_PER_MONTH = 30
DEFAULT_PERIOD_MONTHS = 12
PAYGO_MARKUP = 1.15

ApprovalScorer = Callable[[float, float], str]
SavingsEstimator = Callable[[float, int], float]


def collateral_approval_likelihood(principal: float, collateral_value: float) -> str:
    """Presentation-only guess: well-collateralised loans look likely to pass"""
    return "High" if collateral_value >= principal * 1.5 else "Medium"


def usage_savings_estimate(daily_usage: float, months: int) -> float:
    """Presentation-only guess at what the asset saves over the loan term"""
    return daily_usage * 0.5 * months * DAYS_PER_MONTH


def parse_repayment_period(period) -> int:
    """
    Convert a period descriptor into a number of months.

    "6 months" -> 6, "2 years" -> 24, 9 -> 9, "flexible" -> 12
    """
    if isinstance(period, (int, float)) and not isinstance(period, bool):
        return int(period)

    text = str(period).lower()
    match = re.search(r"\d+", text)
    if not match:
        return DEFAULT_PERIOD_MONTHS

    count = int(match.group())
    if "year" in text:
        return count * 12
    return count


def cash_interest_rate(principal: float, months: int) -> float:
    """
    Annual rate in percent.

    Principal tiers replace the base rate; term discounts are then subtracted:
    - base 15%, > 10,000 -> 12%, > 25,000 -> 10%
    - -1.0 point beyond 12 months, a further -0.5 beyond 18 months
    """
    rate = 15.0
    if principal > 10_000:
        rate = 12.0
    if principal > 25_000:
        rate = 10.0

    if months > 12:
        rate -= 1.0
    if months > 18:
        rate -= 0.5

    return rate


def calculate_cash_quote(
    loan_amount: float | None,
    repayment_period: str | int | None,
    employer_industry: str | None,
    collateral_value: float | None,
    monthly_income: float | None,
    now: datetime | None = None,
    approval_scorer: ApprovalScorer = collateral_approval_likelihood,
) -> CashLoanQuote:
    """
    Price a cash loan with simple interest and level monthly installments.

    Example:
        20,000 over "12 months" -> 12% rate, 2,400 interest,
        22,400 total, 1,866.67 a month, 600 in fees
    """
    require_fields(
        {
            "loan_amount": loan_amount,
            "repayment_period": repayment_period,
            "employer_industry": employer_industry,
            "collateral_value": collateral_value,
            "monthly_income": monthly_income,
        }
    )

    if now is None:
        now = utc_now()

    months = parse_repayment_period(repayment_period)
    if months == 0:
        raise ValidationError("Repayment period must be at least one month")
    rate = cash_interest_rate(loan_amount, months)

    interest = loan_amount * rate * months / 1200
    total = loan_amount + interest
    monthly = total / months

    return CashLoanQuote(
        loan_amount=round(loan_amount, 2),
        repayment_period_months=months,
        interest_rate=rate,
        interest_amount=round(interest, 2),
        total_amount=round(total, 2),
        monthly_payment=round(monthly, 2),
        processing_fee=round(loan_amount * 0.02, 2),
        insurance_fee=round(loan_amount * 0.01, 2),
        total_fees=round(loan_amount * 0.03, 2),
        loan_to_value_ratio=round(loan_amount / collateral_value * 100, 2),
        approval_likelihood=approval_scorer(loan_amount, collateral_value),
        first_payment_date=to_epoch_ms(now + timedelta(days=DAYS_PER_MONTH)),
        last_payment_date=to_epoch_ms(now + timedelta(days=months * DAYS_PER_MONTH)),
    )


def calculate_paygo_quote(
    product_id: str | None,
    daily_usage: float | None,
    repayment_period_months: int | None,
    salary_band: str | None,
    catalog: ProductCatalog,
    savings_estimator: SavingsEstimator = usage_savings_estimate,
) -> PayGoLoanQuote:
    """
    Price a PayGo loan as one payment per day with a flat 15% markup.

    Example:
        420.00 product over 12 months -> 1.34/day, 40.25/month,
        483.00 total, 63.00 markup
    """
    require_fields(
        {
            "product_id": product_id,
            "daily_usage": daily_usage,
            "repayment_period_months": repayment_period_months,
            "salary_band": salary_band,
        }
    )

    months = int(repayment_period_months)
    if months == 0:
        raise ValidationError("Repayment period must be at least one month")
    product = catalog.get_product(product_id)
    number_of_payments = months * DAYS_PER_MONTH

    daily = product.price / number_of_payments * PAYGO_MARKUP
    total = daily * number_of_payments

    return PayGoLoanQuote(
        product_id=product.id,
        product_name=product.name,
        product_price=round(product.price, 2),
        repayment_period_months=months,
        daily_payment=round(daily, 2),
        monthly_payment=round(daily * DAYS_PER_MONTH, 2),
        total_amount=round(total, 2),
        interest_amount=round(total - product.price, 2),
        number_of_payments=number_of_payments,
        estimated_savings=round(savings_estimator(daily_usage, months), 2),
    )
