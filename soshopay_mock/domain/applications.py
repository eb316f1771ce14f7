"""Loan application intake - validate and acknowledge, nothing is persisted"""

import uuid
from datetime import datetime
from typing import Any, Mapping

from soshopay_mock.domain.enums import LoanStatus, LoanType
from soshopay_mock.domain.models import ApplicationReceipt
from soshopay_mock.domain.validation import require_fields
from soshopay_mock.utils.date_utils import to_epoch_ms, utc_now

CASH_APPLICATION_FIELDS = (
    "loan_amount",
    "repayment_period",
    "employer_industry",
    "collateral_value",
    "monthly_income",
)
PAYGO_APPLICATION_FIELDS = (
    "product_id",
    "daily_usage",
    "repayment_period_months",
    "salary_band",
)


def _receipt(loan_type: LoanType, now: datetime) -> ApplicationReceipt:
    stamp = to_epoch_ms(now)
    return ApplicationReceipt(
        application_id=f"APP{stamp}",
        reference_number=f"{loan_type.value}-{uuid.uuid4().hex[:8].upper()}",
        loan_type=loan_type.value,
        status=LoanStatus.PENDING.value,
        submitted_at=stamp,
    )


def submit_cash_application(fields: Mapping[str, Any], now: datetime | None = None) -> ApplicationReceipt:
    require_fields({name: fields.get(name) for name in CASH_APPLICATION_FIELDS})
    return _receipt(LoanType.CASH, now or utc_now())


def submit_paygo_application(fields: Mapping[str, Any], now: datetime | None = None) -> ApplicationReceipt:
    require_fields({name: fields.get(name) for name in PAYGO_APPLICATION_FIELDS})
    return _receipt(LoanType.PAYGO, now or utc_now())
