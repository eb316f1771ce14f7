"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass
class CashLoanQuote:
    """Repayment terms for a lump-sum cash loan"""

    loan_amount: float
    repayment_period_months: int
    interest_rate: float
    interest_amount: float
    total_amount: float
    monthly_payment: float
    processing_fee: float
    insurance_fee: float
    total_fees: float
    loan_to_value_ratio: float
    approval_likelihood: str
    first_payment_date: int  # epoch ms
    last_payment_date: int  # epoch ms


@dataclass
class PayGoProduct:
    """Asset that can be financed with a PayGo loan"""

    id: str
    name: str
    price: float
    category: str = ""


@dataclass
class PayGoLoanQuote:
    """Daily repayment terms for a PayGo asset loan"""

    product_id: str
    product_name: str
    product_price: float
    repayment_period_months: int
    daily_payment: float
    monthly_payment: float
    total_amount: float
    interest_amount: float
    number_of_payments: int
    estimated_savings: float


@dataclass
class PaymentView:
    """Payment record as presented to the app"""

    id: Optional[str]
    payment_id: Optional[str]
    loan_id: Optional[str]
    client_id: Optional[str]
    amount: float
    method: Optional[str]
    phone_number: Optional[str]
    receipt_number: Optional[str]
    status: str
    processed_at: Any  # ISO string as stored
    created_at: Any  # epoch ms as stored
    breakdown: Optional[Dict[str, float]] = None


@dataclass
class PaymentSummary:
    """Per-loan line on the payments dashboard"""

    loan_id: str
    loan_type: str
    product_name: Optional[str]
    amount_due: float
    due_date: Optional[str]
    status: str
    days_until_due: Optional[int]
    days_overdue: int
    penalties: float


@dataclass
class DashboardView:
    """Read-only aggregate of a client's loans and payments"""

    total_outstanding: float
    next_payment_amount: float
    next_payment_date: Optional[str]
    overdue_amount: float
    overdue_count: int
    payment_summaries: List[PaymentSummary] = field(default_factory=list)
    recent_payments: List[PaymentView] = field(default_factory=list)


@dataclass
class Page(Generic[T]):
    """One window of a filtered collection"""

    items: List[T]
    current_page: int
    total_pages: int
    total_count: int
    has_next: bool
    has_previous: bool


@dataclass
class TokenPair:
    """Opaque bearer/refresh tokens with absolute expiries"""

    access_token: str
    refresh_token: str
    access_expires_at: datetime
    refresh_expires_at: datetime
    token_type: str = "Bearer"


@dataclass
class Session:
    """Result of a successful login or PIN setup"""

    client: Dict[str, Any]
    tokens: TokenPair


@dataclass
class ApplicationReceipt:
    """Acknowledgement of a submitted loan application"""

    application_id: str
    reference_number: str
    loan_type: str
    status: str
    submitted_at: int  # epoch ms
