"""Pydantic schemas for API request/response validation"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict

# Request fields are optional so that missing values reach the domain
# validators and come back as 400 Validation Error, like the mobile app expects.
# Mobile numbers and PINs sent as JSON numbers are read as strings.


class LoginRequest(BaseModel):
    """Request body for POST /mobile/client/login"""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    mobile: Optional[str] = None
    pin: Optional[str] = None


class SetPinRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    mobile: Optional[str] = None
    new_pin: Optional[str] = None
    confirm_pin: Optional[str] = None


class ChangePinRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    current_pin: Optional[str] = None
    new_pin: Optional[str] = None
    confirm_pin: Optional[str] = None


class RefreshTokenRequest(BaseModel):
    refresh_token: Optional[str] = None


class ClientSummary(BaseModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    mobile: Optional[str] = None


class ClientProfile(ClientSummary):
    email: Optional[str] = None
    id_number: Optional[str] = None
    date_of_birth: Optional[str] = None
    address: Optional[Any] = None
    verification_status: Optional[str] = None


class LoginResponse(BaseModel):
    access_token: str
    access_token_type: str
    access_expires_at: str
    refresh_token: str
    refresh_expires_at: str
    device_id: str
    client: ClientSummary


class SetPinResponse(BaseModel):
    token: str
    token_type: str
    expires_at: str
    expires_in: int
    client: ClientSummary


class RefreshTokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    access_expires_at: str
    refresh_expires_at: str


class ProfileResponse(BaseModel):
    client: ClientProfile


class MessageResponse(BaseModel):
    message: str


class LoansResponse(BaseModel):
    loans: List[Dict[str, Any]]


class LoanResponse(BaseModel):
    loan: Dict[str, Any]


class SettledLoansResponse(BaseModel):
    settled_loans: List[Dict[str, Any]]


class SettledLoanResponse(BaseModel):
    settled_loan: Dict[str, Any]


class CashLoanRequest(BaseModel):
    """Cash loan calculation or application"""

    model_config = ConfigDict(extra="allow")

    loan_amount: Optional[float] = None
    repayment_period: Optional[Union[int, str]] = None
    employer_industry: Optional[str] = None
    collateral_value: Optional[float] = None
    monthly_income: Optional[float] = None


class PayGoLoanRequest(BaseModel):
    """PayGo loan calculation or application"""

    model_config = ConfigDict(extra="allow")

    product_id: Optional[str] = None
    daily_usage: Optional[float] = None
    repayment_period_months: Optional[int] = None
    salary_band: Optional[str] = None


class CashQuoteResponse(BaseModel):
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
    first_payment_date: int
    last_payment_date: int


class PayGoQuoteResponse(BaseModel):
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


class PayGoProductSchema(BaseModel):
    id: str
    name: str
    price: float
    category: str = ""


class PayGoProductsResponse(BaseModel):
    products: List[PayGoProductSchema]


class ApplicationResponse(BaseModel):
    application_id: str
    reference_number: str
    loan_type: str
    status: str
    submitted_at: int
    message: str


class PaymentBreakdown(BaseModel):
    principal: float = 0
    interest: float = 0
    penalties: float = 0


class PaymentSchema(BaseModel):
    id: Optional[str] = None
    payment_id: Optional[str] = None
    loan_id: Optional[str] = None
    client_id: Optional[str] = None
    amount: float
    method: Optional[str] = None
    phone_number: Optional[str] = None
    receipt_number: Optional[str] = None
    status: str
    processed_at: Optional[Union[int, str]] = None
    created_at: Optional[Union[int, str]] = None
    breakdown: Optional[PaymentBreakdown] = None


class PaymentSummarySchema(BaseModel):
    loan_id: str
    loan_type: str
    product_name: Optional[str] = None
    amount_due: float
    due_date: Optional[str] = None
    status: str
    days_until_due: Optional[int] = None
    days_overdue: int
    penalties: float


class DashboardResponse(BaseModel):
    """Response for GET /payments/dashboard"""

    total_outstanding: float
    next_payment_amount: float
    next_payment_date: Optional[str] = None
    overdue_amount: float
    overdue_count: int
    payment_summaries: List[PaymentSummarySchema]
    recent_payments: List[PaymentSchema]


class PaymentHistoryResponse(BaseModel):
    payments: List[PaymentSchema]
    current_page: int
    total_pages: int
    total_count: int
    has_next: bool
    has_previous: bool


class PaymentMethod(BaseModel):
    id: str
    name: str
    type: str
    provider: str
    is_available: bool
    minimum_amount: float
    maximum_amount: float
    transaction_fee: float
    processing_time: str


class PaymentMethodsResponse(BaseModel):
    methods: List[PaymentMethod]


class ProcessPaymentRequest(BaseModel):
    loan_id: Optional[str] = None
    amount: Optional[float] = None
    payment_method: Optional[str] = None
    phone_number: Optional[str] = None


class ProcessPaymentResponse(BaseModel):
    payment_id: str
    receipt_number: str
    status: str
    message: str
    estimated_completion: str


class PaymentStatusResponse(BaseModel):
    payment_id: str
    status: str
    amount: float
    receipt_number: Optional[str] = None
    processed_at: Optional[Union[int, str]] = None


class ReceiptResponse(BaseModel):
    receipt_number: str
    download_url: str
    message: str


class NotificationListResponse(BaseModel):
    notifications: List[Dict[str, Any]]
    current_page: int
    total_pages: int
    total_count: int
    has_next: bool
    has_previous: bool
    unread_count: int


class UnreadCountResponse(BaseModel):
    unread_count: int
