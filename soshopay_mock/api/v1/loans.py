"""Loan listing, quotes and applications"""

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from soshopay_mock.api.dependencies import (
    get_product_catalog,
    get_request_id,
    get_store,
    require_bearer_token,
)
from soshopay_mock.api.v1.schemas import (
    ApplicationResponse,
    CashLoanRequest,
    CashQuoteResponse,
    LoanResponse,
    LoansResponse,
    PayGoLoanRequest,
    PayGoProductSchema,
    PayGoProductsResponse,
    PayGoQuoteResponse,
    SettledLoanResponse,
    SettledLoansResponse,
)
from soshopay_mock.domain.applications import submit_cash_application, submit_paygo_application
from soshopay_mock.domain.enums import LoanType
from soshopay_mock.domain.exceptions import NotFoundError
from soshopay_mock.domain.loan_terms import calculate_cash_quote, calculate_paygo_quote
from soshopay_mock.domain.ports import LOANS, SETTLED_LOANS
from soshopay_mock.domain.projections import project_loan
from soshopay_mock.infrastructure.database.repositories import SqlRecordStore, StoreProductCatalog
from soshopay_mock.infrastructure.observability.logging import log_quote
from soshopay_mock.infrastructure.observability.metrics import application_counter, record_quote

router = APIRouter(prefix="/mobile/client/loans", dependencies=[Depends(require_bearer_token)])


@router.get("", response_model=LoansResponse)
def list_loans(
    status: Optional[int] = Query(None, description="Raw loan status code (0-6)"),
    store: SqlRecordStore = Depends(get_store),
):
    loans = store.find_all(LOANS)
    if status is not None:
        loans = [loan for loan in loans if loan.get("status") == status]
    return LoansResponse(loans=[project_loan(loan) for loan in loans])


@router.get("/settled", response_model=SettledLoansResponse)
def list_settled_loans(store: SqlRecordStore = Depends(get_store)):
    return SettledLoansResponse(settled_loans=[project_loan(loan) for loan in store.find_all(SETTLED_LOANS)])


@router.get("/settled/{loan_id}", response_model=SettledLoanResponse)
def get_settled_loan(loan_id: str, store: SqlRecordStore = Depends(get_store)):
    loan = store.find_by_id(SETTLED_LOANS, loan_id)
    if loan is None:
        raise NotFoundError("Settled loan not found")
    return SettledLoanResponse(settled_loan=project_loan(loan))


@router.get("/paygo/products", response_model=PayGoProductsResponse)
def list_paygo_products(catalog: StoreProductCatalog = Depends(get_product_catalog)):
    return PayGoProductsResponse(products=[PayGoProductSchema(**asdict(p)) for p in catalog.list_products()])


@router.post("/cash/calculate", response_model=CashQuoteResponse)
def calculate_cash_loan(body: CashLoanRequest, request: Request):
    """
    Quote repayment terms for a cash loan.

    All of loan_amount, repayment_period, employer_industry, collateral_value
    and monthly_income are required.
    """
    quote = calculate_cash_quote(
        loan_amount=body.loan_amount,
        repayment_period=body.repayment_period,
        employer_industry=body.employer_industry,
        collateral_value=body.collateral_value,
        monthly_income=body.monthly_income,
    )

    record_quote(LoanType.CASH.value, quote.loan_amount)
    log_quote(get_request_id(request), LoanType.CASH.value, quote.loan_amount, quote.repayment_period_months)

    return CashQuoteResponse(**asdict(quote))


@router.post("/paygo/calculate", response_model=PayGoQuoteResponse)
def calculate_paygo_loan(
    body: PayGoLoanRequest,
    request: Request,
    catalog: StoreProductCatalog = Depends(get_product_catalog),
):
    """Quote daily repayments for a PayGo product"""
    quote = calculate_paygo_quote(
        product_id=body.product_id,
        daily_usage=body.daily_usage,
        repayment_period_months=body.repayment_period_months,
        salary_band=body.salary_band,
        catalog=catalog,
    )

    record_quote(LoanType.PAYGO.value, quote.product_price)
    log_quote(get_request_id(request), LoanType.PAYGO.value, quote.product_price, quote.repayment_period_months)

    return PayGoQuoteResponse(**asdict(quote))


@router.post("/cash/apply", response_model=ApplicationResponse)
def apply_cash_loan(body: CashLoanRequest):
    receipt = submit_cash_application(body.model_dump())
    application_counter.labels(product=receipt.loan_type).inc()
    return ApplicationResponse(**asdict(receipt), message="Cash loan application submitted successfully")


@router.post("/paygo/apply", response_model=ApplicationResponse)
def apply_paygo_loan(body: PayGoLoanRequest):
    receipt = submit_paygo_application(body.model_dump())
    application_counter.labels(product=receipt.loan_type).inc()
    return ApplicationResponse(**asdict(receipt), message="PayGo loan application submitted successfully")


@router.get("/{loan_id}", response_model=LoanResponse)
def get_loan(loan_id: str, store: SqlRecordStore = Depends(get_store)):
    loan = store.find_by_id(LOANS, loan_id)
    if loan is None:
        raise NotFoundError("Loan not found")
    return LoanResponse(loan=project_loan(loan))
