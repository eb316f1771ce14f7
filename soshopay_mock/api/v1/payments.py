"""Payment dashboard, history and processing endpoints"""

import logging
from dataclasses import asdict
from datetime import timedelta

from fastapi import APIRouter, Depends, Query, Request

from soshopay_mock.api.dependencies import get_request_id, get_store, require_bearer_token
from soshopay_mock.api.v1.schemas import (
    DashboardResponse,
    PaymentHistoryResponse,
    PaymentMethod,
    PaymentMethodsResponse,
    PaymentSchema,
    PaymentStatusResponse,
    ProcessPaymentRequest,
    ProcessPaymentResponse,
    ReceiptResponse,
)
from soshopay_mock.config import settings
from soshopay_mock.domain.dashboard import build_dashboard
from soshopay_mock.domain.enums import LoanStatus
from soshopay_mock.domain.exceptions import NotFoundError, ValidationError
from soshopay_mock.domain.pagination import paginate
from soshopay_mock.domain.ports import LOANS, PAYMENTS
from soshopay_mock.domain.projections import project_payment
from soshopay_mock.infrastructure.database.repositories import SqlRecordStore
from soshopay_mock.infrastructure.observability.metrics import dashboard_counter
from soshopay_mock.utils.date_utils import to_epoch_ms, to_iso, utc_now

router = APIRouter(prefix="/payments", dependencies=[Depends(require_bearer_token)])

PAYMENT_METHODS = [
    PaymentMethod(
        id="ecocash",
        name="EcoCash",
        type="mobile_money",
        provider="Econet",
        is_available=True,
        minimum_amount=1.0,
        maximum_amount=500000.0,
        transaction_fee=0.0,
        processing_time="2-5 minutes",
    )
]

ESTIMATED_PROCESSING_TIME = timedelta(minutes=3)


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(store: SqlRecordStore = Depends(get_store)):
    """
    Outstanding totals, overdue loans, the next payment due and the five
    most recent payments.
    """
    view = build_dashboard(store.find_all(LOANS), store.find_all(PAYMENTS), utc_now())
    dashboard_counter.inc()
    return DashboardResponse(**asdict(view))


@router.get("/history", response_model=PaymentHistoryResponse)
def get_payment_history(
    page: int = Query(1),
    limit: int = Query(20),
    store: SqlRecordStore = Depends(get_store),
):
    result = paginate(store.find_all(PAYMENTS), page, limit)
    return PaymentHistoryResponse(
        payments=[PaymentSchema(**asdict(project_payment(p))) for p in result.items],
        current_page=result.current_page,
        total_pages=result.total_pages,
        total_count=result.total_count,
        has_next=result.has_next,
        has_previous=result.has_previous,
    )


@router.get("/methods", response_model=PaymentMethodsResponse)
def get_payment_methods():
    return PaymentMethodsResponse(methods=PAYMENT_METHODS)


@router.post("/process", response_model=ProcessPaymentResponse)
def process_payment(body: ProcessPaymentRequest, request: Request):
    """Accept a mobile-money payment; nothing is charged or stored"""
    if not body.loan_id or not body.amount or not body.payment_method or not body.phone_number:
        raise ValidationError("All payment fields are required")

    now = utc_now()
    stamp = to_epoch_ms(now)
    payment_id = f"PAY{stamp}"

    logging.info(
        "Payment accepted",
        extra={
            "request_id": get_request_id(request),
            "payment_id": payment_id,
            "loan_id": body.loan_id,
            "amount": body.amount,
        },
    )

    return ProcessPaymentResponse(
        payment_id=payment_id,
        receipt_number=f"REC{stamp}",
        status=LoanStatus.PROCESSING.value,
        message="Payment is being processed. Please wait 2-5 minutes.",
        estimated_completion=to_iso(now + ESTIMATED_PROCESSING_TIME),
    )


@router.get("/receipt/{receipt_number}", response_model=ReceiptResponse)
def download_receipt(receipt_number: str):
    return ReceiptResponse(
        receipt_number=receipt_number,
        download_url=f"{settings.receipt_base_url}/{receipt_number}.pdf",
        message="Receipt ready for download",
    )


@router.get("/{payment_id}/status", response_model=PaymentStatusResponse)
def get_payment_status(payment_id: str, store: SqlRecordStore = Depends(get_store)):
    payment = store.find_by(PAYMENTS, lambda p: p.get("payment_id") == payment_id)
    if payment is None:
        raise NotFoundError("Payment not found")

    view = project_payment(payment)
    return PaymentStatusResponse(
        payment_id=view.payment_id,
        status=view.status,
        amount=view.amount,
        receipt_number=view.receipt_number,
        processed_at=view.processed_at,
    )
