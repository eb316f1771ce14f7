"""Payments dashboard aggregation - read-only projection of loans and payments"""

from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from soshopay_mock.domain.enums import LoanStatus, map_loan_type, map_payment_status
from soshopay_mock.domain.models import DashboardView, PaymentSummary
from soshopay_mock.domain.projections import project_payment
from soshopay_mock.utils.date_utils import days_between, parse_timestamp

RECENT_PAYMENTS_LIMIT = 5
ACTIVE_STATUSES = frozenset({LoanStatus.CURRENT.value})

Record = Mapping[str, Any]


def is_overdue(loan: Record, now: datetime) -> bool:
    """
    A loan is overdue when its next payment date has passed.

    Status is deliberately ignored: a COMPLETED loan with a stale date
    still counts. Loans without a date are never overdue.
    """
    due = parse_timestamp(loan.get("next_payment_date"))
    return due is not None and due < now


def find_next_payment(loans: Iterable[Record]) -> Optional[Record]:
    """Earliest-due loan among those in an active status"""
    candidates = [
        loan
        for loan in loans
        if map_payment_status(loan.get("status")) in ACTIVE_STATUSES
        and parse_timestamp(loan.get("next_payment_date")) is not None
    ]
    if not candidates:
        return None
    return min(candidates, key=lambda loan: parse_timestamp(loan["next_payment_date"]))


def summarize_loan(loan: Record, now: datetime) -> PaymentSummary:
    due = parse_timestamp(loan.get("next_payment_date"))
    days_until_due = days_between(now, due) if due is not None else None
    days_overdue = abs(days_until_due) if days_until_due is not None and days_until_due < 0 else 0

    return PaymentSummary(
        loan_id=loan.get("id"),
        loan_type=map_loan_type(loan.get("loan_type")),
        product_name=loan.get("product_name"),
        amount_due=loan.get("next_payment_amount") or 0,
        due_date=loan.get("next_payment_date"),
        status=map_payment_status(loan.get("status")),
        days_until_due=days_until_due,
        days_overdue=days_overdue,
        penalties=loan.get("penalties") or 0,
    )


def build_dashboard(loans: Sequence[Record], payments: Sequence[Record], now: datetime) -> DashboardView:
    """
    Aggregate a client's loans and payments into the dashboard view.

    - total_outstanding: every loan's balance, regardless of status
    - overdue_*: loans past their next payment date
    - next_payment_*: earliest due among CURRENT loans
    - recent_payments: last five stored payments, newest first
    """
    total_outstanding = sum(loan.get("outstanding_balance") or 0 for loan in loans)

    overdue_loans = [loan for loan in loans if is_overdue(loan, now)]
    overdue_amount = sum(loan.get("next_payment_amount") or 0 for loan in overdue_loans)

    next_loan = find_next_payment(loans)

    summaries: List[PaymentSummary] = [summarize_loan(loan, now) for loan in loans]
    recent = [project_payment(p) for p in reversed(payments[-RECENT_PAYMENTS_LIMIT:])]

    return DashboardView(
        total_outstanding=round(total_outstanding, 2),
        next_payment_amount=round(next_loan.get("next_payment_amount") or 0, 2) if next_loan else 0,
        next_payment_date=next_loan.get("next_payment_date") if next_loan else None,
        overdue_amount=round(overdue_amount, 2),
        overdue_count=len(overdue_loans),
        payment_summaries=summaries,
        recent_payments=recent,
    )
