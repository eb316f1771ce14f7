"""Unit tests for the payments dashboard aggregation"""

from datetime import datetime, timedelta, timezone

from soshopay_mock.domain.dashboard import build_dashboard, is_overdue
from soshopay_mock.utils.date_utils import to_iso

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def loan(loan_id, status=6, balance=1000.0, amount=100.0, due=None, loan_type="cash", **extra):
    record = {
        "id": loan_id,
        "loan_type": loan_type,
        "product_name": f"Product {loan_id}",
        "status": status,
        "outstanding_balance": balance,
        "next_payment_amount": amount,
        "next_payment_date": to_iso(due) if due else None,
    }
    record.update(extra)
    return record


def payment(payment_id, status="completed", amount=50.0):
    return {
        "id": payment_id,
        "payment_id": f"PAY{payment_id}",
        "loan_id": "loan_1",
        "amount": amount,
        "status": status,
        "processed_at": "2024-06-01T10:00:00.000Z",
        "created_at": 1717236000000,
    }


def test_dashboard_total_outstanding_ignores_status():
    loans = [
        loan("a", status=6, balance=1000.0),
        loan("b", status=2, balance=250.5),  # completed still counts
        loan("c", status=99, balance=0.25),
    ]
    view = build_dashboard(loans, [], NOW)
    assert view.total_outstanding == 1250.75


def test_dashboard_overdue_yesterday():
    """A loan due yesterday is overdue and contributes its next payment"""
    loans = [
        loan("late", amount=75.5, due=NOW - timedelta(days=1)),
        loan("soon", amount=200.0, due=NOW + timedelta(days=3)),
        loan("undated", amount=999.0, due=None),
    ]
    view = build_dashboard(loans, [], NOW)

    assert view.overdue_count == 1
    assert view.overdue_amount == 75.5


def test_dashboard_overdue_is_date_only():
    """
    Overdue detection looks at the date alone. An older revision also
    flagged loans by status code; a COMPLETED loan with a past date is
    still counted, and an OVERDUE-status loan with a future date is not.
    """
    completed_past = loan("done", status=2, due=NOW - timedelta(days=5))
    overdue_status_future = loan("flagged", status=3, due=NOW + timedelta(days=5))

    assert is_overdue(completed_past, NOW) is True
    assert is_overdue(overdue_status_future, NOW) is False

    view = build_dashboard([completed_past, overdue_status_future], [], NOW)
    assert view.overdue_count == 1


def test_dashboard_next_payment_earliest_current_loan():
    loans = [
        loan("later", status=6, amount=300.0, due=NOW + timedelta(days=20)),
        loan("earlier", status=6, amount=120.0, due=NOW + timedelta(days=4)),
        loan("pending", status=0, amount=5.0, due=NOW + timedelta(days=1)),  # not active
    ]
    view = build_dashboard(loans, [], NOW)

    assert view.next_payment_amount == 120.0
    assert view.next_payment_date == to_iso(NOW + timedelta(days=4))


def test_dashboard_next_payment_without_active_loans():
    view = build_dashboard([loan("p", status=0, due=NOW + timedelta(days=1))], [], NOW)
    assert view.next_payment_amount == 0
    assert view.next_payment_date is None


def test_dashboard_payment_summaries():
    loans = [
        loan("cash", status=6, amount=100.0, due=NOW + timedelta(days=2, hours=1), penalties=5.0),
        loan("solar", status=3, amount=40.25, due=NOW - timedelta(days=3, hours=1), loan_type="pay_go"),
        loan("phone", status=0, amount=0, due=None, loan_type="paygo"),
    ]
    summaries = build_dashboard(loans, [], NOW).payment_summaries

    cash, solar, phone = summaries
    assert cash.loan_type == "CASH"
    assert cash.status == "CURRENT"
    assert cash.days_until_due == 3  # ceil(2.04)
    assert cash.days_overdue == 0
    assert cash.penalties == 5.0

    assert solar.loan_type == "PAYGO"
    assert solar.status == "OVERDUE"
    assert solar.days_until_due == -3  # ceil(-3.04)
    assert solar.days_overdue == 3
    assert solar.penalties == 0

    assert phone.status == "PENDING"
    assert phone.days_until_due is None
    assert phone.days_overdue == 0


def test_dashboard_recent_payments_last_five_newest_first():
    payments = [payment(str(i)) for i in range(1, 8)]
    payments[5]["status"] = "processing"

    recent = build_dashboard([], payments, NOW).recent_payments

    assert [p.id for p in recent] == ["7", "6", "5", "4", "3"]
    # "processing" collapses to PENDING at this boundary
    assert recent[1].status == "PENDING"
    assert recent[0].status == "COMPLETED"
    # timestamps keep their stored representation
    assert recent[0].processed_at == "2024-06-01T10:00:00.000Z"
    assert recent[0].created_at == 1717236000000


def test_dashboard_empty_account():
    view = build_dashboard([], [], NOW)
    assert view.total_outstanding == 0
    assert view.overdue_count == 0
    assert view.payment_summaries == []
    assert view.recent_payments == []


def test_dashboard_unparseable_due_date_is_not_overdue():
    garbled = loan("garbled", status=6, amount=60.0, next_payment_date="15/12/2030")
    view = build_dashboard([garbled], [], NOW)

    assert view.overdue_count == 0
    assert view.next_payment_date is None
    assert view.payment_summaries[0].days_until_due is None
    assert view.payment_summaries[0].due_date == "15/12/2030"
