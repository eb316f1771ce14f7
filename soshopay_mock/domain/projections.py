"""Project raw store records into app-facing shapes with mapped enums"""

from typing import Any, Dict, Mapping

from soshopay_mock.domain.enums import map_loan_type, map_payment_status, raw_status_to_binary
from soshopay_mock.domain.models import PaymentView


def project_payment(payment: Mapping[str, Any]) -> PaymentView:
    """Raw payment record -> PaymentView; timestamps keep their stored form"""
    breakdown = payment.get("breakdown")
    if breakdown is not None:
        breakdown = {
            "principal": breakdown.get("principal", 0),
            "interest": breakdown.get("interest", 0),
            "penalties": breakdown.get("penalties", 0),
        }

    return PaymentView(
        id=payment.get("id"),
        payment_id=payment.get("payment_id"),
        loan_id=payment.get("loan_id"),
        client_id=payment.get("client_id"),
        amount=payment.get("amount", 0),
        method=payment.get("method"),
        phone_number=payment.get("phone_number"),
        receipt_number=payment.get("receipt_number"),
        status=map_payment_status(raw_status_to_binary(payment.get("status"))),
        processed_at=payment.get("processed_at"),
        created_at=payment.get("created_at"),
        breakdown=breakdown,
    )


def project_loan(loan: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy of a loan record with loan_type and status translated"""
    projected = dict(loan)
    if "loan_type" in projected:
        projected["loan_type"] = map_loan_type(projected["loan_type"])
    if "status" in projected:
        projected["status"] = map_payment_status(projected["status"])
    return projected
