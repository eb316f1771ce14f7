"""Unit tests for storage code to enum translation"""

from soshopay_mock.domain.enums import map_loan_type, map_payment_status, raw_status_to_binary


def test_map_loan_type_synonyms():
    assert map_loan_type("cash") == "CASH"
    assert map_loan_type("paygo") == "PAYGO"
    assert map_loan_type("pay_go") == "PAYGO"


def test_map_loan_type_unknown_is_uppercased():
    """New loan types pass through instead of failing"""
    assert map_loan_type("asset_lease") == "ASSET_LEASE"
    assert map_loan_type("CASH") == "CASH"


def test_map_payment_status_table():
    expected = ["PENDING", "PROCESSING", "COMPLETED", "OVERDUE", "FAILED", "CANCELLED", "CURRENT"]
    assert [map_payment_status(code) for code in range(7)] == expected


def test_map_payment_status_unknown_codes_degrade_to_pending():
    for code in (-1, 7, 99, None, "2", 2.5, True):
        assert map_payment_status(code) == "PENDING"


def test_raw_status_to_binary_is_lossy():
    """Only "completed" survives; every intermediate state becomes PENDING"""
    assert raw_status_to_binary("completed") == 2
    for raw in ("processing", "failed", "cancelled", "", None):
        assert raw_status_to_binary(raw) == 0

    assert map_payment_status(raw_status_to_binary("completed")) == "COMPLETED"
    assert map_payment_status(raw_status_to_binary("failed")) == "PENDING"
