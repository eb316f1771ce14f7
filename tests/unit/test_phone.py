"""Unit tests for mobile number normalization"""

import pytest
from soshopay_mock.domain.phone import normalize_mobile


@pytest.mark.parametrize(
    "raw",
    [
        "771234567",  # bare national
        "0771234567",  # zero-prefixed
        "263771234567",  # bare country code
        "+263771234567",  # international
        "+263 77 123 4567",
        "(077) 123-4567",
        "263-77-123-4567",
    ],
)
def test_normalize_mobile_formats_share_one_key(raw):
    """Every common format of the same subscriber yields the same key"""
    assert normalize_mobile(raw) == "0771234567"


def test_normalize_mobile_empty_input():
    assert normalize_mobile("") is None
    assert normalize_mobile(None) is None
    assert normalize_mobile("  - ") is None


def test_normalize_mobile_output_is_zero_prefixed_digits():
    key = normalize_mobile("712 345 678")
    assert key == "0712345678"
    assert key.startswith("0")
    assert key[1:].isdigit()


def test_normalize_mobile_rejects_non_digit_input():
    """Letters or foreign + prefixes cannot become a valid key"""
    assert normalize_mobile("07712abc67") is None
    assert normalize_mobile("+44 7700 900123") is None


def test_normalize_mobile_custom_country_code():
    assert normalize_mobile("+27821234567", country_code="27") == "0821234567"


def test_normalize_mobile_different_subscribers_differ():
    """Matching is exact string equality, never partial"""
    assert normalize_mobile("0771234567") != normalize_mobile("0771234568")
