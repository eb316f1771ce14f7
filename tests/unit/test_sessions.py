"""Unit tests for login, PIN management and token refresh"""

from datetime import timedelta

import pytest
from soshopay_mock.domain.exceptions import NotFoundError, UnauthorizedError, ValidationError
from soshopay_mock.domain.ports import CLIENTS
from soshopay_mock.domain.sessions import SessionIssuer
from soshopay_mock.utils.date_utils import utc_now


@pytest.fixture
def issuer(store) -> SessionIssuer:
    return SessionIssuer(store)


@pytest.mark.parametrize("mobile", ["0771234567", "771234567", "263771234567", "+263 77 123 4567"])
def test_login_any_mobile_format(issuer: SessionIssuer, mobile: str):
    session = issuer.login(mobile, "1234")
    assert session.client["id"] == "client_001"


def test_login_matches_stored_international_format(issuer: SessionIssuer):
    """client_002 is stored as "+263 78 765 4321" """
    session = issuer.login("0787654321", "4321")
    assert session.client["id"] == "client_002"


def test_login_token_expiries(issuer: SessionIssuer):
    before = utc_now()
    tokens = issuer.login("0771234567", "1234").tokens

    assert tokens.access_token != tokens.refresh_token
    assert "client_001" in tokens.access_token
    assert tokens.access_expires_at - before >= timedelta(hours=1)
    assert tokens.access_expires_at - before < timedelta(hours=1, minutes=1)
    assert tokens.refresh_expires_at - tokens.access_expires_at == timedelta(hours=23)


def test_login_wrong_pin(issuer: SessionIssuer):
    with pytest.raises(UnauthorizedError):
        issuer.login("0771234567", "9999")


def test_login_unknown_mobile(issuer: SessionIssuer):
    with pytest.raises(NotFoundError):
        issuer.login("0719999999", "1234")


def test_login_missing_fields(issuer: SessionIssuer):
    with pytest.raises(ValidationError):
        issuer.login("", "1234")
    with pytest.raises(ValidationError):
        issuer.login("0771234567", None)


def test_set_pin_overwrites_stored_pin(issuer: SessionIssuer, store):
    session = issuer.set_pin("+263712345678", "5678", "5678")

    assert session.client["id"] == "client_003"
    assert store.find_by_id(CLIENTS, "client_003")["pin"] == "5678"
    assert issuer.login("712345678", "5678").client["id"] == "client_003"


@pytest.mark.parametrize(
    "new_pin,confirm_pin",
    [("5678", "5679"), ("123", "123"), ("12345", "12345"), ("12a4", "12a4")],
)
def test_set_pin_validation(issuer: SessionIssuer, new_pin, confirm_pin):
    with pytest.raises(ValidationError):
        issuer.set_pin("0771234567", new_pin, confirm_pin)


def test_set_pin_unknown_client(issuer: SessionIssuer):
    with pytest.raises(NotFoundError):
        issuer.set_pin("0719999999", "5678", "5678")


def test_change_pin(issuer: SessionIssuer, store):
    issuer.change_pin("client_001", "1234", "2468", "2468")
    assert store.find_by_id(CLIENTS, "client_001")["pin"] == "2468"


def test_change_pin_wrong_current_pin(issuer: SessionIssuer, store):
    with pytest.raises(UnauthorizedError):
        issuer.change_pin("client_001", "0000", "2468", "2468")
    assert store.find_by_id(CLIENTS, "client_001")["pin"] == "1234"


def test_change_pin_mismatched_confirmation(issuer: SessionIssuer):
    with pytest.raises(ValidationError):
        issuer.change_pin("client_001", "1234", "2468", "8642")


@pytest.mark.parametrize("token", ["expired", "invalid", "", None])
def test_refresh_rejected_tokens(issuer: SessionIssuer, token):
    with pytest.raises(UnauthorizedError):
        issuer.refresh(token)


def test_refresh_issues_fresh_pair(issuer: SessionIssuer):
    original = issuer.login("0771234567", "1234").tokens
    refreshed = issuer.refresh(original.refresh_token)

    assert refreshed.access_token != refreshed.refresh_token
    assert refreshed.access_token != original.access_token
    assert refreshed.refresh_token != original.refresh_token
    assert refreshed.access_expires_at > utc_now()
    assert refreshed.refresh_expires_at > utc_now()
    # identity is carried over
    assert "client_001" in refreshed.access_token


def test_refresh_accepts_arbitrary_token(issuer: SessionIssuer):
    tokens = issuer.refresh("anything-goes")
    assert tokens.access_token.startswith("mock_access_token_")


def test_client_for_token(issuer: SessionIssuer):
    tokens = issuer.login("0787654321", "4321").tokens
    assert issuer.client_for_token(tokens.access_token)["id"] == "client_002"
    # tokens without a known identity fall back to the first client
    assert issuer.client_for_token("opaque")["id"] == "client_001"
    assert issuer.client_for_token("mock_access_token_client_999_1_ab")["id"] == "client_001"


@pytest.mark.parametrize(
    "token",
    [
        "mock_access_token_client_002_1700000000000",
        "mock_access_token_client_002_1700000000000_0a1b2c3d",
        "mock_access_token_client_002_1700000000000_12345678",
    ],
)
def test_client_for_token_with_and_without_suffix(issuer: SessionIssuer, token: str):
    assert issuer.client_for_token(token)["id"] == "client_002"


def test_change_pin_for_unsuffixed_token_hits_its_own_client(issuer: SessionIssuer, store):
    client = issuer.client_for_token("mock_access_token_client_002_1700000000000")
    issuer.change_pin(client["id"], "4321", "2468", "2468")

    assert store.find_by_id(CLIENTS, "client_002")["pin"] == "2468"
    assert store.find_by_id(CLIENTS, "client_001")["pin"] == "1234"
