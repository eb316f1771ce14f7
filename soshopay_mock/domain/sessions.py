"""Mock credential and token lifecycle"""

import logging
import re
import uuid
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from soshopay_mock.domain.exceptions import NotFoundError, UnauthorizedError, ValidationError
from soshopay_mock.domain.models import Session, TokenPair
from soshopay_mock.domain.phone import normalize_mobile
from soshopay_mock.domain.ports import CLIENTS, Record, RecordStore
from soshopay_mock.utils.date_utils import to_epoch_ms, utc_now

logger = logging.getLogger(__name__)

# Tokens the mock treats as "this call must fail"
REJECTED_TOKENS = frozenset({"expired", "invalid"})

ACCESS_PREFIX = "mock_access_token_"
REFRESH_PREFIX = "mock_refresh_token_"
ANONYMOUS_IDENTITY = "refreshed"

_PIN_PATTERN = re.compile(r"^\d{4}$")
# <identity>_<epoch ms>[_<8 hex>]; older tokens have no suffix
_TOKEN_BODY_PATTERN = re.compile(r"^(?P<identity>.+?)_\d+(?:_[0-9a-f]{8})?$")


def is_rejected_token(token: Optional[str]) -> bool:
    return not token or token in REJECTED_TOKENS


def _validate_new_pin(new_pin: str, confirm_pin: str, mismatch_message: str) -> None:
    if new_pin != confirm_pin:
        raise ValidationError(mismatch_message)
    if not _PIN_PATTERN.match(str(new_pin)):
        raise ValidationError("PIN must be 4 digits")


def _identity_from_token(token: str) -> Optional[str]:
    """Client id embedded in a mock token, if any"""
    for prefix in (ACCESS_PREFIX, REFRESH_PREFIX):
        if token.startswith(prefix):
            match = _TOKEN_BODY_PATTERN.match(token[len(prefix):])
            if match and match.group("identity") != ANONYMOUS_IDENTITY:
                return match.group("identity")
    return None


class SessionIssuer:
    """
    Login, PIN management and token refresh against the clients collection.

    Tokens are opaque strings derived from the client id and the time; they
    are not signed and nothing validates them beyond the rejected sentinels.
    """

    def __init__(
        self,
        store: RecordStore,
        access_ttl: timedelta = timedelta(hours=1),
        refresh_ttl: timedelta = timedelta(hours=24),
        country_code: str = "263",
    ):
        self.store = store
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self.country_code = country_code

    def find_client_by_mobile(self, mobile: str) -> Record:
        key = normalize_mobile(mobile, self.country_code)
        client = None
        if key is not None:
            client = self.store.find_by(
                CLIENTS,
                lambda c: normalize_mobile(c.get("mobile"), self.country_code) == key,
            )
        if client is None:
            logger.info("Client not found", extra={"mobile": mobile, "normalized_mobile": key})
            raise NotFoundError("Client not found")
        return client

    def mint_tokens(self, client_id: Optional[str] = None, now: Optional[datetime] = None) -> TokenPair:
        if now is None:
            now = utc_now()
        identity = client_id or ANONYMOUS_IDENTITY
        stamp = to_epoch_ms(now)
        return TokenPair(
            access_token=f"{ACCESS_PREFIX}{identity}_{stamp}_{uuid.uuid4().hex[:8]}",
            refresh_token=f"{REFRESH_PREFIX}{identity}_{stamp}_{uuid.uuid4().hex[:8]}",
            access_expires_at=now + self.access_ttl,
            refresh_expires_at=now + self.refresh_ttl,
        )

    def login(self, mobile: Optional[str], pin: Optional[str]) -> Session:
        """
        Raises:
            ValidationError: mobile or pin missing
            NotFoundError: no client with this normalized mobile
            UnauthorizedError: PIN mismatch
        """
        if not mobile or not pin:
            raise ValidationError("Mobile and PIN are required")

        client = self.find_client_by_mobile(mobile)
        if str(client.get("pin")) != str(pin):
            logger.info("Invalid PIN", extra={"client_id": client.get("id")})
            raise UnauthorizedError("Invalid PIN")

        return Session(client=client, tokens=self.mint_tokens(client.get("id")))

    def set_pin(self, mobile: Optional[str], new_pin: Optional[str], confirm_pin: Optional[str]) -> Session:
        """First-time PIN setup, identified by mobile number"""
        if not mobile or not new_pin or not confirm_pin:
            raise ValidationError("Mobile, new_pin, and confirm_pin are required")
        _validate_new_pin(new_pin, confirm_pin, "PINs do not match")

        client = self.find_client_by_mobile(mobile)
        updated = self.store.update(CLIENTS, client["id"], {"pin": new_pin})
        return Session(client=updated or client, tokens=self.mint_tokens(client["id"]))

    def change_pin(
        self,
        client_id: str,
        current_pin: Optional[str],
        new_pin: Optional[str],
        confirm_pin: Optional[str],
    ) -> None:
        if not current_pin or not new_pin or not confirm_pin:
            raise ValidationError("All PIN fields are required")
        _validate_new_pin(new_pin, confirm_pin, "New PINs do not match")

        client = self.store.find_by_id(CLIENTS, client_id)
        if client is None:
            raise NotFoundError("Client not found")
        if str(client.get("pin")) != str(current_pin):
            raise UnauthorizedError("Current PIN is incorrect")

        self.store.update(CLIENTS, client_id, {"pin": new_pin})

    def refresh(self, refresh_token: Optional[str]) -> TokenPair:
        """Exchange any non-sentinel refresh token for a new pair"""
        if is_rejected_token(refresh_token):
            raise UnauthorizedError("Invalid or expired refresh token")
        return self.mint_tokens(_identity_from_token(refresh_token))

    def client_for_token(self, token: str) -> Record:
        """
        Client the token was minted for, falling back to the first client
        for tokens that carry no known identity.
        """
        client_id = _identity_from_token(token)
        client: Optional[Dict[str, Any]] = None
        if client_id is not None:
            client = self.store.find_by_id(CLIENTS, client_id)
        if client is None:
            clients = self.store.find_all(CLIENTS)
            client = clients[0] if clients else None
        if client is None:
            raise NotFoundError("Client not found")
        return client
