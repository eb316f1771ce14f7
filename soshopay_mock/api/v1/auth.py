"""Client authentication, PIN management and profile endpoints"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from soshopay_mock.api.dependencies import (
    get_current_client,
    get_request_id,
    get_session_issuer,
    require_bearer_token,
)
from soshopay_mock.api.v1.schemas import (
    ChangePinRequest,
    ClientProfile,
    ClientSummary,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ProfileResponse,
    RefreshTokenRequest,
    RefreshTokenResponse,
    SetPinRequest,
    SetPinResponse,
)
from soshopay_mock.domain.exceptions import NotFoundError, UnauthorizedError, ValidationError
from soshopay_mock.domain.ports import Record
from soshopay_mock.domain.sessions import SessionIssuer
from soshopay_mock.infrastructure.database.session import get_db
from soshopay_mock.infrastructure.observability.logging import log_login
from soshopay_mock.infrastructure.observability.metrics import login_counter
from soshopay_mock.utils.date_utils import to_iso

router = APIRouter(prefix="/mobile/client")


def _summary(client: Record) -> ClientSummary:
    return ClientSummary(
        id=client["id"],
        first_name=client.get("first_name"),
        last_name=client.get("last_name"),
        mobile=client.get("mobile"),
    )


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    request: Request,
    issuer: SessionIssuer = Depends(get_session_issuer),
):
    """
    Log in with mobile number and PIN.

    The mobile number may be given in any common format (771234567,
    0771234567, 263771234567, +263 77 123 4567).
    """
    request_id = get_request_id(request)

    try:
        session = issuer.login(body.mobile, body.pin)
    except NotFoundError:
        login_counter.labels(outcome="not_found").inc()
        log_login(request_id, "", "not_found")
        raise
    except UnauthorizedError:
        login_counter.labels(outcome="invalid_pin").inc()
        log_login(request_id, "", "invalid_pin")
        raise

    login_counter.labels(outcome="success").inc()
    log_login(request_id, session.client["id"], "success")

    tokens = session.tokens
    return LoginResponse(
        access_token=tokens.access_token,
        access_token_type=tokens.token_type,
        access_expires_at=to_iso(tokens.access_expires_at),
        refresh_token=tokens.refresh_token,
        refresh_expires_at=to_iso(tokens.refresh_expires_at),
        device_id=request.headers.get("x-device-id", "unknown"),
        client=_summary(session.client),
    )


@router.post("/set-pin", response_model=SetPinResponse)
def set_pin(
    body: SetPinRequest,
    db: Session = Depends(get_db),
    issuer: SessionIssuer = Depends(get_session_issuer),
):
    """First-time PIN setup; returns an access token on success"""
    session = issuer.set_pin(body.mobile, body.new_pin, body.confirm_pin)
    db.commit()

    tokens = session.tokens
    return SetPinResponse(
        token=tokens.access_token,
        token_type=tokens.token_type,
        expires_at=to_iso(tokens.access_expires_at),
        expires_in=int(issuer.access_ttl.total_seconds()),
        client=_summary(session.client),
    )


@router.post("/refresh-token", response_model=RefreshTokenResponse)
def refresh_token(body: RefreshTokenRequest, issuer: SessionIssuer = Depends(get_session_issuer)):
    if not body.refresh_token:
        raise ValidationError("Refresh token is required")

    tokens = issuer.refresh(body.refresh_token)
    return RefreshTokenResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        access_expires_at=to_iso(tokens.access_expires_at),
        refresh_expires_at=to_iso(tokens.refresh_expires_at),
    )


@router.get("/me", response_model=ProfileResponse)
def get_me(client: Record = Depends(get_current_client)):
    return ProfileResponse(client=ClientProfile(**{k: v for k, v in client.items() if k in ClientProfile.model_fields}))


@router.post("/logout", response_model=MessageResponse, dependencies=[Depends(require_bearer_token)])
def logout():
    return MessageResponse(message="Logged out successfully")


@router.post("/pin", response_model=MessageResponse)
def change_pin(
    body: ChangePinRequest,
    db: Session = Depends(get_db),
    client: Record = Depends(get_current_client),
    issuer: SessionIssuer = Depends(get_session_issuer),
):
    """Change PIN; the current PIN must match"""
    issuer.change_pin(client["id"], body.current_pin, body.new_pin, body.confirm_pin)
    db.commit()
    return MessageResponse(message="PIN updated successfully")
