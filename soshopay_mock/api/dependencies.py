"""Dependency injection for FastAPI endpoints"""

from datetime import timedelta
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from soshopay_mock.config import settings
from soshopay_mock.domain.exceptions import UnauthorizedError
from soshopay_mock.domain.ports import Record
from soshopay_mock.domain.sessions import SessionIssuer, is_rejected_token
from soshopay_mock.infrastructure.database.repositories import SqlRecordStore, StoreProductCatalog
from soshopay_mock.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_store(db: Session = Depends(get_db)) -> SqlRecordStore:
    return SqlRecordStore(db)


def get_session_issuer(store: SqlRecordStore = Depends(get_store)) -> SessionIssuer:
    return SessionIssuer(
        store,
        access_ttl=timedelta(seconds=settings.access_token_ttl_seconds),
        refresh_ttl=timedelta(seconds=settings.refresh_token_ttl_seconds),
        country_code=settings.country_calling_code,
    )


def get_product_catalog(store: SqlRecordStore = Depends(get_store)) -> StoreProductCatalog:
    return StoreProductCatalog(store)


def require_bearer_token(authorization: Optional[str] = Header(None)) -> str:
    """Reject requests without a usable Bearer token"""
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedError("Missing or invalid authorization token")

    token = authorization[len("Bearer "):]
    if is_rejected_token(token):
        raise UnauthorizedError("Token is expired or invalid")
    return token


def get_current_client(
    token: str = Depends(require_bearer_token),
    issuer: SessionIssuer = Depends(get_session_issuer),
) -> Record:
    return issuer.client_for_token(token)
