"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from soshopay_mock.api.middleware import LatencyMiddleware, MetricsMiddleware, RequestIDMiddleware
from soshopay_mock.api.v1 import auth, loans, notifications, payments
from soshopay_mock.config import settings
from soshopay_mock.domain.exceptions import DomainException, NotFoundError, UnauthorizedError, ValidationError
from soshopay_mock.infrastructure.database.models import Base
from soshopay_mock.infrastructure.database.repositories import seed_from_file
from soshopay_mock.infrastructure.database.session import SessionLocal, engine
from soshopay_mock.infrastructure.observability.logging import setup_logging

# Setup structured logging
setup_logging(settings.log_level)

STATUS_BY_EXCEPTION = {
    ValidationError: 400,
    UnauthorizedError: 401,
    NotFoundError: 404,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and load the mock dataset"""
    Base.metadata.create_all(bind=engine)
    if settings.seed_on_startup:
        db = SessionLocal()
        try:
            seed_from_file(db, settings.dataset_path)
        finally:
            db.close()
    yield


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Render domain failures as {"error", "message"} bodies"""
    status_code = STATUS_BY_EXCEPTION.get(type(exc), 500)
    logging.warning(
        f"{exc.error}: {exc}",
        extra={"request_id": getattr(request.state, "request_id", "unknown"), "path": request.url.path},
    )
    return JSONResponse(status_code=status_code, content={"error": exc.error, "message": str(exc)})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request fields get the same 400 body as missing ones"""
    # loc is ("body" | "query" | "path", field, ...)
    locations = [err["loc"] for err in exc.errors() if err.get("loc")]
    fields = sorted({str(loc[1] if len(loc) > 1 else loc[0]) for loc in locations})
    message = f"Invalid value for: {', '.join(fields)}" if fields else "Invalid request"
    logging.warning(
        f"{ValidationError.error}: {message}",
        extra={"request_id": getattr(request.state, "request_id", "unknown"), "path": request.url.path},
    )
    return JSONResponse(status_code=400, content={"error": ValidationError.error, "message": message})


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="SoshoPay Mock API",
        description="Mock lending backend: auth, loans, payments and notifications",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(LatencyMiddleware)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(auth.router, prefix="/api", tags=["auth"])
    app.include_router(loans.router, prefix="/api", tags=["loans"])
    app.include_router(payments.router, prefix="/api", tags=["payments"])
    app.include_router(notifications.router, prefix="/api", tags=["notifications"])

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the mock API with uvicorn"""
    logging.info(
        "SoshoPay mock API starting",
        extra={"host": settings.host, "port": settings.port, "dataset_path": str(settings.dataset_path)},
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
