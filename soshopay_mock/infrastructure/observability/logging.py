"""Structured JSON logging"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from soshopay_mock.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_request(request_id: str, method: str, path: str) -> None:
    logging.info(
        "Request received",
        extra={"request_id": request_id, "method": method, "path": path},
    )


def log_login(request_id: str, client_id: str, outcome: str) -> None:
    """Log login attempt outcome (success | not_found | invalid_pin)"""
    logging.info(
        "Login completed",
        extra={
            "request_id": request_id,
            "client_id": client_id,
            "step": "login",
            "outcome": outcome,
        },
    )


def log_quote(request_id: str, product: str, amount: float, months: int) -> None:
    """Log a computed loan quote"""
    logging.info(
        "Quote calculated",
        extra={
            "request_id": request_id,
            "step": "quote",
            "product": product,
            "amount": amount,
            "repayment_period_months": months,
        },
    )
