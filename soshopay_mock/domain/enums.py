"""Translation of storage codes into the app's canonical enumerations"""

from enum import Enum
from typing import Any, Dict


class StringEnum(str, Enum):
    """Enum with string behaviour for JSON serialization"""


class LoanType(StringEnum):
    CASH = "CASH"
    PAYGO = "PAYGO"


class LoanStatus(StringEnum):
    """Shared by loans and payments; stored as integer codes 0-6"""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    OVERDUE = "OVERDUE"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"
    CURRENT = "CURRENT"


_LOAN_TYPE_SYNONYMS: Dict[str, LoanType] = {
    "cash": LoanType.CASH,
    "paygo": LoanType.PAYGO,
    "pay_go": LoanType.PAYGO,
}

_STATUS_BY_CODE: Dict[int, LoanStatus] = {
    0: LoanStatus.PENDING,
    1: LoanStatus.PROCESSING,
    2: LoanStatus.COMPLETED,
    3: LoanStatus.OVERDUE,
    4: LoanStatus.FAILED,
    5: LoanStatus.CANCELLED,
    6: LoanStatus.CURRENT,
}

COMPLETED_CODE = 2
PENDING_CODE = 0


def map_loan_type(raw: Any) -> str:
    """
    Map a stored snake_case loan type to CASH/PAYGO.

    Unknown types are upper-cased and passed through so new products
    show up instead of failing.
    """
    if raw is None:
        return ""
    value = str(raw)
    if value in _LOAN_TYPE_SYNONYMS:
        return _LOAN_TYPE_SYNONYMS[value].value
    return value.upper()


def map_payment_status(code: Any) -> str:
    """Look up a status code, degrading unknown codes to PENDING"""
    if isinstance(code, bool) or not isinstance(code, int):
        return LoanStatus.PENDING.value
    return _STATUS_BY_CODE.get(code, LoanStatus.PENDING).value


def raw_status_to_binary(raw: Any) -> int:
    """
    Collapse a stored payment status string to a status code.

    The payment store only distinguishes "completed" from everything else,
    so this is deliberately lossy: every other value becomes PENDING (0).
    """
    return COMPLETED_CODE if raw == "completed" else PENDING_CODE
