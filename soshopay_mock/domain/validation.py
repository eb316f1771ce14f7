"""Required-field checks shared by calculators and submissions"""

from typing import Any, Dict, List

from soshopay_mock.domain.exceptions import ValidationError


def is_missing(value: Any) -> bool:
    """None, blank strings and zero all count as "not provided"."""
    if value is None:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (int, float)):
        return value == 0
    return False


def require_fields(fields: Dict[str, Any], message: str | None = None) -> None:
    """Raise ValidationError naming every missing field, before any work is done"""
    missing: List[str] = [name for name, value in fields.items() if is_missing(value)]
    if missing:
        raise ValidationError(message or f"Missing required fields: {', '.join(missing)}")
