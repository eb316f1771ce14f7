"""Canonical subscriber keys for mobile numbers"""

import re
from typing import Optional

_SEPARATORS = re.compile(r"[\s\-()]")


def normalize_mobile(raw: Optional[str], country_code: str = "263") -> Optional[str]:
    """
    Reduce a mobile number to its national, zero-prefixed form.

    All of these yield "0771234567" for country code 263:
        "771234567", "0771234567", "263771234567", "+263 77 123-4567"

    Returns None for empty input or anything that does not reduce to digits.
    Stored records and login input go through the same function, so two
    numbers match iff their keys are string-equal.
    """
    if not raw:
        return None

    normalized = _SEPARATORS.sub("", str(raw))
    if not normalized:
        return None

    if normalized.startswith("+" + country_code):
        normalized = "0" + normalized[len(country_code) + 1:]
    elif normalized.startswith(country_code):
        normalized = "0" + normalized[len(country_code):]
    elif not normalized.startswith("0"):
        normalized = "0" + normalized

    if not normalized.isdigit():
        return None

    return normalized
