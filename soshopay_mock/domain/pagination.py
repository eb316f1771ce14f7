"""Page/limit windowing over already-filtered collections"""

import math
from typing import Sequence, TypeVar

from soshopay_mock.domain.exceptions import ValidationError
from soshopay_mock.domain.models import Page

T = TypeVar("T")


def paginate(items: Sequence[T], page: int = 1, page_size: int = 20) -> Page[T]:
    """
    Slice one page out of items.

    Counts describe the sequence passed in, so apply filters first.
    has_previous is simply page > 1, even if earlier pages are empty.
    """
    if page < 1 or page_size < 1:
        raise ValidationError("page and limit must be positive integers")

    start = (page - 1) * page_size
    end = start + page_size
    total = len(items)

    return Page(
        items=list(items[start:end]),
        current_page=page,
        total_pages=math.ceil(total / page_size),
        total_count=total,
        has_next=end < total,
        has_previous=page > 1,
    )
