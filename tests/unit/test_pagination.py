"""Unit tests for page/limit windowing"""

import pytest
from soshopay_mock.domain.exceptions import ValidationError
from soshopay_mock.domain.pagination import paginate

ITEMS = list(range(45))


def test_paginate_first_page():
    page = paginate(ITEMS, 1, 20)

    assert page.items == list(range(20))
    assert page.current_page == 1
    assert page.total_pages == 3
    assert page.total_count == 45
    assert page.has_next is True
    assert page.has_previous is False


def test_paginate_last_partial_page():
    page = paginate(ITEMS, 3, 20)

    assert page.items == list(range(40, 45))
    assert page.has_next is False
    assert page.has_previous is True


def test_paginate_matches_slice():
    for size in (1, 7, 20, 45, 50):
        for number in range(1, 8):
            page = paginate(ITEMS, number, size)
            assert page.items == ITEMS[(number - 1) * size:number * size]
            assert page.has_next == (number * size < len(ITEMS))


def test_paginate_has_previous_past_the_end():
    """has_previous only looks at the page number"""
    page = paginate([1, 2], 5, 10)
    assert page.items == []
    assert page.has_previous is True
    assert page.has_next is False


def test_paginate_counts_reflect_filtered_input():
    unread = [n for n in ITEMS if n % 3 == 0]
    page = paginate(unread, 1, 10)
    assert page.total_count == 15
    assert page.total_pages == 2


def test_paginate_empty_collection():
    page = paginate([], 1, 20)
    assert page.total_pages == 0
    assert page.has_next is False


@pytest.mark.parametrize("number,size", [(0, 20), (1, 0), (-1, 5)])
def test_paginate_rejects_non_positive_arguments(number, size):
    with pytest.raises(ValidationError):
        paginate(ITEMS, number, size)
