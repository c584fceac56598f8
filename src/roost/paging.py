"""Pagination arithmetic.

Pages are 1-based at the API surface and 0-based internally::

    page = request.query.get_page()  # adjust_page(int(?page or 1))
    offset = page * page_size
"""

import math


def adjust_page(page: int) -> int:
    """Convert a 1-based page number to 0-based, never below zero."""
    return max(page - 1, 0)


def has_next_page(page: int, page_size: int, record_count: int) -> bool:
    """True if records remain after 0-based *page*."""
    return (page * page_size) + page_size < record_count


def total_pages(page_size: int, record_count: int) -> int:
    """Number of pages needed to show *record_count* records.

    Raises ``ValueError`` if *page_size* is not positive.
    """
    if page_size <= 0:
        msg = f"page_size must be positive, got {page_size}"
        raise ValueError(msg)
    return math.ceil(record_count / page_size)
