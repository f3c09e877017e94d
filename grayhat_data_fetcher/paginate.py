"""Offset pagination shared by the files and buckets commands."""

import sys
from typing import Callable

from .models import MAX_PAGE_SIZE, Page


def clamp_page_size(limit: int) -> int:
    """Page sizes outside 1..MAX_PAGE_SIZE fall back to MAX_PAGE_SIZE."""
    if limit <= 0 or limit > MAX_PAGE_SIZE:
        return MAX_PAGE_SIZE
    return limit


def _progress(fetched: int, total: int | None):
    if total:
        msg = f"fetched {fetched} / {total} records"
    else:
        msg = f"fetched {fetched} records"
    sys.stderr.write(f"\033[2K\r{msg}")
    sys.stderr.flush()


def paginate(
    fetch_page: Callable[[int, int], Page],
    sink,
    limit: int = MAX_PAGE_SIZE,
    start: int = 0,
    keep: Callable[[object], bool] | None = None,
) -> int:
    """Fetch pages until the result set is exhausted, forwarding records to sink.

    fetch_page(offset, page_size) returns a decoded Page. Stops on the first
    page shorter than page_size, or once offset + page_size reaches the total
    reported by the first page. A missing or zero total counts as unknown.

    Returns the number of records forwarded to the sink (after keep filtering).
    """
    page_size = clamp_page_size(limit)
    offset = start
    total = None
    fetched = 0
    first = True

    while True:
        page = fetch_page(offset, page_size)

        records = page.records
        if keep is not None:
            records = [r for r in records if keep(r)]
        sink.write(records)
        fetched += len(records)

        # Only the first page's total counts
        if first:
            total = page.total or None
            first = False
        _progress(fetched, total)

        if len(page.records) < page_size:
            break
        if total is not None and offset + page_size >= total:
            break
        offset += page_size

    sys.stderr.write("\n")
    sys.stderr.flush()
    return fetched
