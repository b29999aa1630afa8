from __future__ import annotations

from typing import Awaitable, Callable, TypeVar

from app.errors import format_exc


T = TypeVar("T")

DEFAULT_RETRIES = 3


async def retry(retries: int, operation: Callable[[], Awaitable[T]]) -> T:
    """
    Run `operation` until it succeeds, at most `retries + 1` times.

    Every failure is logged and treated the same way: no backoff, no
    classification. When the budget is spent the last exception is re-raised
    untouched.
    """
    if retries < 0:
        raise ValueError(f"retries must be >= 0, got {retries}")

    remaining = retries
    while True:
        try:
            return await operation()
        except Exception as e:
            print(f"[RETRY] Retrying due to error: {format_exc(e)} (remaining={remaining})")
            if remaining <= 0:
                raise
            remaining -= 1
