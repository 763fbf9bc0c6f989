"""Retry a callable with exponential back-off."""

import time
from collections.abc import Callable
from datetime import datetime
from typing import Any


class PermanentError(Exception):
    """Raised by a retried callable to stop retrying at once."""


def _backoff(attempt: int) -> int:
    return (1 << attempt) - 1


def retry_with_times(try_times: int, func: Callable[[], Any]) -> Any:
    """Call func up to try_times times, sleeping 1, 3, 7... seconds after failures.

    Returns func's result; raises the last error when every attempt fails and
    raises PermanentError straight away.
    """
    if func is None:
        raise ValueError("func is None")

    error: Exception | None = None
    for attempt in range(1, try_times + 1):
        try:
            return func()
        except PermanentError:
            raise
        except Exception as exc:
            error = exc
            time.sleep(_backoff(attempt))
    if error is not None:
        raise error
    return None


def _now_like(deadline: datetime) -> datetime:
    if deadline.tzinfo is not None:
        return datetime.now(deadline.tzinfo)
    return datetime.now()


def retry_with_deadline(deadline: datetime, func: Callable[[], Any]) -> Any:
    """Call func until it succeeds or a failure happens after deadline."""
    if func is None:
        raise ValueError("func is None")

    attempt = 1
    while True:
        try:
            return func()
        except PermanentError:
            raise
        except Exception:
            if _now_like(deadline) > deadline:
                raise
            time.sleep(_backoff(attempt))
            attempt += 1