"""Make sure only one call runs for a given key; others share its result.

A result stays attached to its key until forgot_key removes it.
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


class SingleFlightError(Exception):
    """Raised to every caller of a key whose call failed."""


@dataclass(eq=False)
class _Call:
    finished: threading.Event = field(default_factory=threading.Event)
    value: Any = None
    error: Exception | None = None


_lock = threading.Lock()
_calls: dict[str, _Call] = {}


def single_flight(key: str, fn: Callable[[], Any]) -> Any:
    """Run fn for key unless a call for key exists; return that call's result."""
    with _lock:
        call = _calls.get(key)
        leader = call is None
        if leader:
            call = _Call()
            _calls[key] = call

    if leader:
        try:
            call.value = fn()
        except Exception as exc:
            call.error = exc
        finally:
            call.finished.set()
    else:
        call.finished.wait()

    if call.error is not None:
        raise SingleFlightError(f"single flight run err: {call.error}") from call.error
    return call.value


def forgot_key(key: str) -> None:
    """Drop the stored call for key so the next call runs again."""
    with _lock:
        _calls.pop(key, None)