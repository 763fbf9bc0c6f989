"""Run a function with a time limit."""

import threading
from collections.abc import Callable
from typing import Any


def run_with_timeout(
    seconds: float, param: Any, func: Callable[[Any], Any]
) -> tuple[Any, bool]:
    """Call func(param) in a background thread and wait at most seconds.

    Returns (result, True) when it finishes in time and (None, False) when it
    does not; the call keeps running in the background. An exception raised
    by func in time is raised again here.
    """
    finished = threading.Event()
    outcome: dict[str, Any] = {}

    def target() -> None:
        try:
            outcome["value"] = func(param)
        except BaseException as exc:
            outcome["error"] = exc
        finally:
            finished.set()

    threading.Thread(target=target, daemon=True).start()
    if not finished.wait(seconds):
        return None, False
    if "error" in outcome:
        raise outcome["error"]
    return outcome["value"], True