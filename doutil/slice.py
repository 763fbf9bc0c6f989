"""A list guarded by a lock for use from several threads."""

import threading
from collections.abc import Callable, Iterator
from typing import Any


class Slice:
    """Thread-safe growable sequence."""

    def __init__(self, length: int = 0) -> None:
        self._lock = threading.Lock()
        self._items: list[Any] = [None] * length

    def index(self, i: int) -> Any:
        """Return the item at position i."""
        with self._lock:
            return self._items[i]

    def append(self, *args: Any) -> None:
        """Append every argument in order."""
        with self._lock:
            self._items.extend(args)

    def range(self, func: Callable[[Any, int], None]) -> None:
        """Call func(item, index) for every item while holding the lock."""
        with self._lock:
            for i, item in enumerate(self._items):
                func(item, i)

    def reset(self, length: int = 0) -> None:
        """Replace the contents with length empty slots."""
        with self._lock:
            self._items = [None] * length

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        with self._lock:
            snapshot = list(self._items)
        return iter(snapshot)