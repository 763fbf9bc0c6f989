"""Helpers for de-duplicating and safely indexing sequences."""

from collections.abc import Hashable, Iterable, Sequence
from typing import Any, TypeVar

T = TypeVar("T")
H = TypeVar("H", bound=Hashable)


def unique(items: Iterable[H]) -> list[H]:
    """Return the items without duplicates, keeping first-seen order."""
    return list(dict.fromkeys(items))


def contains(items: Iterable[T], element: T) -> bool:
    """Report whether element equals any of the items."""
    return any(item == element for item in items)


def first(items: Iterable[T]) -> T:
    """Return the first item; raise IndexError if there is none."""
    for item in items:
        return item
    raise IndexError("first() of an empty sequence")


def last(items: Sequence[T]) -> T:
    """Return the last item; raise IndexError if there is none."""
    if not items:
        raise IndexError("last() of an empty sequence")
    return items[-1]


def index(items: Sequence[T], i: int) -> T:
    """Return items[i] for 0 <= i < len(items); raise IndexError otherwise."""
    if i < 0 or i >= len(items):
        raise IndexError(f"index {i} out of range for length {len(items)}")
    return items[i]


def first_or(items: Iterable[T], default: Any = None) -> Any:
    """Return the first item, or default when there is none."""
    try:
        return first(items)
    except IndexError:
        return default


def last_or(items: Sequence[T], default: Any = None) -> Any:
    """Return the last item, or default when there is none."""
    try:
        return last(items)
    except IndexError:
        return default


def index_or(items: Sequence[T], i: int, default: Any = None) -> Any:
    """Return items[i], or default when i is out of range."""
    try:
        return index(items, i)
    except IndexError:
        return default