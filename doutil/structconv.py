"""Copy attributes between objects by matching names.

A dataclass field whose metadata holds ``{"embedded": True}`` is treated as an
embedded record: its own fields are filled (on the target) and searched (on
the source) as though they belonged to the outer object.
"""

import dataclasses
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

T = TypeVar("T")

_MISSING = object()


def _fields(obj: Any) -> list[tuple[str, bool]]:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return [(f.name, bool(f.metadata.get("embedded", False))) for f in dataclasses.fields(obj)]
    try:
        return [(name, False) for name in vars(obj)]
    except TypeError:
        return []


def _lookup(source: Any, name: str) -> Any:
    fields = _fields(source)
    for field_name, _ in fields:
        if field_name == name:
            return getattr(source, field_name)
    for field_name, embedded in fields:
        if embedded:
            found = _lookup(getattr(source, field_name), name)
            if found is not _MISSING:
                return found
    return _MISSING


def _fill(source: Any, target: Any) -> None:
    for name, embedded in _fields(target):
        current = getattr(target, name)
        if embedded:
            _fill(source, current)
            continue
        value = _lookup(source, name)
        if value is _MISSING:
            continue
        if current is not None and type(value) is not type(current):
            continue
        setattr(target, name, value)


def conv_by_name(source: Any, target: Any) -> None:
    """Set each of target's fields from source's field of the same name and type."""
    if isinstance(target, type) or not (
        dataclasses.is_dataclass(target) or hasattr(target, "__dict__")
    ):
        raise TypeError("target is not a record instance")
    _fill(source, target)


def conv_slice_by_name(sources: Sequence[Any], targets: Sequence[Any]) -> None:
    """Apply conv_by_name to each source and the target at the same position."""
    if len(targets) < len(sources):
        raise IndexError(f"{len(sources)} sources but only {len(targets)} targets")
    for source, target in zip(sources, targets):
        conv_by_name(source, target)


def make_slice(cls: Callable[[], T], length: int) -> list[T]:
    """Return length fresh instances of cls."""
    return [cls() for _ in range(length)]