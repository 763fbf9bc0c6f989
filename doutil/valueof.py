"""Look up attributes or keys by name, and zero values of types."""

import inspect
from collections.abc import Mapping
from typing import Any


def _is_record(obj: Any) -> bool:
    return not isinstance(obj, type) and (
        hasattr(obj, "__dict__") or hasattr(type(obj), "__slots__")
    )


def zero(tp: Any) -> Any:
    """Return the zero value of tp: tp() where possible, otherwise None."""
    if tp is None or tp is object or not isinstance(tp, type):
        return None
    if inspect.isabstract(tp):
        return None
    try:
        return tp()
    except TypeError:
        return None


def value_of(obj: Any, field: str, expected_type: Any = object) -> tuple[Any, bool]:
    """Return (value, True) for obj's field or key named field.

    obj must be a mapping or an object with attributes, and the value must be
    an instance of expected_type; otherwise (zero(expected_type), False).
    """
    missing = object()
    if isinstance(obj, Mapping):
        value = obj.get(field, missing)
    elif _is_record(obj):
        value = getattr(obj, field, missing)
    else:
        value = missing

    if value is missing or not isinstance(value, expected_type):
        return zero(expected_type), False
    return value, True