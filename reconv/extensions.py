"""Small helpers for optional values."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")
U = TypeVar("U")


def unwrap_or_empty_string(value: Any | None) -> str:
    """Return ``str(value)``, or an empty string for ``None``."""
    return "" if value is None else str(value)


def unwrap_or_value(
    value: T | None, default: U, convert: Callable[[T], U] | None = None
) -> U:
    """Return ``default`` for ``None``, else ``value`` passed through ``convert``."""
    if value is None:
        return default
    return value if convert is None else convert(value)