"""Builder for command-line arguments."""

from __future__ import annotations

from collections.abc import Iterable


class Arg:
    """Builds one command-line flag, optionally with a value and a spacer.

    Without a value, ``build`` yields a single element such as ``-flag``.
    With a value, it yields the flag and value as two elements, unless a
    spacer is set, in which case they are joined into one element.
    """

    def __init__(self, flag: str) -> None:
        self._flag = str(flag)
        self._double_dash = False
        self._without_dash = False
        self._double_quote = False
        self._value: str | None = None
        self._spacer: str | None = None

    def _require_no_value(self, action: str) -> None:
        if self._value is not None:
            raise ValueError(f"cannot {action} after a value has been set")

    def _require_value(self, action: str) -> None:
        if self._value is None:
            raise ValueError(f"cannot {action} before a value has been set")

    def with_double_dash(self) -> "Arg":
        """Prefix the flag with ``--``."""
        self._require_no_value("set double dash")
        self._double_dash = True
        return self

    def without_dash(self) -> "Arg":
        """Emit the flag with no dash prefix."""
        self._require_no_value("drop the dash")
        self._without_dash = True
        return self

    def value(self, value: str) -> "Arg":
        """Attach a value to the flag."""
        self._require_no_value("set a value")
        self._value = str(value)
        return self

    def value_with_vec(self, values: Iterable[str]) -> "Arg":
        """Attach the concatenation of ``values`` as the value."""
        return self.value("".join(values))

    def with_value_spacer(self, spacer: str) -> "Arg":
        """Join flag and value with ``spacer`` into one element."""
        self._require_value("set a spacer")
        if self._spacer is not None:
            raise ValueError("a spacer has already been set")
        self._spacer = str(spacer)
        return self

    def value_double_quote(self) -> "Arg":
        """Wrap the joined flag and value in double quotes."""
        self._require_value("quote the value")
        if self._spacer is not None:
            raise ValueError("cannot quote the value after a spacer has been set")
        self._double_quote = True
        return self

    def _prefix(self) -> str:
        if self._without_dash:
            return ""
        return "--" if self._double_dash else "-"

    def build(self) -> list[str]:
        """Return the argument as a list of command-line elements."""
        flag = self._prefix() + self._flag
        if self._value is None:
            return [flag]
        if self._spacer is None:
            return [flag, self._value]
        joined = f"{flag}{self._spacer}{self._value}"
        if self._double_quote:
            joined = f'"{joined}"'
        return [joined]