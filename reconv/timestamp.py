"""Bucket titles built from file timestamps and recording sessions."""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class TimeRange:
    """An inclusive range of times of day, which may wrap past midnight."""

    start: _dt.time
    end: _dt.time

    def contains(self, time: _dt.time) -> bool:
        """Return whether ``time`` falls within the range."""
        if self.start <= self.end:
            return self.start <= time <= self.end
        return time >= self.start or time <= self.end


SESSION_A = TimeRange(_dt.time(7, 30, 0), _dt.time(11, 30, 1))
SESSION_B = TimeRange(_dt.time(12, 30, 0), _dt.time(16, 30, 1))
SESSION_C = TimeRange(_dt.time(17, 0, 0), _dt.time(20, 30, 1))

_WEDNESDAY = 2


@dataclass(frozen=True)
class Datetime:
    """A date and minute-resolution time that renders as ``YYMMDD[session]``."""

    date: _dt.date
    time: _dt.time
    with_session: bool = False

    @classmethod
    def from_datetime(cls, value: _dt.datetime) -> "Datetime":
        """Take the date, hour and minute of ``value``."""
        return cls(
            date=value.date(),
            time=_dt.time(value.hour, value.minute),
        )

    def need_session(self) -> "Datetime":
        """Return a copy whose title carries the session letter."""
        return replace(self, with_session=True)

    def _session(self) -> str:
        if not self.with_session:
            return ""
        if SESSION_A.contains(self.time):
            return "A"
        if SESSION_B.contains(self.time):
            return "B"
        if SESSION_C.contains(self.time):
            return "B" if self.date.weekday() == _WEDNESDAY else "C"
        return ""

    def __str__(self) -> str:
        year = self.date.year - 2000
        return f"{year}{self.date.month:02}{self.date.day:02}{self._session()}"