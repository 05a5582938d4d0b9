# Copyright (c) MoabDB.
# SPDX-License-Identifier: MIT
"""Request Windows (Domain Entities).

Synopsis:
    Absolute time windows for data requests and the builder that resolves a
    partial description (start, end, length) into one.

    Resolution precedence, first match wins:

    1. ``start`` and ``end``: returned unchanged (``length`` is ignored);
       rejected when ``start > end``.
    2. ``start`` and ``length``: ``end = start + length``.
    3. ``end`` and ``length``: ``start = end - length``.
    4. ``length`` only: ``end`` is the current local time, ``start = end - length``.
    5. Anything else is rejected.

    All timestamps are naive civil datetimes; no timezone conversion happens.

Layer:
    domain/entities
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum

from moabdb.domain.results import Err, Ok, Result

from .base import BaseEntity

__all__ = ["Window", "WindowBuilder", "WindowLength", "WindowUnit", "resolve_window"]

# Fixed approximations, not calendar arithmetic.
DAYS_PER_MONTH = 30
DAYS_PER_YEAR = 365

ERR_RANGE_ORDER = "Start time must be before end time"
ERR_MISSING_PARAMETERS = "Must provide either start and end or start and length"
ERR_OUT_OF_RANGE = "Window falls outside the supported datetime range"
ERR_MIXED_TIMEZONES = "Start and end must both be naive or both timezone-aware"


class WindowUnit(str, Enum):
    """Units a :class:`WindowLength` can be expressed in."""

    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"


@dataclass(frozen=True, slots=True)
class WindowLength(BaseEntity):
    """A tagged duration such as ``WindowLength.days(5)``.

    Attributes:
        unit: Unit of the duration.
        magnitude: Integer count of ``unit``.
    """

    unit: WindowUnit
    magnitude: int

    def __post_init__(self) -> None:
        if isinstance(self.magnitude, bool) or not isinstance(self.magnitude, int):
            raise TypeError("WindowLength.magnitude must be an int.")
        object.__setattr__(self, "unit", WindowUnit(self.unit))

    @classmethod
    def seconds(cls, n: int) -> WindowLength:
        return cls(WindowUnit.SECONDS, n)

    @classmethod
    def minutes(cls, n: int) -> WindowLength:
        return cls(WindowUnit.MINUTES, n)

    @classmethod
    def hours(cls, n: int) -> WindowLength:
        return cls(WindowUnit.HOURS, n)

    @classmethod
    def days(cls, n: int) -> WindowLength:
        return cls(WindowUnit.DAYS, n)

    @classmethod
    def weeks(cls, n: int) -> WindowLength:
        return cls(WindowUnit.WEEKS, n)

    @classmethod
    def months(cls, n: int) -> WindowLength:
        """``n`` months of 30 days each."""
        return cls(WindowUnit.MONTHS, n)

    @classmethod
    def years(cls, n: int) -> WindowLength:
        """``n`` years of 365 days each."""
        return cls(WindowUnit.YEARS, n)

    def to_timedelta(self) -> timedelta:
        """Return the duration as a :class:`datetime.timedelta`.

        Raises:
            OverflowError: If the magnitude exceeds what ``timedelta`` can hold.
        """
        n = self.magnitude
        match self.unit:
            case WindowUnit.SECONDS:
                return timedelta(seconds=n)
            case WindowUnit.MINUTES:
                return timedelta(minutes=n)
            case WindowUnit.HOURS:
                return timedelta(hours=n)
            case WindowUnit.DAYS:
                return timedelta(days=n)
            case WindowUnit.WEEKS:
                return timedelta(weeks=n)
            case WindowUnit.MONTHS:
                return timedelta(days=n * DAYS_PER_MONTH)
            case WindowUnit.YEARS:
                return timedelta(days=n * DAYS_PER_YEAR)
        raise ValueError(f"unsupported window unit: {self.unit!r}")  # pragma: no cover


@dataclass(frozen=True, slots=True)
class Window(BaseEntity):
    """Absolute request window.

    Attributes:
        start: Naive start timestamp (inclusive).
        end: Naive end timestamp; never earlier than ``start``.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(ERR_RANGE_ORDER)


def resolve_window(
    start: datetime | None,
    end: datetime | None,
    length: WindowLength | None,
    *,
    clock: Callable[[], datetime] = datetime.now,
) -> Result[Window, str]:
    """Resolve a partial window description.

    The branch order below is the precedence contract; do not reorder.

    Args:
        start: Optional window start.
        end: Optional window end.
        length: Optional window length.
        clock: Source of the current local time, used only when ``length`` is
            the sole input.

    Returns:
        ``Ok(Window)`` or ``Err(message)``.
    """
    try:
        if start is not None and end is not None:
            if start > end:
                return Err(ERR_RANGE_ORDER)
            return Ok(Window(start=start, end=end))
        if start is not None and length is not None:
            return Ok(Window(start=start, end=start + length.to_timedelta()))
        if end is not None and length is not None:
            return Ok(Window(start=end - length.to_timedelta(), end=end))
        if length is not None:
            now = clock()
            return Ok(Window(start=now - length.to_timedelta(), end=now))
    except OverflowError:
        return Err(ERR_OUT_OF_RANGE)
    except TypeError:
        # Naive and aware datetimes cannot be ordered.
        return Err(ERR_MIXED_TIMEZONES)
    except ValueError as exc:
        # Negative lengths invert the derived range.
        return Err(str(exc))
    return Err(ERR_MISSING_PARAMETERS)


@dataclass(frozen=True, slots=True)
class WindowBuilder:
    """Fluent, immutable builder for :class:`Window`.

    Specify the start and end, or a length together with either the start or
    the end. A length on its own is anchored at the current local time.

    Example:
        >>> from datetime import datetime
        >>> builder = WindowBuilder().start(datetime(1970, 1, 1))
        >>> builder.length(WindowLength.days(1)).build().unwrap().end
        datetime.datetime(1970, 1, 2, 0, 0)
    """

    start_at: datetime | None = None
    end_at: datetime | None = None
    window_length: WindowLength | None = None

    def start(self, start: datetime) -> WindowBuilder:
        """Set the start time of the request window."""
        return replace(self, start_at=start)

    def end(self, end: datetime) -> WindowBuilder:
        """Set the end time of the request window."""
        return replace(self, end_at=end)

    def length(self, length: WindowLength) -> WindowBuilder:
        """Set the length of the request window."""
        return replace(self, window_length=length)

    def build(self, *, clock: Callable[[], datetime] = datetime.now) -> Result[Window, str]:
        """Resolve the builder into a :class:`Window`."""
        return resolve_window(self.start_at, self.end_at, self.window_length, clock=clock)
