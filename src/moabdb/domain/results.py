# Copyright (c) MoabDB.
# SPDX-License-Identifier: MIT
"""Result values for fallible operations.

Purpose:
    Fallible public operations return ``Ok`` or ``Err`` instead of raising, so
    callers can branch on the outcome without unwinding::

        match get_equity("AAPL", window):
            case Ok(table):
                ...
            case Err(error):
                ...

Layer:
    domain
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeAlias, TypeVar, Union

__all__ = ["Err", "Ok", "Result"]

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Return the carried value."""
        return self.value


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying ``error``."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Raise ``ValueError`` describing the carried error.

        Intended for scripts and tests that treat a failure as fatal.
        """
        raise ValueError(f"called unwrap() on Err: {self.error!r}")


Result: TypeAlias = Union[Ok[T], Err[E]]
