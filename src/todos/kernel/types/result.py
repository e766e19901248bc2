"""Result[T, E] – the outcome of a use case.

Command and query handlers return ``Ok(dto)`` or ``Err(error)`` instead of
raising for expected failures such as a missing todo. The HTTP layer calls
:meth:`unwrap`, which re-raises the carried error for the exception mapper.
"""

from __future__ import annotations

import dataclasses
from typing import Callable, Generic, NoReturn, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self.value

    def map(self, func: Callable[[T], U]) -> "Ok[U]":
        return Ok(func(self.value))


@dataclasses.dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise self.error

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, func: Callable[..., object]) -> "Err[E]":  # noqa: ARG002
        return self


type Result[T, E] = Ok[T] | Err[E]

__all__ = ["Err", "Ok", "Result"]
