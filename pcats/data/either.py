"""
Right-biased disjoint union.

``Right`` carries the success value that ``map``/``flat_map`` act on;
``Left`` short-circuits and carries the failure value untouched.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

L = TypeVar("L")
R = TypeVar("R")
B = TypeVar("B")


class Either(Generic[L, R]):
    """Base class for ``Left`` and ``Right``."""

    def is_left(self) -> bool:
        return isinstance(self, Left)

    def is_right(self) -> bool:
        return isinstance(self, Right)

    def map(self, f: Callable[[R], B]) -> "Either[L, B]":
        if isinstance(self, Right):
            return Right(f(self.value))
        return self  # type: ignore[return-value]

    def flat_map(self, f: Callable[[R], "Either[L, B]"]) -> "Either[L, B]":
        if isinstance(self, Right):
            return f(self.value)
        return self  # type: ignore[return-value]

    def fold(self, if_left: Callable[[L], Any], if_right: Callable[[R], Any]) -> Any:
        if isinstance(self, Right):
            return if_right(self.value)
        return if_left(self.value)  # type: ignore[attr-defined]


@dataclass(frozen=True)
class Left(Either[L, Any]):
    value: L


@dataclass(frozen=True)
class Right(Either[Any, R]):
    value: R
