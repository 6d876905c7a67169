"""
Partial functions: a function that is only defined for part of its input.
"""

from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from pcats.data.option import Nothing, Option, Some

A = TypeVar("A")
B = TypeVar("B")


class PartialFunction(Generic[A, B]):
    """
    A function ``A -> B`` together with the predicate describing its domain.

    Calling the function outside its domain raises ``ValueError``; use
    ``lift`` to get an ``Option`` instead.

    Examples:
        >>> half = partial(lambda x: x % 2 == 0, lambda x: x // 2)
        >>> half.lift(4), half.lift(3)
        (Some(value=2), Nothing())
    """

    def __init__(self, defined_at: Callable[[A], bool], fn: Callable[[A], B]):
        self._defined_at = defined_at
        self._fn = fn

    def is_defined_at(self, a: A) -> bool:
        return bool(self._defined_at(a))

    def __call__(self, a: A) -> B:
        if not self.is_defined_at(a):
            raise ValueError(f"Partial function is not defined at {a!r}")
        return self._fn(a)

    def lift(self, a: A) -> Option[B]:
        if self.is_defined_at(a):
            return Some(self._fn(a))
        return Nothing()

    def and_then(self, g: Callable[[B], Any]) -> "PartialFunction[A, Any]":
        return PartialFunction(self._defined_at, lambda a: g(self._fn(a)))


def partial(defined_at: Callable[[A], bool], fn: Callable[[A], B]) -> PartialFunction[A, B]:
    return PartialFunction(defined_at, fn)


def from_mapping(mapping: Mapping[Any, B]) -> PartialFunction[Any, B]:
    """Partial function defined exactly on the keys of ``mapping``."""
    return PartialFunction(lambda a: a in mapping, lambda a: mapping[a])
