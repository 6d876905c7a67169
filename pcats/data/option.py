"""
Optional value container.

``Some(value)`` holds exactly one value, ``Nothing()`` holds none. Unlike a
bare ``None`` this distinguishes "absent" from "present and equal to None",
which matters once values are nested inside other containers.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

A = TypeVar("A")
B = TypeVar("B")


class Option(Generic[A]):
    """
    Base class for ``Some`` and ``Nothing``.

    Examples:
        >>> Some(2).map(lambda x: x + 1)
        Some(value=3)
        >>> Nothing().get_or_else(0)
        0
    """

    def is_defined(self) -> bool:
        return isinstance(self, Some)

    def is_empty(self) -> bool:
        return not self.is_defined()

    def get(self) -> A:
        if isinstance(self, Some):
            return self.value
        raise ValueError("Nothing.get")

    def get_or_else(self, default: Any) -> Any:
        if isinstance(self, Some):
            return self.value
        return default

    def map(self, f: Callable[[A], B]) -> "Option[B]":
        if isinstance(self, Some):
            return Some(f(self.value))
        return Nothing()

    def flat_map(self, f: Callable[[A], "Option[B]"]) -> "Option[B]":
        if isinstance(self, Some):
            return f(self.value)
        return Nothing()

    def to_list(self) -> list[A]:
        return list(self)

    def __iter__(self) -> Iterator[A]:
        if isinstance(self, Some):
            yield self.value


@dataclass(frozen=True)
class Some(Option[A]):
    value: A


@dataclass(frozen=True)
class Nothing(Option[Any]):
    pass


def option(value: A | None) -> Option[A]:
    """Lift a nullable Python value: ``None`` becomes ``Nothing()``."""
    if value is None:
        return Nothing()
    return Some(value)
