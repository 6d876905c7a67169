"""
Capabilities of element types: monoids and total orders.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any


class Monoid(ABC):
    """
    An associative ``combine`` with an identity element ``empty``.

    Laws:
        combine(empty, x) == combine(x, empty) == x
        combine(combine(x, y), z) == combine(x, combine(y, z))
    """

    @property
    @abstractmethod
    def empty(self) -> Any:
        raise NotImplementedError

    @abstractmethod
    def combine(self, x: Any, y: Any) -> Any:
        raise NotImplementedError

    def combine_all(self, values: Iterable[Any]) -> Any:
        acc = self.empty
        for v in values:
            acc = self.combine(acc, v)
        return acc


class CommutativeMonoid(Monoid):
    """A monoid whose ``combine`` is also commutative."""


class _Sum(CommutativeMonoid):
    @property
    def empty(self) -> Any:
        return 0

    def combine(self, x: Any, y: Any) -> Any:
        return x + y

    def __repr__(self) -> str:
        return "Sum"


class _Product(CommutativeMonoid):
    @property
    def empty(self) -> Any:
        return 1

    def combine(self, x: Any, y: Any) -> Any:
        return x * y

    def __repr__(self) -> str:
        return "Product"


class _SetUnion(CommutativeMonoid):
    @property
    def empty(self) -> Any:
        return frozenset()

    def combine(self, x: Any, y: Any) -> Any:
        return frozenset(x) | frozenset(y)

    def __repr__(self) -> str:
        return "SetUnion"


class _FunctionMonoid(CommutativeMonoid):
    def __init__(self, empty: Any, combine: Callable[[Any, Any], Any]):
        self._empty = empty
        self._combine = combine

    @property
    def empty(self) -> Any:
        return self._empty

    def combine(self, x: Any, y: Any) -> Any:
        return self._combine(x, y)


Sum = _Sum()
Product = _Product()
SetUnion = _SetUnion()


def commutative_monoid(
    empty: Any, combine: Callable[[Any, Any], Any]
) -> CommutativeMonoid:
    """
    Build an ad-hoc commutative monoid.

    Commutativity is the caller's promise; it is not checked.

    Examples:
        >>> MaxZero = commutative_monoid(0, max)
        >>> MaxZero.combine_all([3, 1, 2])
        3
    """
    return _FunctionMonoid(empty, combine)


class Order(ABC):
    """A total order over a type."""

    @abstractmethod
    def compare(self, x: Any, y: Any) -> int:
        """Negative, zero or positive as ``x`` is less than, equal to or greater than ``y``."""
        raise NotImplementedError

    def lt(self, x: Any, y: Any) -> bool:
        return self.compare(x, y) < 0

    def lteq(self, x: Any, y: Any) -> bool:
        return self.compare(x, y) <= 0

    def gt(self, x: Any, y: Any) -> bool:
        return self.compare(x, y) > 0

    def gteq(self, x: Any, y: Any) -> bool:
        return self.compare(x, y) >= 0

    def min(self, x: Any, y: Any) -> Any:
        # ties keep the first argument
        return y if self.lt(y, x) else x

    def max(self, x: Any, y: Any) -> Any:
        return y if self.gt(y, x) else x

    def reverse(self) -> "Order":
        return _ReversedOrder(self)

    @staticmethod
    def by(key: Callable[[Any], Any]) -> "Order":
        """Order values by the natural order of ``key(value)``."""
        return _KeyOrder(key)


class _NaturalOrder(Order):
    def compare(self, x: Any, y: Any) -> int:
        return (x > y) - (x < y)

    def __repr__(self) -> str:
        return "natural_order"


class _KeyOrder(Order):
    def __init__(self, key: Callable[[Any], Any]):
        self.key = key

    def compare(self, x: Any, y: Any) -> int:
        kx, ky = self.key(x), self.key(y)
        return (kx > ky) - (kx < ky)


class _ReversedOrder(Order):
    def __init__(self, base: Order):
        self.base = base

    def compare(self, x: Any, y: Any) -> int:
        return self.base.compare(y, x)

    def reverse(self) -> Order:
        return self.base


natural_order = _NaturalOrder()
