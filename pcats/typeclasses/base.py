"""
Capability interfaces for effect containers.

Each capability is an abstract base class whose methods take the container
value explicitly (``F.map(fa, f)`` rather than ``fa.map(f)``), so the
container types themselves stay plain: built-in ``list`` and ``dict`` work
the same way as ``Option`` and ``Either``. Instances are stateless and
shared freely between threads.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pcats.data.option import Nothing, Option, Some

if TYPE_CHECKING:
    from pcats.data.partial import PartialFunction
    from pcats.typeclasses.kernel import Monoid, Order


def identity(a: Any) -> Any:
    return a


class Functor(ABC):
    """
    Containers that support mapping a function over the values they hold.

    Laws:
        map(fa, identity) == fa
        map(map(fa, f), g) == map(fa, lambda a: g(f(a)))
    """

    @abstractmethod
    def map(self, fa: Any, f: Callable[[Any], Any]) -> Any:
        raise NotImplementedError

    def as_(self, fa: Any, b: Any) -> Any:
        """Replace every value with ``b``, keeping the structure."""
        return self.map(fa, lambda _: b)

    def void(self, fa: Any) -> Any:
        return self.as_(fa, None)

    def tuple_left(self, fa: Any, b: Any) -> Any:
        return self.map(fa, lambda a: (b, a))

    def tuple_right(self, fa: Any, b: Any) -> Any:
        return self.map(fa, lambda a: (a, b))

    def fproduct(self, fa: Any, f: Callable[[Any], Any]) -> Any:
        """Pair each value with ``f`` applied to it."""
        return self.map(fa, lambda a: (a, f(a)))

    def compose(self, inner: "Functor") -> "Nested":
        return Nested(self, inner)


class Nested(Functor):
    """Functor for ``F[G[A]]`` built from the functors of ``F`` and ``G``."""

    def __init__(self, outer: Functor, inner: Functor):
        self.outer = outer
        self.inner = inner

    def map(self, fa: Any, f: Callable[[Any], Any]) -> Any:
        return self.outer.map(fa, lambda ga: self.inner.map(ga, f))

    def __repr__(self) -> str:
        return f"Nested({self.outer!r}, {self.inner!r})"


class FlatMap(Functor):
    """Functors whose mapped function may itself return a container."""

    @abstractmethod
    def flat_map(self, fa: Any, f: Callable[[Any], Any]) -> Any:
        raise NotImplementedError

    def flatten(self, ffa: Any) -> Any:
        return self.flat_map(ffa, identity)

    def mproduct(self, fa: Any, f: Callable[[Any], Any]) -> Any:
        """Pair each value with every value of ``f`` applied to it."""
        return self.flat_map(fa, lambda a: self.map(f(a), lambda b: (a, b)))


class Applicative(Functor):
    """
    Functors that can lift plain values and combine independent contexts.

    ``map2`` is the primitive here (rather than ``ap``) because it is what
    ``Traverse`` needs to thread an effect through a structure.
    """

    @abstractmethod
    def pure(self, a: Any) -> Any:
        raise NotImplementedError

    @abstractmethod
    def map2(self, fa: Any, fb: Any, f: Callable[[Any, Any], Any]) -> Any:
        raise NotImplementedError

    def map2_eval(self, fa: Any, fb: Callable[[], Any], f: Callable[[Any, Any], Any]) -> Any:
        """
        ``map2`` with ``fb`` given as a thunk.

        Instances that can fail override this to skip ``fb`` once ``fa`` has
        already failed, so ``traverse`` stops calling its function at the
        first failed effect.
        """
        return self.map2(fa, fb(), f)

    def ap(self, ff: Any, fa: Any) -> Any:
        return self.map2(ff, fa, lambda f, a: f(a))

    def product(self, fa: Any, fb: Any) -> Any:
        return self.map2(fa, fb, lambda a, b: (a, b))


class Monad(FlatMap, Applicative):
    """``FlatMap`` plus ``pure``; ``map`` and ``map2`` follow from those two."""

    def map(self, fa: Any, f: Callable[[Any], Any]) -> Any:
        return self.flat_map(fa, lambda a: self.pure(f(a)))

    def map2(self, fa: Any, fb: Any, f: Callable[[Any, Any], Any]) -> Any:
        return self.flat_map(fa, lambda a: self.map(fb, lambda b: f(a, b)))


class Foldable(ABC):
    """Containers whose values can be folded, left to right, into a summary."""

    @abstractmethod
    def fold_left(self, fa: Any, b: Any, f: Callable[[Any, Any], Any]) -> Any:
        raise NotImplementedError

    def to_list(self, fa: Any) -> list[Any]:
        out: list[Any] = []
        self.fold_left(fa, None, lambda _, a: out.append(a))
        return out

    def size(self, fa: Any) -> int:
        return self.fold_left(fa, 0, lambda n, _: n + 1)

    def is_empty(self, fa: Any) -> bool:
        return self.size(fa) == 0

    def non_empty(self, fa: Any) -> bool:
        return not self.is_empty(fa)

    def exists(self, fa: Any, p: Callable[[Any], bool]) -> bool:
        return any(p(a) for a in self.to_list(fa))

    def forall(self, fa: Any, p: Callable[[Any], bool]) -> bool:
        return all(p(a) for a in self.to_list(fa))

    def fold(self, fa: Any, M: "Monoid") -> Any:
        """Combine all values with ``M``; an empty container yields ``M.empty``."""
        return self.fold_left(fa, M.empty, M.combine)

    def fold_map(self, fa: Any, f: Callable[[Any], Any], M: "Monoid") -> Any:
        return self.fold_left(fa, M.empty, lambda b, a: M.combine(b, f(a)))

    def minimum_option(self, fa: Any, order: "Order") -> Option[Any]:
        return self.fold_left(fa, Nothing(), lambda acc, a: _pick(acc, a, order.min))

    def maximum_option(self, fa: Any, order: "Order") -> Option[Any]:
        return self.fold_left(fa, Nothing(), lambda acc, a: _pick(acc, a, order.max))


def _pick(acc: Option[Any], a: Any, choose: Callable[[Any, Any], Any]) -> Option[Any]:
    if isinstance(acc, Some):
        return Some(choose(acc.value, a))
    return Some(a)


class FunctorFilter(Functor):
    """Functors that can drop values while mapping."""

    @abstractmethod
    def map_filter(self, fa: Any, f: Callable[[Any], Option[Any]]) -> Any:
        raise NotImplementedError

    def collect(self, fa: Any, pf: "PartialFunction") -> Any:
        return self.map_filter(fa, pf.lift)

    def filter(self, fa: Any, p: Callable[[Any], bool]) -> Any:
        return self.map_filter(fa, lambda a: Some(a) if p(a) else Nothing())

    def filter_not(self, fa: Any, p: Callable[[Any], bool]) -> Any:
        return self.filter(fa, lambda a: not p(a))

    def flatten_option(self, fa: Any) -> Any:
        return self.map_filter(fa, identity)


class Traverse(Functor, Foldable):
    """Containers an applicative effect can be threaded through."""

    @abstractmethod
    def traverse(self, fa: Any, f: Callable[[Any], Any], G: Applicative) -> Any:
        raise NotImplementedError

    def sequence(self, fga: Any, G: Applicative) -> Any:
        return self.traverse(fga, identity, G)

    def flat_traverse(
        self, fa: Any, f: Callable[[Any], Any], G: Applicative, F: FlatMap
    ) -> Any:
        """``traverse`` followed by flattening the ``F[F[B]]`` inside ``G``."""
        return G.map(self.traverse(fa, f, G), F.flatten)
