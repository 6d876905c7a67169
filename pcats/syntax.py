"""
Effect syntax for PCollections.

``coll.fx`` exposes operations for collections whose records are effect
containers ``F[A]`` (``list``, ``Option``, ``dict``, ``Either``, ...).
``coll.nested`` exposes the extra operations for doubly wrapped records
``F[G[A]]``.

Every operation works inside ``F`` record by record; the caller never
unwraps the container. Capability instances can be passed explicitly
(``F=LIST``); when omitted they are resolved from each record's runtime
type. Except for ``flatten``, ``non_empty_f``, ``empty_f`` and
``filter_``, every operation produces exactly one output record per
input record.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pcats.typeclasses.base import (
    Applicative,
    FlatMap,
    Foldable,
    Functor,
    FunctorFilter,
    Nested,
    Traverse,
    identity,
)
from pcats.typeclasses.kernel import CommutativeMonoid, Order, natural_order
from pcats.typeclasses.registry import (
    MissingInstanceError,
    dispatching_functor,
    resolve,
)

if TYPE_CHECKING:
    from pcats.data.partial import PartialFunction
    from pcats.distributed.coders import Coder
    from pcats.distributed.pcollection import PCollection


def _require(instance: Any, capability: type, what: str) -> Any:
    if not isinstance(instance, capability):
        raise MissingInstanceError(
            f"{what} must implement {capability.__name__}, got {instance!r}"
        )
    return instance


class EffectOps:
    """PCollection operations over records of type ``F[A]``."""

    def __init__(self, coll: "PCollection"):
        self._coll = coll

    def as_(self, b: Any, F: Functor | None = None, coder: "Coder | None" = None) -> "PCollection":
        """
        Replace the ``A`` values in ``F[A]`` with ``b``.

        Example:
            >>> p.parallelize([[1, 2, 3]]).fx.as_("hello").collect()
            [['hello', 'hello', 'hello']]
        """
        inst = resolve(F, Functor)
        return self._coll.map(lambda fa: inst(fa).as_(fa, b), coder=coder, name="as")

    def tuple_left(self, b: Any, F: Functor | None = None, coder: "Coder | None" = None) -> "PCollection":
        """
        Pair each ``A`` value with ``b``, ``b`` on the left.

        Example:
            >>> p.parallelize([["hello", "world"]]).fx.tuple_left(42).collect()
            [[(42, 'hello'), (42, 'world')]]
        """
        inst = resolve(F, Functor)
        return self._coll.map(lambda fa: inst(fa).tuple_left(fa, b), coder=coder, name="tuple_left")

    def tuple_right(self, b: Any, F: Functor | None = None, coder: "Coder | None" = None) -> "PCollection":
        """
        Pair each ``A`` value with ``b``, ``b`` on the right.

        Example:
            >>> p.parallelize([["hello", "world"]]).fx.tuple_right(42).collect()
            [[('hello', 42), ('world', 42)]]
        """
        inst = resolve(F, Functor)
        return self._coll.map(lambda fa: inst(fa).tuple_right(fa, b), coder=coder, name="tuple_right")

    def map_f(
        self, f: Callable[[Any], Any], F: Functor | None = None, coder: "Coder | None" = None
    ) -> "PCollection":
        """
        Apply ``f`` to the values inside each ``F[A]``.

        Example:
            >>> p.parallelize([{1: "hi", 2: "there"}]).fx.map_f(lambda s: s + "!").collect()
            [{1: 'hi!', 2: 'there!'}]
        """
        inst = resolve(F, Functor)
        return self._coll.map(lambda fa: inst(fa).map(fa, f), coder=coder, name="map_f")

    def flat_map_f(
        self, f: Callable[[Any], Any], F: FlatMap | None = None, coder: "Coder | None" = None
    ) -> "PCollection":
        """Feed each value of ``F[A]`` to ``f: A -> F[B]`` and flatten one level."""
        inst = resolve(F, FlatMap)
        return self._coll.map(lambda fa: inst(fa).flat_map(fa, f), coder=coder, name="flat_map_f")

    def product_f(
        self, f: Callable[[Any], Any], F: Functor | None = None, coder: "Coder | None" = None
    ) -> "PCollection":
        """
        Pair each value with the result of applying ``f`` to it.

        Example:
            >>> p.parallelize([Some(42)]).fx.product_f(str).collect()
            [Some(value=(42, '42'))]
        """
        inst = resolve(F, Functor)
        return self._coll.map(lambda fa: inst(fa).fproduct(fa, f), coder=coder, name="product_f")

    def mproduct_f(
        self, f: Callable[[Any], Any], F: FlatMap | None = None, coder: "Coder | None" = None
    ) -> "PCollection":
        """
        Pair each value with every value of ``f(value)``.

        Example:
            >>> p.parallelize([["12", "34"]]).fx.mproduct_f(list).collect()
            [[('12', '1'), ('12', '2'), ('34', '3'), ('34', '4')]]
        """
        inst = resolve(F, FlatMap)
        return self._coll.map(lambda fa: inst(fa).mproduct(fa, f), coder=coder, name="mproduct_f")

    def map_filter_f(
        self, f: Callable[[Any], Any], F: FunctorFilter | None = None, coder: "Coder | None" = None
    ) -> "PCollection":
        """
        Map and filter in one pass: ``f`` returns an ``Option`` and only the
        ``Some`` values are kept.

        Example:
            >>> m = {1: "one", 3: "three"}
            >>> lookup = lambda k: option(m.get(k))
            >>> p.parallelize([[1, 2, 3], [4, 5, 6]]).fx.map_filter_f(lookup).collect()
            [['one', 'three'], []]
        """
        inst = resolve(F, FunctorFilter)
        return self._coll.map(lambda fa: inst(fa).map_filter(fa, f), coder=coder, name="map_filter_f")

    def collect_f(
        self, pf: "PartialFunction", F: FunctorFilter | None = None, coder: "Coder | None" = None
    ) -> "PCollection":
        """Keep ``pf(a)`` for the values where the partial function is defined."""
        inst = resolve(F, FunctorFilter)
        return self._coll.map(lambda fa: inst(fa).collect(fa, pf), coder=coder, name="collect_f")

    def flatten(self, F: Foldable | None = None, coder: "Coder | None" = None) -> "PCollection":
        """
        Turn every ``F[A]`` record into one record per ``A`` value.

        Example:
            >>> p.parallelize([[1, 2, 3], [], [4]]).fx.flatten().collect()
            [1, 2, 3, 4]
        """
        inst = resolve(F, Foldable)
        return self._coll.transform(
            lambda c: c.flat_map(lambda fa: inst(fa).to_list(fa), coder=coder, name="flatten"),
        )

    def filter_f(
        self, p: Callable[[Any], bool], F: FunctorFilter | None = None, coder: "Coder | None" = None
    ) -> "PCollection":
        """
        Keep only the values inside each ``F[A]`` that satisfy ``p``.

        Example:
            >>> p.parallelize([Some(1), Some(2), Nothing()]).fx.filter_f(lambda x: x <= 1).collect()
            [Some(value=1), Nothing(), Nothing()]
            >>> p.parallelize([[1, 2, 3], [4, 5, 6]]).fx.filter_f(lambda x: x <= 1).collect()
            [[1], []]
        """
        inst = resolve(F, FunctorFilter)
        return self._coll.map(lambda fa: inst(fa).filter(fa, p), coder=coder, name="filter_f")

    def non_empty_f(
        self,
        p: Callable[[Any], bool] | None = None,
        F: FunctorFilter | None = None,
        FF: Foldable | None = None,
        coder: "Coder | None" = None,
    ) -> "PCollection":
        """
        Drop the records whose ``F[A]`` is empty.

        With a predicate, the values are filtered with ``filter_f`` first and
        records left empty by the filter are dropped.

        Example:
            >>> p.parallelize([[1, 2, 3], [-1, 0]]).fx.non_empty_f(lambda x: x > 1).collect()
            [[2, 3]]
        """
        if p is not None:
            return self._coll.transform(
                lambda c: c.fx.filter_f(p, F=F, coder=coder).fx.non_empty_f(FF=FF)
            )
        inst = resolve(FF, Foldable)
        return self._coll.filter(lambda fa: inst(fa).non_empty(fa), name="non_empty_f")

    def empty_f(
        self,
        p: Callable[[Any], bool] | None = None,
        F: FunctorFilter | None = None,
        FF: Foldable | None = None,
        coder: "Coder | None" = None,
    ) -> "PCollection":
        """
        Keep only the records whose ``F[A]`` is empty; the complement of
        ``non_empty_f`` over the same input.

        Example:
            >>> p.parallelize([[1, 2, 3], [-1, 0]]).fx.empty_f(lambda x: x > 1).collect()
            [[]]
        """
        if p is not None:
            return self._coll.transform(
                lambda c: c.fx.filter_f(p, F=F, coder=coder).fx.empty_f(FF=FF)
            )
        inst = resolve(FF, Foldable)
        return self._coll.filter(lambda fa: inst(fa).is_empty(fa), name="empty_f")

    def filter_(
        self,
        p: Callable[[Any], bool],
        F: FunctorFilter | None = None,
        FF: Foldable | None = None,
        coder: "Coder | None" = None,
    ) -> "PCollection":
        """Filter the values satisfying ``p`` and drop records left empty."""
        return self.non_empty_f(p, F=F, FF=FF, coder=coder)

    def fold_f(
        self, M: CommutativeMonoid, F: Foldable | None = None, coder: "Coder | None" = None
    ) -> "PCollection":
        """
        Combine the values of each ``F[A]`` into one ``A`` with ``M``. Empty
        containers give ``M.empty``.

        Example:
            >>> p.parallelize([[2, 3, 4], []]).fx.fold_f(Sum).collect()
            [9, 0]
        """
        _require(M, CommutativeMonoid, "M")
        inst = resolve(F, Foldable)
        return self._coll.map(lambda fa: inst(fa).fold(fa, M), coder=coder, name="fold_f")

    def min_option_f(
        self, order: Order = natural_order, F: Foldable | None = None, coder: "Coder | None" = None
    ) -> "PCollection":
        """
        The smallest value of each ``F[A]``, or ``Nothing()`` when it is empty.

        Example:
            >>> p.parallelize([[5, 1, 3], []]).fx.min_option_f().collect()
            [Some(value=1), Nothing()]
        """
        _require(order, Order, "order")
        inst = resolve(F, Foldable)
        return self._coll.map(
            lambda fa: inst(fa).minimum_option(fa, order), coder=coder, name="min_option_f"
        )

    def max_option_f(
        self, order: Order = natural_order, F: Foldable | None = None, coder: "Coder | None" = None
    ) -> "PCollection":
        """The largest value of each ``F[A]``, or ``Nothing()`` when it is empty."""
        _require(order, Order, "order")
        inst = resolve(F, Foldable)
        return self._coll.map(
            lambda fa: inst(fa).maximum_option(fa, order), coder=coder, name="max_option_f"
        )

    def traverse(
        self,
        f: Callable[[Any], Any],
        G: Applicative,
        T: Traverse | None = None,
        coder: "Coder | None" = None,
    ) -> "PCollection":
        """
        Run ``f: A -> G[B]`` over every value of ``F[A]`` and collect the
        effects, giving one ``G[F[B]]`` per record.

        Example:
            >>> data = [[Some(1), Some(2), Nothing()], [Some(1), Some(2), Some(3)]]
            >>> p.parallelize(data).fx.traverse(identity, G=OPTION).collect()
            [Nothing(), Some(value=[1, 2, 3])]
        """
        _require(G, Applicative, "G")
        inst = resolve(T, Traverse)
        return self._coll.map(lambda fa: inst(fa).traverse(fa, f, G), coder=coder, name="traverse")

    def flat_traverse(
        self,
        f: Callable[[Any], Any],
        G: Applicative,
        T: Traverse | None = None,
        F: FlatMap | None = None,
        coder: "Coder | None" = None,
    ) -> "PCollection":
        """
        ``traverse`` with ``f: A -> G[F[B]]``, flattening the resulting
        ``F[F[B]]`` inside ``G``.

        Example:
            >>> parse = lambda s: Some(int(s)) if s.isdigit() else Nothing()
            >>> data = [Some(["1", "2", "3", "four"])]
            >>> p.parallelize(data).fx.flat_traverse(lambda xs: [parse(x) for x in xs], G=LIST).collect()
            [[Some(value=1), Some(value=2), Some(value=3), Nothing()]]
        """
        _require(G, Applicative, "G")
        t_inst = resolve(T, Traverse)
        f_inst = resolve(F, FlatMap)
        return self._coll.map(
            lambda fa: t_inst(fa).flat_traverse(fa, f, G, f_inst(fa)),
            coder=coder,
            name="flat_traverse",
        )


class NestedEffectOps:
    """PCollection operations over records of type ``F[G[A]]``."""

    def __init__(self, coll: "PCollection"):
        self._coll = coll

    def map_f(
        self,
        f: Callable[[Any], Any],
        F: Functor | None = None,
        G: Functor | None = None,
        coder: "Coder | None" = None,
    ) -> "PCollection":
        """
        Apply ``f`` to the values inside both layers.

        Example:
            >>> p.parallelize([[Some(1), Nothing()]]).nested.map_f(lambda x: x + 1).collect()
            [[Some(value=2), Nothing()]]
        """
        outer = resolve(F, Functor)
        inner = _require(G, Functor, "G") if G is not None else dispatching_functor()
        return self._coll.map(
            lambda fga: Nested(outer(fga), inner).map(fga, f), coder=coder, name="nested_map_f"
        )

    def sequence(
        self, G: Applicative, T: Traverse | None = None, coder: "Coder | None" = None
    ) -> "PCollection":
        """
        Swap the two layers, turning ``F[G[A]]`` into ``G[F[A]]``.

        Example:
            >>> p.parallelize([[Some(1), Some(2)]]).nested.sequence(G=OPTION).collect()
            [Some(value=[1, 2])]
        """
        return self._coll.fx.traverse(identity, G=G, T=T, coder=coder).with_name(
            f"{self._coll.name}/sequence"
        )
