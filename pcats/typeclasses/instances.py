"""
Capability instances for the bundled containers.

Each container gets one instance object implementing every capability it
supports:

- ``LIST`` (built-in ``list``): Monad, Traverse, FunctorFilter
- ``OPTION`` (``Some``/``Nothing``): Monad, Traverse, FunctorFilter
- ``DICT`` (built-in ``dict``, values are the elements): FlatMap, Traverse, FunctorFilter
- ``EITHER`` (``Left``/``Right``, right-biased): Monad, Traverse
"""

from collections.abc import Callable
from typing import Any

from pcats.data.either import Left, Right
from pcats.data.option import Nothing, Some
from pcats.typeclasses.base import (
    Applicative,
    FlatMap,
    FunctorFilter,
    Monad,
    Traverse,
)


# traverse accumulates into (previous, value) cells so each step is O(1)
def _push(cell: Any, b: Any) -> tuple[Any, Any]:
    return (cell, b)


def _unwind(cell: Any) -> list[Any]:
    out = []
    while cell is not None:
        cell, b = cell
        out.append(b)
    out.reverse()
    return out


class ListInstance(Monad, Traverse, FunctorFilter):
    def pure(self, a: Any) -> list[Any]:
        return [a]

    def map(self, fa: list[Any], f: Callable[[Any], Any]) -> list[Any]:
        return [f(a) for a in fa]

    def flat_map(self, fa: list[Any], f: Callable[[Any], Any]) -> list[Any]:
        return [b for a in fa for b in f(a)]

    def map2(
        self, fa: list[Any], fb: list[Any], f: Callable[[Any, Any], Any]
    ) -> list[Any]:
        return [f(a, b) for a in fa for b in fb]

    def fold_left(self, fa: list[Any], b: Any, f: Callable[[Any, Any], Any]) -> Any:
        for a in fa:
            b = f(b, a)
        return b

    def to_list(self, fa: list[Any]) -> list[Any]:
        return list(fa)

    def size(self, fa: list[Any]) -> int:
        return len(fa)

    def map_filter(self, fa: list[Any], f: Callable[[Any], Any]) -> list[Any]:
        out = []
        for a in fa:
            ob = f(a)
            if isinstance(ob, Some):
                out.append(ob.value)
        return out

    def traverse(self, fa: list[Any], f: Callable[[Any], Any], G: Applicative) -> Any:
        acc = G.pure(None)
        for a in fa:
            acc = G.map2_eval(acc, lambda a=a: f(a), _push)
        return G.map(acc, _unwind)

    def __repr__(self) -> str:
        return "LIST"


class OptionInstance(Monad, Traverse, FunctorFilter):
    def pure(self, a: Any) -> Some:
        return Some(a)

    def map(self, fa: Any, f: Callable[[Any], Any]) -> Any:
        if isinstance(fa, Some):
            return Some(f(fa.value))
        return Nothing()

    def flat_map(self, fa: Any, f: Callable[[Any], Any]) -> Any:
        if isinstance(fa, Some):
            return f(fa.value)
        return Nothing()

    def map2(self, fa: Any, fb: Any, f: Callable[[Any, Any], Any]) -> Any:
        if isinstance(fa, Some) and isinstance(fb, Some):
            return Some(f(fa.value, fb.value))
        return Nothing()

    def map2_eval(self, fa: Any, fb: Callable[[], Any], f: Callable[[Any, Any], Any]) -> Any:
        if isinstance(fa, Some):
            return self.map2(fa, fb(), f)
        return Nothing()

    def fold_left(self, fa: Any, b: Any, f: Callable[[Any, Any], Any]) -> Any:
        if isinstance(fa, Some):
            return f(b, fa.value)
        return b

    def map_filter(self, fa: Any, f: Callable[[Any], Any]) -> Any:
        return self.flat_map(fa, f)

    def traverse(self, fa: Any, f: Callable[[Any], Any], G: Applicative) -> Any:
        if isinstance(fa, Some):
            return G.map(f(fa.value), Some)
        return G.pure(Nothing())

    def __repr__(self) -> str:
        return "OPTION"


class DictInstance(FlatMap, Traverse, FunctorFilter):
    """
    Instances for ``dict`` viewed as a container of its values.

    ``flat_map`` keeps a key only when the mapping produced for that key
    contains the same key, which is the only choice that satisfies the
    flat-map laws without a way to create keys from nothing.
    """

    def map(self, fa: dict[Any, Any], f: Callable[[Any], Any]) -> dict[Any, Any]:
        return {k: f(v) for k, v in fa.items()}

    def flat_map(
        self, fa: dict[Any, Any], f: Callable[[Any], Any]
    ) -> dict[Any, Any]:
        out = {}
        for k, v in fa.items():
            fb = f(v)
            if k in fb:
                out[k] = fb[k]
        return out

    def fold_left(
        self, fa: dict[Any, Any], b: Any, f: Callable[[Any, Any], Any]
    ) -> Any:
        for v in fa.values():
            b = f(b, v)
        return b

    def size(self, fa: dict[Any, Any]) -> int:
        return len(fa)

    def map_filter(
        self, fa: dict[Any, Any], f: Callable[[Any], Any]
    ) -> dict[Any, Any]:
        out = {}
        for k, v in fa.items():
            ob = f(v)
            if isinstance(ob, Some):
                out[k] = ob.value
        return out

    def traverse(
        self, fa: dict[Any, Any], f: Callable[[Any], Any], G: Applicative
    ) -> Any:
        acc = G.pure(None)
        for k, v in fa.items():
            acc = G.map2_eval(acc, lambda v=v: f(v), lambda cell, b, k=k: (cell, (k, b)))
        return G.map(acc, lambda cell: dict(_unwind(cell)))

    def __repr__(self) -> str:
        return "DICT"


class EitherInstance(Monad, Traverse):
    def pure(self, a: Any) -> Right:
        return Right(a)

    def map(self, fa: Any, f: Callable[[Any], Any]) -> Any:
        if isinstance(fa, Right):
            return Right(f(fa.value))
        return fa

    def flat_map(self, fa: Any, f: Callable[[Any], Any]) -> Any:
        if isinstance(fa, Right):
            return f(fa.value)
        return fa

    def map2(self, fa: Any, fb: Any, f: Callable[[Any, Any], Any]) -> Any:
        # first Left wins
        if isinstance(fa, Left):
            return fa
        if isinstance(fb, Left):
            return fb
        return Right(f(fa.value, fb.value))

    def map2_eval(self, fa: Any, fb: Callable[[], Any], f: Callable[[Any, Any], Any]) -> Any:
        if isinstance(fa, Left):
            return fa
        return self.map2(fa, fb(), f)

    def fold_left(self, fa: Any, b: Any, f: Callable[[Any, Any], Any]) -> Any:
        if isinstance(fa, Right):
            return f(b, fa.value)
        return b

    def traverse(self, fa: Any, f: Callable[[Any], Any], G: Applicative) -> Any:
        if isinstance(fa, Right):
            return G.map(f(fa.value), Right)
        return G.pure(fa)

    def __repr__(self) -> str:
        return "EITHER"


LIST = ListInstance()
OPTION = OptionInstance()
DICT = DictInstance()
EITHER = EitherInstance()
