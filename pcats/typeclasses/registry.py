"""
Runtime resolution of capability instances.

Callers can always pass an instance explicitly. When they don't, the
adapter resolves one from the runtime type of each record through this
registry. Later registrations take precedence, so a caller can override
the bundled instances for a subclass or for one of the built-in types.
"""

import threading
from collections.abc import Callable
from typing import Any

from loguru import logger

from pcats.data.either import Either
from pcats.data.option import Option
from pcats.typeclasses.base import Functor
from pcats.typeclasses.instances import DICT, EITHER, LIST, OPTION


class MissingInstanceError(TypeError):
    """No registered instance provides the requested capability for a value."""


_lock = threading.Lock()
_registry: list[tuple[type, Any]] = [
    (list, LIST),
    (Option, OPTION),
    (dict, DICT),
    (Either, EITHER),
]


def register_instance(type_: type, instance: Any) -> None:
    """
    Register ``instance`` as the capability instance for ``type_``.

    Args:
        type_: Container type (subclasses match too)
        instance: Object implementing one or more capability base classes
    """
    global _registry
    with _lock:
        _registry = [(type_, instance)] + [
            (t, i) for t, i in _registry if t is not type_
        ]
    logger.debug(f"Registered {instance!r} for {type_.__name__}")


def instance_for(value: Any, capability: type) -> Any:
    """
    Find the instance of ``capability`` for the runtime type of ``value``.

    Registered types are tried most recent first; a match whose instance
    lacks ``capability`` falls through to the next matching type, so a
    subclass override still reaches the base type's instance for the rest.

    Raises:
        MissingInstanceError: If no registered type matching ``value`` has an
            instance implementing ``capability``
    """
    lacking = None
    for type_, instance in _registry:
        if isinstance(value, type_):
            if isinstance(instance, capability):
                return instance
            lacking = lacking or (type_, instance)
    if lacking is not None:
        type_, instance = lacking
        raise MissingInstanceError(
            f"{instance!r} for {type_.__name__} does not implement "
            f"{capability.__name__}"
        )
    raise MissingInstanceError(
        f"No {capability.__name__} instance registered for {type(value).__name__}"
    )


def resolve(instance: Any, capability: type) -> Callable[[Any], Any]:
    """
    Return a function giving the instance to use for a record.

    An explicit ``instance`` is returned for every record after checking it
    implements ``capability``; ``None`` defers to ``instance_for``.
    """
    if instance is None:
        return lambda value: instance_for(value, capability)
    if not isinstance(instance, capability):
        raise MissingInstanceError(
            f"{instance!r} does not implement {capability.__name__}"
        )
    return lambda value: instance


class _DispatchingFunctor(Functor):
    def map(self, fa: Any, f: Callable[[Any], Any]) -> Any:
        return instance_for(fa, Functor).map(fa, f)

    def __repr__(self) -> str:
        return "dispatching_functor()"


_dispatching_functor = _DispatchingFunctor()


def dispatching_functor() -> Functor:
    """A functor that looks up the real instance for every value it maps."""
    return _dispatching_functor
