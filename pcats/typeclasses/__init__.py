"""
Capability abstractions (functor, traverse, monoid, ...) and the instances
for the bundled effect containers.
"""

from pcats.typeclasses.base import (
    Applicative,
    FlatMap,
    Foldable,
    Functor,
    FunctorFilter,
    Monad,
    Nested,
    Traverse,
    identity,
)
from pcats.typeclasses.instances import (
    DICT,
    EITHER,
    LIST,
    OPTION,
    DictInstance,
    EitherInstance,
    ListInstance,
    OptionInstance,
)
from pcats.typeclasses.kernel import (
    CommutativeMonoid,
    Monoid,
    Order,
    Product,
    SetUnion,
    Sum,
    commutative_monoid,
    natural_order,
)
from pcats.typeclasses.registry import (
    MissingInstanceError,
    dispatching_functor,
    instance_for,
    register_instance,
)

__all__ = [
    # Capabilities
    "Functor",
    "FlatMap",
    "Applicative",
    "Monad",
    "Foldable",
    "FunctorFilter",
    "Traverse",
    "Nested",
    "identity",
    # Element capabilities
    "Monoid",
    "CommutativeMonoid",
    "Sum",
    "Product",
    "SetUnion",
    "commutative_monoid",
    "Order",
    "natural_order",
    # Instances
    "LIST",
    "OPTION",
    "DICT",
    "EITHER",
    "ListInstance",
    "OptionInstance",
    "DictInstance",
    "EitherInstance",
    # Resolution
    "MissingInstanceError",
    "instance_for",
    "register_instance",
    "dispatching_functor",
]
