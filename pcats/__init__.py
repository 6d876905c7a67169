try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("pcats")
except (ImportError, PackageNotFoundError):
    __version__ = "unknown"

from pcats.data import (
    Either,
    Left,
    Nothing,
    Option,
    PartialFunction,
    Right,
    Some,
    from_mapping,
    option,
    partial,
)
from pcats.distributed import (
    PCollection,
    Pipeline,
    PipelineOptions,
)
from pcats.syntax import EffectOps, NestedEffectOps
from pcats.typeclasses import (
    DICT,
    EITHER,
    LIST,
    OPTION,
    Order,
    Product,
    SetUnion,
    Sum,
    commutative_monoid,
    identity,
    natural_order,
)

__all__ = [
    # Collections
    "Pipeline",
    "PipelineOptions",
    "PCollection",
    "EffectOps",
    "NestedEffectOps",
    # Containers
    "Option",
    "Some",
    "Nothing",
    "option",
    "Either",
    "Left",
    "Right",
    "PartialFunction",
    "partial",
    "from_mapping",
    # Instances
    "LIST",
    "OPTION",
    "DICT",
    "EITHER",
    "Sum",
    "Product",
    "SetUnion",
    "commutative_monoid",
    "Order",
    "natural_order",
    "identity",
]
