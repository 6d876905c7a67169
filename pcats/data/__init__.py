from pcats.data.either import Either, Left, Right
from pcats.data.option import Nothing, Option, Some, option
from pcats.data.partial import PartialFunction, from_mapping, partial

__all__ = [
    # Optional values
    "Option",
    "Some",
    "Nothing",
    "option",
    # Disjoint union
    "Either",
    "Left",
    "Right",
    # Partial functions
    "PartialFunction",
    "partial",
    "from_mapping",
]
