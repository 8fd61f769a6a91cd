"""
Structural schemas: objects, arrays, tuples, records, maps, sets.
"""

from .array import array
from .collections import map_, set_
from .lazy import lazy
from .object import (
    extend,
    keyof,
    loose_object,
    merge,
    object,
    object_with_rest,
    omit,
    partial,
    passthrough,
    pick,
    required,
    shape_of,
    strict,
    strict_object,
    strip,
    variant,
)
from .record import record
from .tuple import loose_tuple, strict_tuple, tuple_, tuple_with_rest

__all__ = [
    "object",
    "strict_object",
    "loose_object",
    "object_with_rest",
    "passthrough",
    "strict",
    "strip",
    "partial",
    "required",
    "variant",
    "pick",
    "omit",
    "extend",
    "merge",
    "keyof",
    "shape_of",
    "array",
    "tuple_",
    "strict_tuple",
    "loose_tuple",
    "tuple_with_rest",
    "record",
    "map_",
    "set_",
    "lazy",
]
