"""
Combinators building new validators from existing ones.
"""

from .advanced import (
    CheckContext,
    every_item,
    forward,
    get_default,
    get_defaults,
    get_fallback,
    get_fallbacks,
    message,
    partial_check,
    raw_check,
    raw_transform,
    some_item,
    unwrap,
)
from .describe import (
    brand,
    describe,
    get_brand,
    get_description,
    get_examples,
    get_title,
    readonly,
)
from .intersect import intersect
from .optional import (
    exact_optional,
    fallback,
    non_nullable,
    non_nullish,
    non_optional,
    nullable,
    nullish,
    optional,
    undefinedable,
    with_default,
)
from .pipe import pipe
from .refine import (
    Codec,
    TransformContext,
    catch_error,
    codec,
    overwrite,
    preprocess,
    refine,
    to,
    transform,
    try_transform,
)
from .union import UNION_MESSAGE, discriminated_union, union

__all__ = [
    "pipe",
    "optional",
    "undefinedable",
    "exact_optional",
    "nullable",
    "nullish",
    "with_default",
    "fallback",
    "non_nullable",
    "non_nullish",
    "non_optional",
    "union",
    "discriminated_union",
    "UNION_MESSAGE",
    "intersect",
    "refine",
    "transform",
    "catch_error",
    "codec",
    "Codec",
    "preprocess",
    "to",
    "overwrite",
    "try_transform",
    "TransformContext",
    "message",
    "raw_check",
    "raw_transform",
    "partial_check",
    "CheckContext",
    "forward",
    "every_item",
    "some_item",
    "get_default",
    "get_defaults",
    "get_fallback",
    "get_fallbacks",
    "unwrap",
    "describe",
    "brand",
    "readonly",
    "get_description",
    "get_title",
    "get_examples",
    "get_brand",
]
