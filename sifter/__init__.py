"""
Sifter - composable runtime validation with JSON Schema and Standard-Schema interop.

Usage:
    from sifter import object, string, integer, optional, pipe, gte, array

    User = object({
        "name": string,
        "age": pipe(integer, gte(0)),
        "email": optional(string),
        "tags": array(string),
    })

    User({"name": "Ada", "age": 36, "tags": []})   # validated dict, or raises
    User.safe({"name": "Ada", "age": "x"})           # Err("age: Expected integer")
    to_json_schema(User)
"""

from .composition import (
    CheckContext,
    Codec,
    TransformContext,
    brand,
    catch_error,
    codec,
    describe,
    discriminated_union,
    every_item,
    exact_optional,
    fallback,
    forward,
    get_brand,
    get_default,
    get_defaults,
    get_description,
    get_examples,
    get_fallback,
    get_fallbacks,
    get_title,
    intersect,
    message,
    non_nullable,
    non_nullish,
    non_optional,
    nullable,
    nullish,
    optional,
    overwrite,
    partial_check,
    pipe,
    preprocess,
    raw_check,
    raw_transform,
    readonly,
    refine,
    some_item,
    to,
    transform,
    try_transform,
    undefinedable,
    union,
    unwrap,
    with_default,
)
from .context import (
    delete_global_message,
    delete_schema_message,
    delete_specific_message,
    get_default_draft,
    get_global_message,
    get_schema_message,
    get_specific_message,
    get_vendor,
    schema_context,
    set_global_message,
    set_schema_message,
    set_specific_message,
)
from .core import V, create_validator, to_validator
from .errors import ValidationError, get_dot_path
from .json_schema import (
    add_global_defs,
    clear_global_defs,
    get_global_defs,
    to_json_schema,
    to_json_schema_defs,
)
from .lib import format_path, parse_path
from .metadata import Metadata, SchemaKind, get_meta
from .schema import (
    assert_,
    is_,
    parse,
    parser,
    safe_parse,
    safe_parser,
    to_pydantic,
    try_parse,
    validate,
)
from .schemas import (
    array,
    extend,
    keyof,
    lazy,
    loose_object,
    loose_tuple,
    map_,
    merge,
    object,
    object_with_rest,
    omit,
    partial,
    passthrough,
    pick,
    record,
    required,
    set_,
    shape_of,
    strict,
    strict_object,
    strict_tuple,
    strip,
    tuple_,
    tuple_with_rest,
    variant,
)
from .standard import to_standard
from .types import MISSING, Err, Issue, Ok
from .validators import (
    any_,
    boolean,
    enum_,
    from_type,
    gt,
    gte,
    integer,
    is_type,
    literal,
    lt,
    lte,
    matches,
    max_items,
    max_length,
    min_items,
    min_length,
    never,
    nonempty,
    null,
    number,
    predicate,
    string,
    unknown,
)

__all__ = [
    # Result types
    "Ok",
    "Err",
    "Issue",
    "MISSING",
    "ValidationError",
    "get_dot_path",
    "format_path",
    "parse_path",
    # Core
    "V",
    "create_validator",
    "to_validator",
    "Metadata",
    "SchemaKind",
    "get_meta",
    # Leaf validators
    "string",
    "number",
    "integer",
    "boolean",
    "null",
    "any_",
    "unknown",
    "never",
    "is_type",
    "from_type",
    "literal",
    "enum_",
    "min_length",
    "max_length",
    "nonempty",
    "min_items",
    "max_items",
    "matches",
    "gte",
    "gt",
    "lte",
    "lt",
    "predicate",
    # Combinators
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
    # Structural schemas
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
    "array",
    "tuple_",
    "strict_tuple",
    "loose_tuple",
    "tuple_with_rest",
    "shape_of",
    "record",
    "map_",
    "set_",
    "lazy",
    # Schema operations
    "validate",
    "try_parse",
    "parse",
    "safe_parse",
    "is_",
    "assert_",
    "parser",
    "safe_parser",
    "to_pydantic",
    "to_json_schema",
    "to_json_schema_defs",
    "add_global_defs",
    "get_global_defs",
    "clear_global_defs",
    "to_standard",
    # Configuration
    "schema_context",
    "get_vendor",
    "get_default_draft",
    "get_global_message",
    "set_global_message",
    "delete_global_message",
    "get_schema_message",
    "set_schema_message",
    "delete_schema_message",
    "get_specific_message",
    "set_specific_message",
    "delete_specific_message",
]
