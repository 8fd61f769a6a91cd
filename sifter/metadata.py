"""
Schema metadata for sifter.

Every schema constructor attaches a Metadata value describing its kind and,
for composite kinds, its children. Metadata is descriptive only: validation
never reads it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping

from .types import MISSING


class SchemaKind(str, Enum):
    """One member per schema kind."""

    # Leaves
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    NULL = "null"
    ANY = "any"
    UNKNOWN = "unknown"
    NEVER = "never"
    INSTANCE = "instance"
    LITERAL = "literal"
    ENUM = "enum"
    CHECK = "check"
    KEYOF = "keyof"

    # Structural
    OBJECT = "object"
    LOOSE_OBJECT = "looseObject"
    OBJECT_WITH_REST = "objectWithRest"
    PARTIAL = "partial"
    REQUIRED = "required"
    ARRAY = "array"
    TUPLE = "tuple"
    RECORD = "record"
    MAP = "map"
    SET = "set"
    LAZY = "lazy"

    # Composition
    PIPE = "pipe"
    UNION = "union"
    DISCRIMINATED_UNION = "discriminatedUnion"
    VARIANT = "variant"
    INTERSECT = "intersect"
    OPTIONAL = "optional"
    EXACT_OPTIONAL = "exactOptional"
    NULLABLE = "nullable"
    NULLISH = "nullish"
    DEFAULT = "default"
    FALLBACK = "fallback"
    NON_NULLABLE = "nonNullable"
    NON_NULLISH = "nonNullish"
    NON_OPTIONAL = "nonOptional"
    REFINE = "refine"
    TRANSFORM = "transform"
    CATCH = "catch"
    CODEC = "codec"

    def __str__(self) -> str:
        return self.value


# Kinds that accept an absent value and so are not listed in `required`
OPTIONAL_KINDS = frozenset(
    {
        SchemaKind.OPTIONAL,
        SchemaKind.EXACT_OPTIONAL,
        SchemaKind.NULLISH,
        SchemaKind.DEFAULT,
    }
)

# Kinds that wrap exactly one inner schema
WRAPPER_KINDS = frozenset(
    {
        SchemaKind.OPTIONAL,
        SchemaKind.EXACT_OPTIONAL,
        SchemaKind.NULLABLE,
        SchemaKind.NULLISH,
        SchemaKind.NON_NULLABLE,
        SchemaKind.NON_NULLISH,
        SchemaKind.NON_OPTIONAL,
    }
)

_DOC_FIELDS = ("description", "title", "examples", "brand")


@dataclass(frozen=True, slots=True)
class Metadata:
    """
    Immutable schema descriptor.

    `inner` holds child schemas for composite kinds: a single validator, a
    tuple of validators, or a mapping of field name to validator.
    `constraints` holds kind-specific parameters (`{"minLength": 3}`).
    """

    type: SchemaKind
    constraints: Mapping[str, Any] = field(default_factory=dict)
    inner: Any = None
    description: str | None = None
    title: str | None = None
    examples: tuple[Any, ...] | None = None
    default: Any = MISSING
    deprecated: bool | None = None
    readonly: bool | None = None
    brand: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, SchemaKind):
            try:
                kind = SchemaKind(self.type)
            except ValueError:
                raise ValueError(f"Unknown schema kind: {self.type!r}") from None
            object.__setattr__(self, "type", kind)
        if self.examples is not None and not isinstance(self.examples, tuple):
            object.__setattr__(self, "examples", tuple(self.examples))

    def update(self, **changes: Any) -> Metadata:
        return replace(self, **changes)


def get_meta(validator: Any) -> Metadata | None:
    """Metadata attached to a validator, if any."""
    meta = getattr(validator, "meta", None)
    return meta if isinstance(meta, Metadata) else None


def wrap_meta(
    kind: SchemaKind,
    inner_meta: Metadata | None,
    inner: Any,
    constraints: Mapping[str, Any] | None = None,
) -> Metadata:
    """
    Metadata for a wrapper kind (optional, nullable, default, ...).

    Keeps the documentation of the wrapped validator and records the wrapped
    validator itself as `inner`.
    """
    docs: dict[str, Any] = {}
    if inner_meta is not None:
        for name in _DOC_FIELDS:
            value = getattr(inner_meta, name)
            if value is not None:
                docs[name] = value

    return Metadata(type=kind, inner=inner, constraints=dict(constraints or {}), **docs)


def merge_constraints(steps: list[Metadata | None]) -> dict[str, Any]:
    """Accumulate constraints across pipe steps (later steps win)."""
    merged: dict[str, Any] = {}
    for step in steps:
        if step is not None and step.constraints:
            merged.update(step.constraints)
    return merged


def merge_docs(steps: list[Metadata | None]) -> dict[str, Any]:
    """Documentation across pipe steps: last one wins."""
    docs: dict[str, Any] = {}
    for step in steps:
        if step is None:
            continue
        for name in (*_DOC_FIELDS, "deprecated", "readonly"):
            value = getattr(step, name)
            if value is not None:
                docs[name] = value
    return docs
