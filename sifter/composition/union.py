"""
Alternatives: union and discriminated union.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Sequence

from ..core import V, create_validator, fail, raise_for_result, to_validators
from ..metadata import Metadata, SchemaKind
from ..types import Err, Ok

UNION_MESSAGE = "Value does not match any type in union"


def _first_match(safes: Sequence[Any], value: Any) -> Ok[Any] | None:
    for safe in safes:
        result = safe(value)
        if isinstance(result, Ok):
            return result
    return None


def union(*validators: Any) -> V:
    """
    First alternative (in declaration order) that accepts the value wins.

    When none accepts, the individual branch errors are discarded and a
    single fixed message is reported.

    Usage:
        union(string, number)
        string | number
    """
    if not validators:
        raise ValueError("union() requires at least one schema")

    options = tuple(to_validators(validators))
    safes = tuple(option.safe for option in options)
    err = fail(UNION_MESSAGE)

    def safe(value: Any) -> Ok[Any] | Err:
        return _first_match(safes, value) or err

    def check(value: Any) -> Any:
        return raise_for_result(safe(value))

    return create_validator(check, safe, Metadata(SchemaKind.UNION, inner=options))


def discriminated_union(key: str, options: Sequence[Any]) -> V:
    """
    Union of object schemas sharing a discriminator key.

    The input must be a mapping. Options are then tried in order exactly like
    `union`; `key` is recorded in metadata but not used to pick a branch.

    Usage:
        discriminated_union("type", [
            object({"type": literal("circle"), "radius": number}),
            object({"type": literal("square"), "side": number}),
        ])
    """
    schemas = tuple(to_validators(options))
    if not schemas:
        raise ValueError("discriminated_union() requires at least one schema")
    safes = tuple(schema.safe for schema in schemas)
    err_object = fail("Expected object", expected="object")
    err_no_match = fail("Invalid discriminator value")

    def safe(value: Any) -> Ok[Any] | Err:
        if not isinstance(value, Mapping):
            return err_object
        return _first_match(safes, value) or err_no_match

    def check(value: Any) -> Any:
        return raise_for_result(safe(value))

    meta = Metadata(
        SchemaKind.DISCRIMINATED_UNION,
        inner=schemas,
        constraints={"discriminator": key},
    )
    return create_validator(check, safe, meta)
