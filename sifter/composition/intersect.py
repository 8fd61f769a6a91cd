from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..core import V, create_validator, raise_for_result, to_validators
from ..metadata import Metadata, SchemaKind
from ..types import Err, Ok


def intersect(*validators: Any) -> V:
    """
    Value must satisfy every schema.

    Mapping outputs are shallow-merged left to right (later keys win); any
    other output replaces the accumulated result. The first failing schema's
    error is reported verbatim.

    Usage:
        intersect(object({"id": integer}), object({"name": string}))
        has_id & has_name
    """
    if not validators:
        raise ValueError("intersect() requires at least one schema")

    schemas = tuple(to_validators(validators))
    safes = tuple(schema.safe for schema in schemas)

    def safe(value: Any) -> Ok[Any] | Err:
        merged: Any = {}
        for s in safes:
            result = s(value)
            if isinstance(result, Err):
                return result
            out = result.value
            if isinstance(out, Mapping):
                if isinstance(merged, dict):
                    merged.update(out)
                else:
                    merged = dict(out)
            else:
                merged = out
        return Ok(merged)

    def check(value: Any) -> Any:
        return raise_for_result(safe(value))

    return create_validator(check, safe, Metadata(SchemaKind.INTERSECT, inner=schemas))
