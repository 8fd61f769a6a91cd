"""
Positional schemas: fixed tuples, tuples with a length floor and tuples
with a homogeneous rest.

Length is checked before any element is validated.
"""

from __future__ import annotations

from typing import Any, Sequence

from ..core import V, create_validator, raise_for_result, to_validator, to_validators
from ..metadata import Metadata, SchemaKind
from ..types import Err, Ok
from .array import ERR_ARRAY, is_array


def _items(validators: Sequence[Any], name: str) -> tuple[V, ...]:
    if not validators:
        raise ValueError(f"{name}() requires at least one schema")
    return tuple(to_validators(validators))


def _validate_positions(safes: Sequence[Any], value: Sequence[Any], out: list) -> Err | None:
    for i, item_safe in enumerate(safes):
        result = item_safe(value[i])
        if isinstance(result, Err):
            return result.prefixed(i, f"[{i}]")
        out.append(result.value)
    return None


def _checked(safe: Any) -> Any:
    def check(value: Any) -> Any:
        return raise_for_result(safe(value))

    return check


def tuple_(*items: Any) -> V:
    """
    Exactly `len(items)` elements, each validated by its positional schema.

    Usage:
        point = tuple_(number, number)
        point([1, 2])     # [1, 2]
        point([1, 2, 3])  # ValidationError: "Expected 2 items, got 3"
    """
    validators = _items(items, "tuple_")
    safes = tuple(v.safe for v in validators)
    n = len(validators)

    def safe(value: Any) -> Ok[Any] | Err:
        if not is_array(value):
            return ERR_ARRAY
        if len(value) != n:
            return Err(f"Expected {n} items, got {len(value)}")
        out: list[Any] = []
        err = _validate_positions(safes, value, out)
        return err or Ok(out)

    return create_validator(_checked(safe), safe, Metadata(SchemaKind.TUPLE, inner=validators))


strict_tuple = tuple_


def loose_tuple(*items: Any) -> V:
    """
    At least `len(items)` elements; extra elements are ignored and dropped
    from the output.
    """
    validators = _items(items, "loose_tuple")
    safes = tuple(v.safe for v in validators)
    n = len(validators)

    def safe(value: Any) -> Ok[Any] | Err:
        if not is_array(value):
            return ERR_ARRAY
        if len(value) < n:
            return Err(f"Expected at least {n} items, got {len(value)}")
        out: list[Any] = []
        err = _validate_positions(safes, value, out)
        return err or Ok(out)

    meta = Metadata(SchemaKind.TUPLE, inner=validators, constraints={"loose": True})
    return create_validator(_checked(safe), safe, meta)


def tuple_with_rest(items: Sequence[Any], rest: Any) -> V:
    """
    Positional prefix followed by any number of `rest` elements.

    Usage:
        tuple_with_rest([string], number)(["sum", 1, 2, 3])
    """
    validators = _items(items, "tuple_with_rest")
    safes = tuple(v.safe for v in validators)
    n = len(validators)
    rest_v = to_validator(rest)
    rest_safe = rest_v.safe

    def safe(value: Any) -> Ok[Any] | Err:
        if not is_array(value):
            return ERR_ARRAY
        if len(value) < n:
            return Err(f"Expected at least {n} items, got {len(value)}")
        out: list[Any] = []
        err = _validate_positions(safes, value, out)
        if err is not None:
            return err
        for i in range(n, len(value)):
            result = rest_safe(value[i])
            if isinstance(result, Err):
                return result.prefixed(i, f"[{i}]")
            out.append(result.value)
        return Ok(out)

    meta = Metadata(SchemaKind.TUPLE, inner=validators, constraints={"rest": rest_v})
    return create_validator(_checked(safe), safe, meta)
