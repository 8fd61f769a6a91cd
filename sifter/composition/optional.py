"""
Absence and null handling: optional, nullable, nullish, defaults and their inverses.

`MISSING` stands for an absent value (a key that is not there at all) and
`None` for an explicit null. Every wrapper keeps the wrapped validator as
`meta.inner` along with its documentation.
"""

from __future__ import annotations

from typing import Any, Callable

from ..core import V, create_validator, fail, raise_for_result, to_validator
from ..metadata import SchemaKind, get_meta, wrap_meta
from ..types import MISSING, Err, Ok


def _short_circuit(
    kind: SchemaKind, validator: Any, accepts: Callable[[Any], bool]
) -> V:
    inner = to_validator(validator)
    inner_check = inner.check
    inner_safe = inner.safe

    def check(value: Any) -> Any:
        if accepts(value):
            return value
        return inner_check(value)

    def safe(value: Any) -> Ok[Any] | Err:
        if accepts(value):
            return Ok(value)
        return inner_safe(value)

    return create_validator(check, safe, wrap_meta(kind, get_meta(inner), inner))


def optional(validator: Any) -> V:
    """
    Allow an absent value (`MISSING`); delegate otherwise.

    Usage:
        object({"nickname": optional(string)})
    """
    return _short_circuit(SchemaKind.OPTIONAL, validator, lambda v: v is MISSING)


undefinedable = optional


def exact_optional(validator: Any) -> V:
    """
    Allow the key to be absent, but never an explicit `None`.

    Validation is the same as `optional`; the distinct kind is visible to
    introspection.
    """
    return _short_circuit(SchemaKind.EXACT_OPTIONAL, validator, lambda v: v is MISSING)


def nullable(validator: Any) -> V:
    """Allow `None`; delegate otherwise."""
    return _short_circuit(SchemaKind.NULLABLE, validator, lambda v: v is None)


def nullish(validator: Any) -> V:
    """Allow `None` or `MISSING`; delegate otherwise."""
    return _short_circuit(
        SchemaKind.NULLISH, validator, lambda v: v is None or v is MISSING
    )


def with_default(validator: Any, default: Any) -> V:
    """
    Substitute `default` for an absent value only.

    Any other input is delegated, and its failures still propagate
    (compare `fallback`).

    Usage:
        object({"role": with_default(string, "user")})
    """
    inner = to_validator(validator)
    inner_check = inner.check
    inner_safe = inner.safe
    ok_default = Ok(default)

    def check(value: Any) -> Any:
        if value is MISSING:
            return default
        return inner_check(value)

    def safe(value: Any) -> Ok[Any] | Err:
        if value is MISSING:
            return ok_default
        return inner_safe(value)

    meta = wrap_meta(
        SchemaKind.DEFAULT, get_meta(inner), inner, {"default": default}
    ).update(default=default)
    return create_validator(check, safe, meta)


def fallback(validator: Any, value: Any) -> V:
    """
    Substitute `value` whenever the wrapped validator fails.

    Usage:
        fallback(number, 0)("bad")  # 0
    """
    inner = to_validator(validator)
    inner_safe = inner.safe
    ok_fallback = Ok(value)

    def safe(x: Any) -> Ok[Any] | Err:
        result = inner_safe(x)
        if isinstance(result, Err):
            return ok_fallback
        return result

    def check(x: Any) -> Any:
        return safe(x).value

    return create_validator(
        check, safe, wrap_meta(SchemaKind.FALLBACK, get_meta(inner), inner, {"fallback": value})
    )


def _rejecting(
    kind: SchemaKind, validator: Any, rejects: Callable[[Any], bool], message: str
) -> V:
    inner = to_validator(validator)
    inner_safe = inner.safe
    err = fail(message)

    def safe(value: Any) -> Ok[Any] | Err:
        result = inner_safe(value)
        if isinstance(result, Err):
            return result
        if rejects(result.value):
            return err
        return result

    def check(value: Any) -> Any:
        return raise_for_result(safe(value))

    return create_validator(check, safe, wrap_meta(kind, get_meta(inner), inner))


def non_nullable(validator: Any) -> V:
    """Run the validator, then reject a `None` result."""
    return _rejecting(
        SchemaKind.NON_NULLABLE, validator, lambda v: v is None, "Value cannot be null"
    )


def non_nullish(validator: Any) -> V:
    """Run the validator, then reject a `None` or `MISSING` result."""
    return _rejecting(
        SchemaKind.NON_NULLISH,
        validator,
        lambda v: v is None or v is MISSING,
        "Value cannot be null or undefined",
    )


def non_optional(validator: Any) -> V:
    """Run the validator, then reject a `MISSING` result."""
    return _rejecting(
        SchemaKind.NON_OPTIONAL,
        validator,
        lambda v: v is MISSING,
        "Value cannot be undefined",
    )
