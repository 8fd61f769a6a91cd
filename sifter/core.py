"""
Core validator class for sifter.

Provides the V dataclass (throwing call + `safe` Result form + metadata),
the helper that builds one from a pair of implementations, and coercion of
plain Python values (types, dicts, lists, callables) into validators.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from .errors import ValidationError, error_message
from .metadata import Metadata, get_meta
from .types import Err, Issue, Ok, ParseFn, SafeFn


@dataclass(frozen=True, slots=True, eq=False)
class V:
    """
    Immutable validator node.

    Calling it validates and returns the (possibly transformed) value or
    raises ValidationError; `safe` returns Ok/Err instead. Composition never
    mutates a V, it always builds a new one.
    """

    check: ParseFn
    safe: SafeFn
    meta: Metadata | None = None

    def __call__(self, value: Any) -> Any:
        return self.check(value)

    def __getattr__(self, name: str) -> Any:
        if name == "~standard":
            return self.standard
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    @property
    def standard(self) -> dict[str, Any]:
        """Standard-Schema V1 props."""
        from .standard import standard_props

        return standard_props(self)

    def __or__(self, other: Any) -> V:
        """`a | b` -> union(a, b)"""
        from .composition.union import union

        return union(self, other)

    def __ror__(self, other: Any) -> V:
        from .composition.union import union

        return union(other, self)

    def __and__(self, other: Any) -> V:
        """`a & b` -> intersect(a, b)"""
        from .composition.intersect import intersect

        return intersect(self, other)

    def __rand__(self, other: Any) -> V:
        from .composition.intersect import intersect

        return intersect(other, self)

    def with_message(self, msg: str) -> V:
        """Return new validator with custom error message."""
        from .composition.advanced import message

        return message(self, msg)

    def describe(self, **docs: Any) -> V:
        """Return new validator with updated documentation metadata."""
        from .composition.describe import describe

        return describe(self, **docs)

    def with_meta(self, meta: Metadata | None) -> V:
        return replace(self, meta=meta)


def raise_for_result(result: Ok[Any] | Err) -> Any:
    """Unwrap-or-throw: the throwing form as a thin translation of a Result."""
    if isinstance(result, Ok):
        return result.value
    raise ValidationError(result.error, result.issues)


def err_from_exception(exc: Exception, default: str = "Unknown error") -> Err:
    if isinstance(exc, ValidationError):
        return Err(exc.message, exc.issues)
    return Err(error_message(exc, default))


def safe_call(validator: Any, value: Any) -> Ok[Any] | Err:
    """Run any validator as a Result: its `safe` when present, else try/catch."""
    safe = getattr(validator, "safe", None)
    if safe is not None:
        return safe(value)
    try:
        return Ok(validator(value))
    except Exception as e:
        return err_from_exception(e)


def create_validator(
    check: ParseFn | None = None,
    safe: SafeFn | None = None,
    meta: Metadata | None = None,
) -> V:
    """
    Build a validator from a throwing and/or a Result implementation.

    Whichever side is missing is synthesized from the other: a missing `safe`
    invokes `check` and catches, a missing `check` unwraps `safe` or raises.

    Usage:
        positive = create_validator(
            safe=lambda x: Ok(x) if x > 0 else Err("Must be positive"),
        )
        positive(5)        # 5
        positive.safe(-1)  # Err("Must be positive")
    """
    if check is None and safe is None:
        raise ValueError("create_validator() requires check or safe")

    if safe is None:
        throwing = check

        def synthesized_safe(value: Any) -> Ok[Any] | Err:
            try:
                return Ok(throwing(value))
            except Exception as e:
                return err_from_exception(e)

        safe = synthesized_safe

    if check is None:
        result_fn = safe

        def synthesized_check(value: Any) -> Any:
            return raise_for_result(result_fn(value))

        check = synthesized_check

    return V(check=check, safe=safe, meta=meta)


def fail(message: str, **details: Any) -> Err:
    """Err with a single root issue carrying optional expected/received/input."""
    return Err(message, (Issue(message, **details),))


def to_validator(v: Any) -> V:
    """
    Coerce a value to a validator.

    Conversion rules:
        V -> pass through
        object with .safe -> V wrapping it (metadata kept)
        type -> leaf validator (str, int, float, bool, None) or isinstance check
        dict -> object(...) with recursive conversion
        [x] -> array(x); [x, y, ...] -> array(union(x, y, ...))
        tuple -> tuple_(...)
        Callable -> throwing validator, `safe` synthesized
    """
    if isinstance(v, V):
        return v

    if isinstance(v, type):
        from .validators import from_type

        return from_type(v)

    if v is None:
        from .validators import null

        return null

    if isinstance(v, dict):
        from .schemas.object import object

        return object(v)

    if isinstance(v, list):
        from .schemas.array import array

        if len(v) == 0:
            raise ValueError("Empty list cannot be converted to validator")
        if len(v) == 1:
            return array(v[0])
        from .composition.union import union

        return array(union(*v))

    if isinstance(v, tuple):
        from .schemas.tuple import tuple_

        return tuple_(*v)

    if callable(v):
        safe = getattr(v, "safe", None)
        return create_validator(v, safe if callable(safe) else None, get_meta(v))

    raise TypeError(f"Cannot convert {type(v).__name__} to validator")


def to_validators(values: Any) -> list[V]:
    return [to_validator(v) for v in values]

