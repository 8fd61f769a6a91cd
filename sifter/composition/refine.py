"""
Refinements and transformations.

`refine` adds a check, `transform`/`to`/`overwrite`/`preprocess` change the
value, `catch_error` recovers from failures and `codec` pairs a decoder with
its encoder.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from ..core import (
    V,
    create_validator,
    err_from_exception,
    fail,
    raise_for_result,
    to_validator,
)
from ..metadata import Metadata, SchemaKind, get_meta, wrap_meta
from ..types import Err, Ok


def _checked(safe: Callable[[Any], Ok[Any] | Err]) -> Callable[[Any], Any]:
    def check(value: Any) -> Any:
        return raise_for_result(safe(value))

    return check


def _apply(fn: Callable[[Any], Any], value: Any, default: str) -> Ok[Any] | Err:
    try:
        return Ok(fn(value))
    except Exception as e:
        return err_from_exception(e, default)


def refine(validator: Any, predicate: Callable[[Any], bool], message: str = "Validation failed") -> V:
    """
    Run `validator`, then reject its output when `predicate` is falsy.

    A predicate that raises rejects the value with the exception's message.

    Usage:
        refine(number, lambda n: n > 0, "Must be positive")
    """
    inner = to_validator(validator)
    inner_safe = inner.safe
    err = fail(message)

    def safe(value: Any) -> Ok[Any] | Err:
        result = inner_safe(value)
        if isinstance(result, Err):
            return result
        try:
            passed = predicate(result.value)
        except Exception as e:
            return err_from_exception(e, message)
        return result if passed else err

    meta = wrap_meta(SchemaKind.REFINE, get_meta(inner), inner)
    return create_validator(_checked(safe), safe, meta)


def transform(validator: Any, fn: Callable[[Any], Any]) -> V:
    """
    Run `validator`, then map its output through `fn`.

    An exception raised by `fn` is reported as a failure.

    Usage:
        transform(string, str.upper)
    """
    inner = to_validator(validator)
    inner_safe = inner.safe

    def safe(value: Any) -> Ok[Any] | Err:
        result = inner_safe(value)
        if isinstance(result, Err):
            return result
        return _apply(fn, result.value, "Transform failed")

    meta = wrap_meta(SchemaKind.TRANSFORM, get_meta(inner), inner)
    return create_validator(_checked(safe), safe, meta)


def catch_error(validator: Any, default: Any) -> V:
    """
    Run `validator`; on any failure succeed with `default` instead.

    The resulting validator never fails.
    """
    inner = to_validator(validator)
    inner_safe = inner.safe
    ok_default = Ok(default)

    def safe(value: Any) -> Ok[Any]:
        result = inner_safe(value)
        return result if isinstance(result, Ok) else ok_default

    def check(value: Any) -> Any:
        return safe(value).value

    meta = wrap_meta(SchemaKind.CATCH, get_meta(inner), inner, {"default": default})
    return create_validator(check, safe, meta)


def preprocess(fn: Callable[[Any], Any], validator: Any) -> V:
    """
    Map the raw input through `fn` before validating it.

    Usage:
        preprocess(str.strip, pipe(string, nonempty))
    """
    inner = to_validator(validator)
    inner_safe = inner.safe

    def safe(value: Any) -> Ok[Any] | Err:
        pre = _apply(fn, value, "Preprocess failed")
        if isinstance(pre, Err):
            return pre
        return inner_safe(pre.value)

    meta = wrap_meta(SchemaKind.TRANSFORM, get_meta(inner), inner)
    return create_validator(_checked(safe), safe, meta)


def to(fn: Callable[[Any], Any]) -> V:
    """
    Standalone conversion accepting any input.

    Usage:
        pipe(to(int), gte(0))
    """

    def safe(value: Any) -> Ok[Any] | Err:
        return _apply(fn, value, "Transform failed")

    return create_validator(_checked(safe), safe, Metadata(SchemaKind.TRANSFORM))


def overwrite(fn: Callable[[Any], Any]) -> V:
    """Type-preserving conversion, e.g. `pipe(string, overwrite(str.lower))`."""

    def safe(value: Any) -> Ok[Any] | Err:
        return _apply(fn, value, "Overwrite failed")

    return create_validator(_checked(safe), safe, Metadata(SchemaKind.TRANSFORM))


class TransformContext:
    """Handed to `try_transform` callbacks to report a failure."""

    __slots__ = ("error",)

    def __init__(self) -> None:
        self.error: str | None = None

    def fail(self, message: str) -> None:
        self.error = message


def try_transform(fn: Callable[[Any, TransformContext], Any]) -> V:
    """
    Conversion that may report a failure through its context.

    Usage:
        def parse_port(value, ctx):
            port = int(value)
            if not 0 < port < 65536:
                ctx.fail("Port out of range")
            return port

        try_transform(parse_port)
    """

    def safe(value: Any) -> Ok[Any] | Err:
        ctx = TransformContext()
        try:
            out = fn(value, ctx)
        except Exception as e:
            return err_from_exception(e, "Transform failed")
        if ctx.error:
            return Err(ctx.error)
        return Ok(out)

    return create_validator(_checked(safe), safe, Metadata(SchemaKind.TRANSFORM))


@dataclass(frozen=True, slots=True, eq=False)
class Codec(V):
    """
    Validator that decodes on the way in and can encode on the way out.

    `encode` is never invoked during validation.
    """

    encode: Callable[[Any], Any] | None = None
    schema: V | None = None


def codec(validator: Any, decode: Callable[[Any], Any], encode: Callable[[Any], Any]) -> Codec:
    """
    Bidirectional wrapper.

    Usage:
        iso_date = codec(string, decode=date.fromisoformat, encode=date.isoformat)
        iso_date("2024-01-15")              # date(2024, 1, 15)
        iso_date.encode(date(2024, 1, 15))  # "2024-01-15"
    """
    inner = to_validator(validator)
    inner_safe = inner.safe

    def safe(value: Any) -> Ok[Any] | Err:
        result = inner_safe(value)
        if isinstance(result, Err):
            return result
        return _apply(decode, result.value, "Decode failed")

    meta = wrap_meta(SchemaKind.CODEC, get_meta(inner), inner)
    return Codec(check=_checked(safe), safe=safe, meta=meta, encode=encode, schema=inner)
