"""
Built-in leaf validators for sifter.

Primitive type checks are module-level V instances; parameterized checks are
factory functions returning V instances. Every leaf has a hand-written `safe`
twin and pre-built Err values where the message is fixed.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any, Callable, Iterable

from .core import V, create_validator, err_from_exception, fail, raise_for_result
from .errors import ValidationError
from .metadata import Metadata, SchemaKind
from .types import Err, Ok


def _leaf(kind: SchemaKind, accepts: Callable[[Any], bool], message: str) -> V:
    err = fail(message, expected=kind.value)

    def check(x: Any) -> Any:
        if not accepts(x):
            raise ValidationError(message, err.issues)
        return x

    def safe(x: Any) -> Ok[Any] | Err:
        return Ok(x) if accepts(x) else err

    return create_validator(check, safe, Metadata(SchemaKind(kind)))


def _is_number(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool) and not (
        isinstance(x, float) and math.isnan(x)
    )


string = _leaf(SchemaKind.STRING, lambda x: isinstance(x, str), "Expected string")
number = _leaf(SchemaKind.NUMBER, _is_number, "Expected number")
integer = _leaf(
    SchemaKind.INTEGER,
    lambda x: isinstance(x, int) and not isinstance(x, bool),
    "Expected integer",
)
boolean = _leaf(SchemaKind.BOOLEAN, lambda x: isinstance(x, bool), "Expected boolean")
null = _leaf(SchemaKind.NULL, lambda x: x is None, "Expected null")
any_ = _leaf(SchemaKind.ANY, lambda _: True, "")
unknown = _leaf(SchemaKind.UNKNOWN, lambda _: True, "")
never = _leaf(SchemaKind.NEVER, lambda _: False, "Unexpected value")


def is_type(t: type) -> V:
    """
    Validate that value is an instance of type.

    Usage:
        is_type(Decimal)
        pipe(is_type(bytes), min_length(1))
    """
    return _leaf_instance(t)


def _leaf_instance(t: type) -> V:
    message = f"Expected {t.__name__}"
    err = fail(message, expected=t.__name__)

    def check(x: Any) -> Any:
        if not isinstance(x, t):
            raise ValidationError(message, err.issues)
        return x

    def safe(x: Any) -> Ok[Any] | Err:
        return Ok(x) if isinstance(x, t) else err

    return create_validator(
        check, safe, Metadata(SchemaKind.INSTANCE, constraints={"class": t.__name__})
    )


_TYPE_LEAVES = {
    str: string,
    int: integer,
    float: number,
    bool: boolean,
    type(None): null,
    object: any_,
}


def from_type(t: type) -> V:
    """Leaf validator for a Python type (builtins map to JSON-like leaves)."""
    leaf = _TYPE_LEAVES.get(t)
    if leaf is not None:
        return leaf
    return is_type(t)


def literal(value: Any) -> V:
    """
    Exact value match.

    Usage:
        literal("admin")
        literal(True)
    """
    message = f"Expected {_render(value)}"
    err = Err(message)

    def matches(x: Any) -> bool:
        # True == 1 in Python; literals compare by type as well
        return x == value and type(x) is type(value)

    def check(x: Any) -> Any:
        if not matches(x):
            raise ValidationError(message)
        return value

    def safe(x: Any) -> Ok[Any] | Err:
        return Ok(value) if matches(x) else err

    return create_validator(check, safe, Metadata(SchemaKind.LITERAL, constraints={"value": value}))


def enum_(values: Iterable[Any]) -> V:
    """
    One of a fixed set of literal values.

    Usage:
        enum_(["admin", "user", "guest"])
    """
    options = tuple(values)
    if not options:
        raise ValueError("enum_() requires at least one value")
    message = f"Expected one of: {', '.join(_render(v) for v in options)}"
    err = Err(message)

    def matches(x: Any) -> bool:
        return any(x == v and type(x) is type(v) for v in options)

    def check(x: Any) -> Any:
        if not matches(x):
            raise ValidationError(message)
        return x

    def safe(x: Any) -> Ok[Any] | Err:
        return Ok(x) if matches(x) else err

    return create_validator(
        check, safe, Metadata(SchemaKind.ENUM, constraints={"values": list(options)})
    )


def _render(value: Any) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)


# ---------------------------------------------------------------------------
# Constraint checks (chained after a type leaf with pipe)
# ---------------------------------------------------------------------------


def _constraint(
    test: Callable[[Any], bool], message: str, constraints: dict[str, Any]
) -> V:
    err = Err(message)

    def safe(x: Any) -> Ok[Any] | Err:
        try:
            passed = test(x)
        except Exception as e:
            return err_from_exception(e, message)
        return Ok(x) if passed else err

    def check(x: Any) -> Any:
        return raise_for_result(safe(x))

    return create_validator(check, safe, Metadata(SchemaKind.CHECK, constraints=constraints))


def _length_at_least(n: int) -> Callable[[Any], bool]:
    def test(x: Any) -> bool:
        try:
            return len(x) >= n
        except TypeError:
            return False

    return test


def _length_at_most(n: int) -> Callable[[Any], bool]:
    def test(x: Any) -> bool:
        try:
            return len(x) <= n
        except TypeError:
            return False

    return test


def min_length(n: int) -> V:
    """Validate minimum length."""
    return _constraint(_length_at_least(n), f"Must be at least {n} characters", {"minLength": n})


def max_length(n: int) -> V:
    """Validate maximum length."""
    return _constraint(_length_at_most(n), f"Must be at most {n} characters", {"maxLength": n})


nonempty = _constraint(_length_at_least(1), "Required", {"minLength": 1})


def min_items(n: int) -> V:
    return _constraint(_length_at_least(n), f"Must have at least {n} items", {"minItems": n})


def max_items(n: int) -> V:
    return _constraint(_length_at_most(n), f"Must have at most {n} items", {"maxItems": n})


def matches(pattern: str) -> V:
    """
    Validate string matches regex pattern.

    Usage:
        matches(r"^[a-z]+$")
        matches(r"\\d{3}-\\d{4}")
    """
    compiled = re.compile(pattern)

    def test(x: Any) -> bool:
        return isinstance(x, str) and compiled.search(x) is not None

    return _constraint(test, f"Must match pattern: {pattern}", {"pattern": pattern})


def _compare(op: Callable[[Any, Any], bool], bound: Any) -> Callable[[Any], bool]:
    def test(x: Any) -> bool:
        try:
            return op(x, bound)
        except TypeError:
            return False

    return test


def gte(value: Any) -> V:
    """Validate greater than or equal."""
    return _constraint(_compare(lambda x, b: x >= b, value), f"Must be >= {value}", {"minimum": value})


def gt(value: Any) -> V:
    """Validate greater than."""
    return _constraint(
        _compare(lambda x, b: x > b, value), f"Must be > {value}", {"exclusiveMinimum": value}
    )


def lte(value: Any) -> V:
    """Validate less than or equal."""
    return _constraint(_compare(lambda x, b: x <= b, value), f"Must be <= {value}", {"maximum": value})


def lt(value: Any) -> V:
    """Validate less than."""
    return _constraint(
        _compare(lambda x, b: x < b, value), f"Must be < {value}", {"exclusiveMaximum": value}
    )


def predicate(fn: Callable[[Any], bool], message: str = "Validation failed") -> V:
    """
    Create validator from arbitrary predicate function.

    Usage:
        predicate(lambda x: x > 0, "Must be positive")
        predicate(str.isalpha, "Must be alphabetic")
    """
    return _constraint(lambda x: bool(fn(x)), message, {})
