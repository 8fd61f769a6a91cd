"""
Advanced composition: message overrides, raw checks, issue forwarding,
item checks and schema introspection.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Union

from ..core import V, create_validator, err_from_exception, fail, raise_for_result, to_validator
from ..lib.paths import Segment, to_path
from ..metadata import WRAPPER_KINDS, Metadata, SchemaKind, get_meta
from ..schemas.array import ERR_ARRAY, is_array
from ..types import Err, Issue, Ok

MessageSource = Union[str, Callable[[Any], str]]

_OBJECT_KINDS = (
    SchemaKind.OBJECT,
    SchemaKind.LOOSE_OBJECT,
    SchemaKind.OBJECT_WITH_REST,
)


def message(validator: Any, msg: MessageSource) -> V:
    """
    Replace whatever failure `validator` reports with `msg`.

    `msg` may be a callable receiving the rejected input.

    Usage:
        message(pipe(number, gte(18)), "Must be 18 or older")
        message(string, lambda x: f"{x!r} is not text")
    """
    inner = to_validator(validator)
    inner_safe = inner.safe
    render = msg if callable(msg) else (lambda _: msg)

    def safe(value: Any) -> Ok[Any] | Err:
        result = inner_safe(value)
        if isinstance(result, Err):
            try:
                return Err(render(value))
            except Exception as e:
                return err_from_exception(e, result.error)
        return result

    def check(value: Any) -> Any:
        return raise_for_result(safe(value))

    return create_validator(check, safe, get_meta(inner))


class CheckContext:
    """Handed to `raw_check` callbacks: the input and an issue collector."""

    __slots__ = ("input", "issues")

    def __init__(self, value: Any) -> None:
        self.input = value
        self.issues: list[Issue] = []

    def add_issue(self, message: str, path: Union[str, Iterable[Segment]] = ()) -> None:
        self.issues.append(Issue(message, to_path(path) if path else ()))

    def to_err(self) -> Err:
        return Err(self.issues[0].message, tuple(self.issues))


def raw_check(fn: Callable[[CheckContext], None]) -> V:
    """
    Check with full access to the input; every added issue is reported.

    The flat error is the first issue's message.

    Usage:
        def passwords_match(ctx):
            if ctx.input["password"] != ctx.input["confirm"]:
                ctx.add_issue("Passwords must match", path=["confirm"])

        pipe(signup, raw_check(passwords_match))
    """

    def safe(value: Any) -> Ok[Any] | Err:
        ctx = CheckContext(value)
        try:
            fn(ctx)
        except Exception as e:
            return err_from_exception(e, "Validation failed")
        if ctx.issues:
            return ctx.to_err()
        return Ok(value)

    def check(value: Any) -> Any:
        return raise_for_result(safe(value))

    return create_validator(check, safe, Metadata(SchemaKind.CHECK))


def raw_transform(fn: Callable[[CheckContext], Any]) -> V:
    """
    Conversion with full access to the input and an issue collector.

    Returns whatever `fn` returns unless it added issues.

    Usage:
        def split_name(ctx):
            first, _, last = ctx.input.partition(" ")
            if not last:
                ctx.add_issue("Expected first and last name")
            return {"first": first, "last": last}

        raw_transform(split_name)
    """

    def safe(value: Any) -> Ok[Any] | Err:
        ctx = CheckContext(value)
        try:
            out = fn(ctx)
        except Exception as e:
            return err_from_exception(e, "Transform failed")
        if ctx.issues:
            return ctx.to_err()
        return Ok(out)

    def check(value: Any) -> Any:
        return raise_for_result(safe(value))

    return create_validator(check, safe, Metadata(SchemaKind.TRANSFORM))


def partial_check(
    paths: Iterable[Union[str, Iterable[Segment]]],
    fn: Callable[[Any], bool],
    message: str = "Partial check failed",
) -> V:
    """
    Cross-field check whose failure is reported at each of `paths`.

    Usage:
        partial_check(
            [["password"], ["confirm"]],
            lambda d: d["password"] == d["confirm"],
            "Passwords must match",
        )
    """
    targets = tuple(to_path(p) for p in paths)
    err = Err(message, tuple(Issue(message, path) for path in targets))

    def safe(value: Any) -> Ok[Any] | Err:
        try:
            passed = fn(value)
        except Exception as e:
            return err_from_exception(e, message)
        return Ok(value) if passed else err

    def check(value: Any) -> Any:
        return raise_for_result(safe(value))

    return create_validator(check, safe, Metadata(SchemaKind.CHECK))


def forward(validator: Any, path: Union[str, Iterable[Segment]]) -> V:
    """
    Report the issues of `validator` under `path`.

    Only structured issue paths move; the flat error line is unchanged.

    Usage:
        forward(refine(any_, lambda d: d["a"] == d["b"], "Must match"), "b")
    """
    inner = to_validator(validator)
    inner_safe = inner.safe
    prefix = to_path(path)

    def safe(value: Any) -> Ok[Any] | Err:
        result = inner_safe(value)
        if isinstance(result, Err):
            return Err(
                result.error,
                tuple(Issue(i.message, prefix + i.path, i.input, i.expected, i.received) for i in result.issues),
            )
        return result

    def check(value: Any) -> Any:
        return raise_for_result(safe(value))

    return create_validator(check, safe, get_meta(inner))


def every_item(predicate: Callable[[Any], bool], message: str = "Not all items passed validation") -> V:
    """
    Check that every item of a sequence satisfies `predicate`.

    Usage:
        pipe(array(number), every_item(lambda n: n > 0, "All items must be positive"))
    """
    return _item_check(all, predicate, message)


def some_item(predicate: Callable[[Any], bool], message: str = "No items passed validation") -> V:
    """Check that at least one item of a sequence satisfies `predicate`."""
    return _item_check(any, predicate, message)


def _item_check(
    combine: Callable[[Iterable[bool]], bool], predicate: Callable[[Any], bool], message: str
) -> V:
    err = fail(message)

    def safe(value: Any) -> Ok[Any] | Err:
        if not is_array(value):
            return ERR_ARRAY
        try:
            passed = combine(predicate(item) for item in value)
        except Exception as e:
            return err_from_exception(e, message)
        return Ok(value) if passed else err

    def check(value: Any) -> Any:
        return raise_for_result(safe(value))

    return create_validator(check, safe, Metadata(SchemaKind.CHECK))


# ---------------------------------------------------------------------------
# Introspection
# ---------------------------------------------------------------------------


def get_default(schema: Any) -> Any:
    """Default value of a `with_default` schema, else None."""
    meta = get_meta(schema)
    if meta is not None and meta.type is SchemaKind.DEFAULT:
        return meta.constraints.get("default")
    return None


def get_fallback(schema: Any) -> Any:
    """Fallback value of a `fallback` schema, else None."""
    meta = get_meta(schema)
    if meta is not None and meta.type is SchemaKind.FALLBACK:
        return meta.constraints.get("fallback")
    return None


def _field_values(schema: Any, kind: SchemaKind, key: str) -> dict[str, Any] | None:
    meta = get_meta(schema)
    if meta is None or meta.type not in _OBJECT_KINDS or not meta.inner:
        return None

    found: dict[str, Any] = {}
    for name, field in meta.inner.items():
        field_meta = get_meta(field)
        if field_meta is not None and field_meta.type is kind:
            found[name] = field_meta.constraints.get(key)
    return found or None


def get_defaults(schema: Any) -> dict[str, Any] | None:
    """
    Defaults of the `with_default` fields of an object schema.

    Returns None when the schema is not an object or no field has a default.
    """
    return _field_values(schema, SchemaKind.DEFAULT, "default")


def get_fallbacks(schema: Any) -> dict[str, Any] | None:
    """Fallbacks of the `fallback` fields of an object schema."""
    return _field_values(schema, SchemaKind.FALLBACK, "fallback")


def unwrap(schema: Any) -> Any:
    """Inner schema of an optional/nullable-style wrapper; other schemas as-is."""
    meta = get_meta(schema)
    if meta is not None and meta.type in WRAPPER_KINDS and meta.inner is not None:
        return meta.inner
    return schema
