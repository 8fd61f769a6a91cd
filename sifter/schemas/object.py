"""
Object schemas.

A shape is a mapping of field name to validator. Fields are validated in
declaration order and the first failing field is reported, prefixed with
its key. An absent key reaches its field validator as `MISSING`, and a
field whose validated value is `MISSING` is left out of the output.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Iterable, Sequence

from ..core import V, create_validator, fail, raise_for_result, to_validator, to_validators
from ..metadata import Metadata, SchemaKind, get_meta, merge_docs
from ..types import MISSING, Err, Ok

Shape = Mapping[str, Any]

ERR_OBJECT = fail("Expected object", expected="object")

_SHAPE_KINDS = frozenset(
    {
        SchemaKind.OBJECT,
        SchemaKind.LOOSE_OBJECT,
        SchemaKind.OBJECT_WITH_REST,
        SchemaKind.PARTIAL,
        SchemaKind.REQUIRED,
    }
)


def _compile(shape: Shape) -> dict[str, V]:
    if not isinstance(shape, Mapping):
        raise TypeError(f"Object shape must be a mapping, got {type(shape).__name__}")
    return {key: to_validator(v) for key, v in shape.items()}


def _checked(safe: Any) -> Any:
    def check(value: Any) -> Any:
        return raise_for_result(safe(value))

    return check


def shape_of(schema: Any) -> dict[str, V] | None:
    """Shape of an object-like schema (or a plain shape mapping), else None."""
    if isinstance(schema, Mapping):
        return _compile(schema)
    meta = get_meta(schema)
    if meta is not None and meta.type in _SHAPE_KINDS and isinstance(meta.inner, Mapping):
        return dict(meta.inner)
    return None


def object(shape: Shape) -> V:
    """
    Validate a mapping against a fixed shape; unknown keys are dropped.

    Usage:
        user = object({"name": string, "age": optional(integer)})
        user({"name": "Ada", "extra": 1})  # {"name": "Ada"}
    """
    fields = _compile(shape)
    # precomputed (key, safe) pairs keep the field loop monomorphic
    entries = tuple((key, v.safe) for key, v in fields.items())

    def safe(value: Any) -> Ok[Any] | Err:
        if not isinstance(value, Mapping):
            return ERR_OBJECT
        out: dict[str, Any] = {}
        for key, field_safe in entries:
            result = field_safe(value.get(key, MISSING))
            if isinstance(result, Err):
                return result.prefixed(key)
            if result.value is not MISSING:
                out[key] = result.value
        return Ok(out)

    return create_validator(_checked(safe), safe, Metadata(SchemaKind.OBJECT, inner=fields))


strict_object = object


def loose_object(shape: Shape) -> V:
    """
    Like `object`, but unknown keys are copied through verbatim.

    Usage:
        loose_object({"name": string})({"name": "Ada", "extra": 1})
        # {"name": "Ada", "extra": 1}
    """
    fields = _compile(shape)
    entries = tuple((key, v.safe) for key, v in fields.items())

    def safe(value: Any) -> Ok[Any] | Err:
        if not isinstance(value, Mapping):
            return ERR_OBJECT
        out = dict(value)
        for key, field_safe in entries:
            result = field_safe(value.get(key, MISSING))
            if isinstance(result, Err):
                return result.prefixed(key)
            if result.value is MISSING:
                out.pop(key, None)
            else:
                out[key] = result.value
        return Ok(out)

    return create_validator(
        _checked(safe), safe, Metadata(SchemaKind.LOOSE_OBJECT, inner=fields)
    )


def object_with_rest(shape: Shape, rest: Any) -> V:
    """
    Known keys validate against `shape`, every other key against `rest`.

    Usage:
        object_with_rest({"id": integer}, string)
    """
    fields = _compile(shape)
    entries = tuple((key, v.safe) for key, v in fields.items())
    rest_v = to_validator(rest)
    rest_safe = rest_v.safe

    def safe(value: Any) -> Ok[Any] | Err:
        if not isinstance(value, Mapping):
            return ERR_OBJECT
        out: dict[str, Any] = {}
        for key, field_safe in entries:
            result = field_safe(value.get(key, MISSING))
            if isinstance(result, Err):
                return result.prefixed(key)
            if result.value is not MISSING:
                out[key] = result.value
        for key, item in value.items():
            if key in fields:
                continue
            result = rest_safe(item)
            if isinstance(result, Err):
                return result.prefixed(key)
            out[key] = result.value
        return Ok(out)

    meta = Metadata(SchemaKind.OBJECT_WITH_REST, inner=fields, constraints={"rest": rest_v})
    return create_validator(_checked(safe), safe, meta)


def passthrough(schema: Any) -> V:
    """Keep unknown keys of the input next to the validated ones."""
    inner = to_validator(schema)
    inner_safe = inner.safe

    def safe(value: Any) -> Ok[Any] | Err:
        if not isinstance(value, Mapping):
            return ERR_OBJECT
        result = inner_safe(value)
        if isinstance(result, Err):
            return result
        return Ok({**value, **result.value})

    meta = get_meta(inner)
    if meta is not None and meta.type is SchemaKind.OBJECT:
        meta = meta.update(type=SchemaKind.LOOSE_OBJECT)
    return create_validator(_checked(safe), safe, meta)


def strict(schema: Any) -> V:
    """Object schemas already drop unknown keys; returns `schema` unchanged."""
    return to_validator(schema)


strip = strict


def partial(schema: Any) -> V:
    """
    Accept any mapping.

    When `schema` accepts the input its output is returned, otherwise the
    input passes through unchecked. Fields are not rewritten to be optional.
    """
    inner = to_validator(schema)
    inner_safe = inner.safe

    def safe(value: Any) -> Ok[Any] | Err:
        if not isinstance(value, Mapping):
            return ERR_OBJECT
        result = inner_safe(value)
        if isinstance(result, Ok):
            return result
        return Ok(value)

    inner_meta = get_meta(inner)
    meta = Metadata(SchemaKind.PARTIAL, inner=shape_of(inner), **merge_docs([inner_meta]))
    return create_validator(_checked(safe), safe, meta)


def required(schema: Any) -> V:
    """
    Run `schema`, then reject any declared field that ended up absent.

    Usage:
        required(object({"name": optional(string)}))({})  # fails: "name: Required"
    """
    inner = to_validator(schema)
    inner_safe = inner.safe
    fields = shape_of(inner) or {}
    declared = tuple(fields)
    missing_errs = {key: Err("Required").prefixed(key) for key in declared}

    def safe(value: Any) -> Ok[Any] | Err:
        if not isinstance(value, Mapping):
            return ERR_OBJECT
        result = inner_safe(value)
        if isinstance(result, Err):
            return result
        out = result.value
        if not isinstance(out, Mapping):
            return ERR_OBJECT
        for key in declared:
            if out.get(key, MISSING) is MISSING:
                return missing_errs[key]
        for key, item in out.items():
            if item is MISSING:
                return Err("Required").prefixed(key)
        return result

    meta = Metadata(SchemaKind.REQUIRED, inner=fields, **merge_docs([get_meta(inner)]))
    return create_validator(_checked(safe), safe, meta)


def _render_discriminant(value: Any) -> str:
    if value is MISSING:
        return "undefined"
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)


def variant(key: str, options: Sequence[Any]) -> V:
    """
    Union of object schemas tagged by `key`.

    Options are tried in order; `key` only appears in the failure message.

    Usage:
        variant("kind", [
            object({"kind": literal("a"), "x": number}),
            object({"kind": literal("b"), "y": string}),
        ])
    """
    schemas = tuple(to_validators(options))
    if not schemas:
        raise ValueError("variant() requires at least one schema")
    safes = tuple(s.safe for s in schemas)

    def safe(value: Any) -> Ok[Any] | Err:
        if not isinstance(value, Mapping):
            return ERR_OBJECT
        for s in safes:
            result = s(value)
            if isinstance(result, Ok):
                return result
        discriminant = value.get(key, MISSING)
        return Err(f"No matching variant for {key}={_render_discriminant(discriminant)}")

    meta = Metadata(SchemaKind.VARIANT, inner=schemas, constraints={"discriminator": key})
    return create_validator(_checked(safe), safe, meta)


# ---------------------------------------------------------------------------
# Shape utilities
# ---------------------------------------------------------------------------


def _require_shape(value: Any) -> dict[str, V]:
    shape = shape_of(value)
    if shape is None:
        raise TypeError(f"Expected an object shape or object schema, got {type(value).__name__}")
    return shape


def pick(shape: Any, keys: Iterable[str]) -> dict[str, V]:
    """
    Sub-shape with only `keys`; unknown keys are ignored.

    Usage:
        object(pick(user_shape, ["name"]))
    """
    fields = _require_shape(shape)
    return {key: fields[key] for key in keys if key in fields}


def omit(shape: Any, keys: Iterable[str]) -> dict[str, V]:
    """Sub-shape without `keys`."""
    fields = _require_shape(shape)
    dropped = set(keys)
    return {key: v for key, v in fields.items() if key not in dropped}


def extend(base: Any, extension: Any) -> dict[str, V]:
    """Shape with the fields of `extension` added to (or replacing) those of `base`."""
    return {**_require_shape(base), **_require_shape(extension)}


merge = extend


def keyof(shape: Any) -> V:
    """
    Accept only the key names of a shape.

    Usage:
        keyof({"name": string, "age": number})("age")  # "age"
    """
    keys = tuple(_require_shape(shape))
    allowed = frozenset(keys)
    err = fail(f"Expected one of: {', '.join(keys)}")

    def safe(value: Any) -> Ok[Any] | Err:
        if isinstance(value, str) and value in allowed:
            return Ok(value)
        return err

    return create_validator(
        _checked(safe), safe, Metadata(SchemaKind.KEYOF, constraints={"values": list(keys)})
    )
