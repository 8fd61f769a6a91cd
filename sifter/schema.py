"""
Schema operations for sifter.

Provides validate(), the parse helpers (parse, safe_parse, is_, assert_,
parser, safe_parser, try_parse) and to_pydantic().
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Literal, Optional, Union

from pydantic import BaseModel, create_model

from .context import resolve_message
from .core import V, safe_call, to_validator
from .errors import ValidationError
from .metadata import Metadata, SchemaKind, get_meta
from .types import Err, Ok

logger = logging.getLogger(__name__)

_OBJECT_KINDS = (
    SchemaKind.OBJECT,
    SchemaKind.LOOSE_OBJECT,
    SchemaKind.OBJECT_WITH_REST,
    SchemaKind.PARTIAL,
    SchemaKind.REQUIRED,
)

_LEAF_TYPES: dict[SchemaKind, Any] = {
    SchemaKind.STRING: str,
    SchemaKind.NUMBER: float,
    SchemaKind.INTEGER: int,
    SchemaKind.BOOLEAN: bool,
    SchemaKind.NULL: type(None),
    SchemaKind.ANY: Any,
    SchemaKind.UNKNOWN: Any,
    SchemaKind.INSTANCE: Any,
}


def validate(data: Any, schema: Any) -> Ok[Any] | Err:
    """
    Validate data against a schema.

    Args:
        data: The value to validate
        schema: A validator, or a dict/list/type coerced into one

    Returns:
        Ok(value) with the validated (possibly transformed) value
        Err(error, issues) if validation fails

    Usage:
        schema = {
            "name": pipe(string, nonempty),
            "email": optional(string),
            "age": pipe(integer, gte(0)),
        }
        result = validate({"name": "Alice", "age": 30}, schema)
    """
    return safe_call(to_validator(schema), data)


def try_parse(schema: Any, value: Any, default: Any = None) -> Any:
    """Validated value, or `default` when validation fails."""
    result = validate(value, schema)
    return result.value if isinstance(result, Ok) else default


def _parse_result(validator: V, value: Any) -> Ok[Any] | Err:
    result = validator.safe(value)
    if isinstance(result, Ok):
        return result
    meta = get_meta(validator)
    return _localize(result, meta.type.value if meta is not None else None)


def _localize(err: Err, kind: str | None) -> Err:
    """Apply configured messages to a failure (see `set_global_message`)."""
    issues = tuple(issue.with_message(resolve_message(issue, kind)) for issue in err.issues)
    if issues == err.issues:
        return err
    first, error = err.issues[0].message, err.error
    if error.endswith(first):
        error = error[: len(error) - len(first)] + issues[0].message
    return Err(error, issues)


def parse(schema: Any, value: Any) -> Any:
    """
    Validated value, or ValidationError.

    Unlike calling the schema directly, failures carry the messages configured
    with `set_global_message`, `set_schema_message` and `set_specific_message`.
    """
    result = _parse_result(to_validator(schema), value)
    if isinstance(result, Err):
        raise ValidationError(result.error, result.issues)
    return result.value


def safe_parse(schema: Any, value: Any) -> dict[str, Any]:
    """
    `{"success": True, "data": value}` or `{"success": False, "error": message}`.

    Usage:
        safe_parse(number, "x")  # {"success": False, "error": "Expected number"}
    """
    result = _parse_result(to_validator(schema), value)
    if isinstance(result, Ok):
        return {"success": True, "data": result.value}
    return {"success": False, "error": result.error}


def is_(schema: Any, value: Any) -> bool:
    """Type guard: whether `schema` accepts `value`."""
    return isinstance(safe_call(to_validator(schema), value), Ok)


def assert_(schema: Any, value: Any) -> None:
    """Raise ValidationError unless `schema` accepts `value`."""
    parse(schema, value)


def parser(schema: Any) -> Callable[[Any], Any]:
    """Reusable `parse` bound to one schema."""
    validator = to_validator(schema)

    def parse_value(value: Any) -> Any:
        return parse(validator, value)

    return parse_value


def safe_parser(schema: Any) -> Callable[[Any], dict[str, Any]]:
    """Reusable `safe_parse` bound to one schema."""
    validator = to_validator(schema)

    def safe_parse_value(value: Any) -> dict[str, Any]:
        return safe_parse(validator, value)

    return safe_parse_value


def to_pydantic(name: str, schema: Any) -> type[BaseModel]:
    """
    Compile an object schema to a Pydantic model.

    Args:
        name: Name of the generated model class
        schema: Object schema (or a dict shape)

    Returns:
        A Pydantic BaseModel subclass

    Usage:
        User = to_pydantic("User", object({
            "name": string,
            "email": optional(string),
            "role": with_default(string, "user"),
        }))
        user = User(name="Alice")
    """
    validator = to_validator(schema)
    meta = get_meta(validator)
    if meta is None or meta.type not in _OBJECT_KINDS or not isinstance(meta.inner, Mapping):
        raise TypeError("Schema must be an object schema")

    return _build_model(name, meta)


def _build_model(name: str, meta: Metadata) -> type[BaseModel]:
    all_optional = meta.type is SchemaKind.PARTIAL
    fields: dict[str, Any] = {}

    for key, v in meta.inner.items():
        field_type, default = _extract_pydantic_field(f"{name}{_camel(key)}", get_meta(v))
        if all_optional and default is ...:
            field_type, default = Optional[field_type], None
        fields[key] = (field_type, default)

    logger.debug("Generated pydantic model %s with fields %s", name, ", ".join(fields))
    return create_model(name, __doc__=meta.description, **fields)


def _camel(key: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in str(key).replace("-", "_").split("_"))


def _extract_pydantic_field(name: str, meta: Metadata | None) -> tuple[Any, Any]:
    """Extract Pydantic field type and default from validator metadata."""
    match meta:
        case None:
            return (Any, ...)
        case Metadata(type=SchemaKind.DEFAULT, inner=inner, default=default):
            t, _ = _extract_pydantic_field(name, get_meta(inner))
            return (t, default)
        case Metadata(
            type=SchemaKind.OPTIONAL | SchemaKind.EXACT_OPTIONAL | SchemaKind.NULLISH,
            inner=inner,
        ):
            t, _ = _extract_pydantic_field(name, get_meta(inner))
            return (Optional[t], None)

    return (_python_type(name, meta), ...)


def _python_type(name: str, meta: Metadata | None) -> Any:
    """Python annotation describing the output of a schema."""
    if meta is None:
        return Any

    inner = meta.inner
    match meta.type:
        case kind if kind in _LEAF_TYPES:
            return _LEAF_TYPES[kind]
        case SchemaKind.LITERAL:
            return Literal[meta.constraints["value"]]
        case SchemaKind.ENUM | SchemaKind.KEYOF:
            return Literal[tuple(meta.constraints["values"])]
        case kind if kind in _OBJECT_KINDS and isinstance(inner, Mapping):
            return _build_model(name, meta)
        case SchemaKind.ARRAY:
            return list[_python_type(name, get_meta(inner))]  # type: ignore[misc]
        case SchemaKind.SET:
            return set[_python_type(name, get_meta(inner))]  # type: ignore[misc]
        case SchemaKind.TUPLE:
            return list[Any]
        case SchemaKind.RECORD | SchemaKind.MAP:
            key_schema, value_schema = inner
            return dict[  # type: ignore[misc]
                _python_type(name, get_meta(key_schema)),
                _python_type(name, get_meta(value_schema)),
            ]
        case SchemaKind.UNION | SchemaKind.DISCRIMINATED_UNION | SchemaKind.VARIANT:
            options = tuple(
                _python_type(f"{name}{i}", get_meta(option)) for i, option in enumerate(inner)
            )
            return Union[options] if len(options) > 1 else options[0]
        case (
            SchemaKind.NULLABLE
            | SchemaKind.NULLISH
            | SchemaKind.OPTIONAL
            | SchemaKind.EXACT_OPTIONAL
        ):
            return Optional[_python_type(name, get_meta(inner))]
        case SchemaKind.PIPE:
            return _python_type(name, get_meta(inner[0])) if inner else Any
        case (
            SchemaKind.DEFAULT
            | SchemaKind.FALLBACK
            | SchemaKind.CATCH
            | SchemaKind.REFINE
            | SchemaKind.NON_NULLABLE
            | SchemaKind.NON_NULLISH
            | SchemaKind.NON_OPTIONAL
        ):
            return _python_type(name, get_meta(inner))

    return Any
