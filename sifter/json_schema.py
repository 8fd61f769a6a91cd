"""
JSON Schema projection.

Walks the Metadata attached to a schema and produces a JSON Schema fragment
for it. Projection never fails: a validator without metadata is described
as well as its name allows, and an empty fragment otherwise.

Usage:
    from sifter import object, optional, string, integer, to_json_schema

    to_json_schema(object({"name": string, "age": optional(integer)}))
    # {
    #     "type": "object",
    #     "properties": {"name": {"type": "string"}, "age": {"type": "integer"}},
    #     "required": ["name"],
    #     "$schema": "http://json-schema.org/draft-07/schema#",
    # }
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from .context import DRAFT_URLS, get_default_draft
from .metadata import OPTIONAL_KINDS, Metadata, SchemaKind, get_meta
from .types import MISSING

logger = logging.getLogger(__name__)

JsonSchema = dict[str, Any]

# Constraint keys copied verbatim into fragments
JSON_KEYWORDS = frozenset(
    {
        "minLength",
        "maxLength",
        "pattern",
        "format",
        "minimum",
        "maximum",
        "exclusiveMinimum",
        "exclusiveMaximum",
        "multipleOf",
        "minItems",
        "maxItems",
        "uniqueItems",
        "minProperties",
        "maxProperties",
    }
)

_INFERRED_TYPES = (
    ({"str", "string", "text"}, "string"),
    ({"int", "integer"}, "integer"),
    ({"float", "number", "num"}, "number"),
    ({"bool", "boolean"}, "boolean"),
    ({"none", "null"}, "null"),
    ({"list", "array", "items"}, "array"),
    ({"dict", "object", "obj", "mapping"}, "object"),
)

_TOKEN_SPLIT = re.compile(r"[^a-z0-9]+")


def _keywords(constraints: Mapping[str, Any]) -> JsonSchema:
    return {k: v for k, v in constraints.items() if k in JSON_KEYWORDS}


def infer_schema(validator: Any) -> JsonSchema:
    """Best-effort fragment for a validator without metadata."""
    name = getattr(validator, "__qualname__", None) or getattr(validator, "__name__", None)
    if not name:
        name = repr(validator)
    tokens = set(_TOKEN_SPLIT.split(name.lower()))
    for names, json_type in _INFERRED_TYPES:
        if tokens & names:
            logger.debug("Inferred JSON type %r for %s", json_type, name)
            return {"type": json_type}
    logger.debug("No JSON type inferred for %s", name)
    return {}


class SchemaConverter:
    """
    Recursive Metadata -> JSON Schema converter for a single call.

    `draft` selects draft-specific keywords (tuple items). Lazy schemas that
    are already being converted further up the tree convert to `{}`.
    """

    def __init__(self, draft: str = "draft-07"):
        self.draft = draft
        self._resolving: set[int] = set()

    def convert(self, schema: Any) -> JsonSchema:
        meta = get_meta(schema)
        if meta is None:
            return infer_schema(schema)

        result = self.convert_meta(meta)
        return self._with_docs(result, meta)

    def _with_docs(self, result: JsonSchema, meta: Metadata) -> JsonSchema:
        if meta.description is not None:
            result["description"] = meta.description
        if meta.title is not None:
            result["title"] = meta.title
        if meta.examples is not None:
            result["examples"] = list(meta.examples)
        if meta.default is not MISSING:
            result["default"] = meta.default
        if meta.deprecated is not None:
            result["deprecated"] = meta.deprecated
        if meta.readonly is not None:
            result["readOnly"] = meta.readonly
        return result

    def convert_meta(self, meta: Metadata) -> JsonSchema:
        constraints = meta.constraints or {}
        inner = meta.inner

        match meta.type:
            case SchemaKind.STRING:
                return {"type": "string", **_keywords(constraints)}
            case SchemaKind.NUMBER:
                return {"type": "number", **_keywords(constraints)}
            case SchemaKind.INTEGER:
                return {"type": "integer", **_keywords(constraints)}
            case SchemaKind.BOOLEAN:
                return {"type": "boolean"}
            case SchemaKind.NULL:
                return {"type": "null"}
            case SchemaKind.ANY | SchemaKind.UNKNOWN | SchemaKind.INSTANCE:
                return {}
            case SchemaKind.NEVER:
                return {"not": {}}
            case SchemaKind.LITERAL:
                return {"const": constraints["value"]} if "value" in constraints else {}
            case SchemaKind.ENUM:
                return {"enum": list(constraints["values"])} if "values" in constraints else {}
            case SchemaKind.KEYOF:
                return {"type": "string", "enum": list(constraints.get("values", ()))}
            case SchemaKind.CHECK:
                return _keywords(constraints)

            case SchemaKind.OBJECT:
                return self._object(inner)
            case SchemaKind.LOOSE_OBJECT:
                return {**self._object(inner), "additionalProperties": True}
            case SchemaKind.OBJECT_WITH_REST:
                rest = constraints.get("rest")
                extra = self.convert(rest) if rest is not None else True
                return {**self._object(inner), "additionalProperties": extra}
            case SchemaKind.PARTIAL:
                return self._object(inner, required=False)
            case SchemaKind.REQUIRED:
                return self._object(inner, required=True)
            case SchemaKind.ARRAY:
                result: JsonSchema = {"type": "array"}
                if inner is not None:
                    result["items"] = self.convert(inner)
                result.update(_keywords(constraints))
                return result
            case SchemaKind.TUPLE:
                return self._tuple(inner or (), constraints)
            case SchemaKind.RECORD:
                key_schema, value_schema = inner
                result = {"type": "object", "additionalProperties": self.convert(value_schema)}
                names = self.convert(key_schema)
                if names and names != {"type": "string"}:
                    result["propertyNames"] = names
                return result
            case SchemaKind.MAP:
                _, value_schema = inner
                return {"type": "object", "additionalProperties": self.convert(value_schema)}
            case SchemaKind.SET:
                result = {"type": "array", "uniqueItems": True}
                if inner is not None:
                    result["items"] = self.convert(inner)
                return result
            case SchemaKind.LAZY:
                return self._lazy(inner)

            case SchemaKind.PIPE:
                return self._pipe(inner or ())
            case SchemaKind.UNION | SchemaKind.DISCRIMINATED_UNION | SchemaKind.VARIANT:
                return {"anyOf": [self.convert(option) for option in inner]} if inner else {}
            case SchemaKind.INTERSECT:
                return {"allOf": [self.convert(s) for s in inner]} if inner else {}
            case SchemaKind.NULLABLE | SchemaKind.NULLISH:
                return self._nullable(inner)
            case (
                SchemaKind.OPTIONAL
                | SchemaKind.EXACT_OPTIONAL
                | SchemaKind.DEFAULT
                | SchemaKind.FALLBACK
                | SchemaKind.NON_NULLABLE
                | SchemaKind.NON_NULLISH
                | SchemaKind.NON_OPTIONAL
                | SchemaKind.REFINE
                | SchemaKind.TRANSFORM
                | SchemaKind.CATCH
                | SchemaKind.CODEC
            ):
                return self.convert(inner) if inner is not None else {}

        return {}

    def _object(self, shape: Any, required: bool | None = None) -> JsonSchema:
        result: JsonSchema = {"type": "object"}
        if not isinstance(shape, Mapping):
            return result

        properties: JsonSchema = {}
        required_keys: list[str] = []
        for key, field in shape.items():
            properties[key] = self.convert(field)
            field_meta = get_meta(field)
            is_optional = field_meta is not None and field_meta.type in OPTIONAL_KINDS
            if required or (required is None and not is_optional):
                required_keys.append(key)

        result["properties"] = properties
        if required_keys:
            result["required"] = required_keys
        return result

    def _tuple(self, items: tuple[Any, ...], constraints: Mapping[str, Any]) -> JsonSchema:
        positional = [self.convert(item) for item in items]
        rest = constraints.get("rest")
        fixed = rest is None and not constraints.get("loose")

        result: JsonSchema = {"type": "array", "minItems": len(positional)}
        if self.draft == "draft-2020-12":
            result["prefixItems"] = positional
            if rest is not None:
                result["items"] = self.convert(rest)
        else:
            result["items"] = positional
            if rest is not None:
                result["additionalItems"] = self.convert(rest)
        if fixed:
            result["maxItems"] = len(positional)
        return result

    def _nullable(self, inner: Any) -> JsonSchema:
        if inner is None:
            return {"type": "null"}
        fragment = self.convert(inner)
        json_type = fragment.get("type")
        if json_type is None:
            return {"anyOf": [fragment, {"type": "null"}]}
        if isinstance(json_type, list):
            types = json_type if "null" in json_type else [*json_type, "null"]
        else:
            types = [json_type, "null"]
        return {**fragment, "type": types}

    def _lazy(self, resolve: Any) -> JsonSchema:
        if resolve is None:
            return {}
        key = id(resolve)
        if key in self._resolving:
            logger.debug("Cutting recursive lazy schema")
            return {}
        self._resolving.add(key)
        try:
            return self.convert(resolve())
        finally:
            self._resolving.discard(key)

    def _pipe(self, steps: tuple[Any, ...]) -> JsonSchema:
        if not steps:
            return {}
        result = self.convert(steps[0])
        for step in steps[1:]:
            step_meta = get_meta(step)
            if step_meta is not None and step_meta.type is SchemaKind.CHECK:
                result.update(_keywords(step_meta.constraints))
        return result


# ---------------------------------------------------------------------------
# Global definitions registry
# ---------------------------------------------------------------------------


class DefinitionRegistry:
    """
    Process-wide named definitions, merged into `$defs` on request.

    Meant to be filled during single-threaded setup; later additions
    overwrite earlier ones with the same name.
    """

    def __init__(self) -> None:
        self._defs: dict[str, Any] = {}

    def add(self, defs: Mapping[str, Any]) -> None:
        self._defs.update(defs)
        logger.debug("Registered JSON Schema definitions: %s", ", ".join(defs))

    def get(self) -> dict[str, Any] | None:
        return dict(self._defs) if self._defs else None

    def clear(self) -> None:
        self._defs.clear()
        logger.debug("Cleared JSON Schema definitions")


_registry = DefinitionRegistry()


def add_global_defs(defs: Mapping[str, Any]) -> None:
    _registry.add(defs)


def get_global_defs() -> dict[str, Any] | None:
    return _registry.get()


def clear_global_defs() -> None:
    _registry.clear()


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def to_json_schema(
    schema: Any,
    *,
    include_schema: bool = True,
    draft: str | None = None,
    definitions: Mapping[str, Any] | None = None,
    use_global_defs: bool = False,
) -> JsonSchema:
    """
    Convert a schema to a JSON Schema document.

    Args:
        schema: Any validator.
        include_schema: Add the `$schema` draft URL.
        draft: "draft-07", "draft-2019-09" or "draft-2020-12"; defaults to
               the `schema_context` draft.
        definitions: Named schemas converted into `$defs`.
        use_global_defs: Also merge the global definitions registry into
               `$defs` (explicit definitions win on name clashes).
    """
    draft = draft or get_default_draft()
    if draft not in DRAFT_URLS:
        raise ValueError(f"Unknown JSON Schema draft: {draft}")

    converter = SchemaConverter(draft)
    result = converter.convert(schema)

    if include_schema:
        result["$schema"] = DRAFT_URLS[draft]

    defs: dict[str, Any] = {}
    if use_global_defs:
        defs.update(get_global_defs() or {})
    if definitions:
        defs.update(definitions)
    if defs:
        result["$defs"] = {name: converter.convert(d) for name, d in defs.items()}

    return result


def to_json_schema_defs(definitions: Mapping[str, Any], *, draft: str | None = None) -> dict[str, JsonSchema]:
    """Convert a mapping of named schemas to a mapping of fragments."""
    converter = SchemaConverter(draft or get_default_draft())
    return {name: converter.convert(schema) for name, schema in definitions.items()}
