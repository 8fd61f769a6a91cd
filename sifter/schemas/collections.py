"""
Mapping-with-any-key and set schemas.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..core import V, create_validator, fail, raise_for_result, to_validator
from ..metadata import Metadata, SchemaKind
from ..types import Err, Ok

ERR_MAP = fail("Expected Map", expected="map")
ERR_SET = fail("Expected Set", expected="set")


def map_(key: Any, value: Any) -> V:
    """
    Mapping whose keys need not be strings.

    Usage:
        map_(integer, string)({1: "one"})
    """
    key_v = to_validator(key)
    value_v = to_validator(value)
    key_safe = key_v.safe
    value_safe = value_v.safe

    def safe(data: Any) -> Ok[Any] | Err:
        if not isinstance(data, Mapping):
            return ERR_MAP
        out: dict[Any, Any] = {}
        for k, item in data.items():
            key_result = key_safe(k)
            if isinstance(key_result, Err):
                return key_result.prefixed(k, "Map key")
            value_result = value_safe(item)
            if isinstance(value_result, Err):
                return value_result.prefixed(k, f"Map[{k}]")
            out[key_result.value] = value_result.value
        return Ok(out)

    def check(data: Any) -> Any:
        return raise_for_result(safe(data))

    return create_validator(check, safe, Metadata(SchemaKind.MAP, inner=(key_v, value_v)))


def set_(item: Any) -> V:
    """
    Set or frozenset whose every element passes `item`; the output is a set.

    Elements are reported by their position in iteration order.
    """
    item_v = to_validator(item)
    item_safe = item_v.safe

    def safe(data: Any) -> Ok[Any] | Err:
        if not isinstance(data, (set, frozenset)):
            return ERR_SET
        out = set()
        for i, element in enumerate(data):
            result = item_safe(element)
            if isinstance(result, Err):
                return result.prefixed(i, f"Set[{i}]")
            out.add(result.value)
        return Ok(out)

    def check(data: Any) -> Any:
        return raise_for_result(safe(data))

    return create_validator(check, safe, Metadata(SchemaKind.SET, inner=item_v))
