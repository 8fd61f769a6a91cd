from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..core import V, create_validator, raise_for_result, to_validator
from ..metadata import Metadata, SchemaKind
from ..types import Err, Issue, Ok
from .object import ERR_OBJECT


def record(key: Any, value: Any) -> V:
    """
    Mapping with dynamic keys: every key passes `key`, every value `value`.

    Usage:
        scores = record(string, number)
        scores({"ada": 10})   # {"ada": 10}
        scores({"ada": "x"})  # ValidationError: "[ada]: Expected number"
    """
    key_v = to_validator(key)
    value_v = to_validator(value)
    key_safe = key_v.safe
    value_safe = value_v.safe

    def safe(data: Any) -> Ok[Any] | Err:
        if not isinstance(data, Mapping):
            return ERR_OBJECT
        out: dict[Any, Any] = {}
        for k, item in data.items():
            key_result = key_safe(k)
            if isinstance(key_result, Err):
                return Err(
                    f"Invalid key: {key_result.error}",
                    tuple(
                        Issue(f"Invalid key: {i.message}", (k, *i.path), i.input, i.expected, i.received)
                        for i in key_result.issues
                    ),
                )
            value_result = value_safe(item)
            if isinstance(value_result, Err):
                return value_result.prefixed(k, f"[{k}]")
            out[key_result.value] = value_result.value
        return Ok(out)

    def check(data: Any) -> Any:
        return raise_for_result(safe(data))

    return create_validator(check, safe, Metadata(SchemaKind.RECORD, inner=(key_v, value_v)))
