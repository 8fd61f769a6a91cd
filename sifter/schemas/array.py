from __future__ import annotations

from typing import Any

from ..core import V, create_validator, fail, raise_for_result, to_validator
from ..metadata import Metadata, SchemaKind
from ..types import Err, Ok

ERR_ARRAY = fail("Expected array", expected="array")


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def array(item: Any) -> V:
    """
    Validate a list (or tuple) whose every element passes `item`.

    A failing element is reported with its index, so nested arrays build
    multi-segment paths:

        array(array(number))([[1, 2], [3, "x"]])
        # ValidationError: "[1]: [1]: Expected number", path (1, 1)
    """
    item_v = to_validator(item)
    item_safe = item_v.safe

    def safe(value: Any) -> Ok[Any] | Err:
        if not is_array(value):
            return ERR_ARRAY
        out = []
        for i, element in enumerate(value):
            result = item_safe(element)
            if isinstance(result, Err):
                return result.prefixed(i, f"[{i}]")
            out.append(result.value)
        return Ok(out)

    def check(value: Any) -> Any:
        return raise_for_result(safe(value))

    return create_validator(check, safe, Metadata(SchemaKind.ARRAY, inner=item_v))
