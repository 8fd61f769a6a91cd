"""
Standard-Schema V1 adapter.

Translates the Result form of any validator into the vendor-neutral interop
shape:

    {"~standard": {"version": 1, "vendor": "sifter", "validate": fn}}

where `fn(value)` returns `{"value": ...}` or
`{"issues": [{"message": ..., "path": [...]}, ...]}`.
"""

from __future__ import annotations

from typing import Any, Callable

from .context import get_vendor
from .core import safe_call
from .types import Ok

StandardResult = dict[str, Any]


def standard_validate(validator: Any) -> Callable[[Any], StandardResult]:
    """Standard-Schema `validate` function for a validator."""

    def validate(value: Any) -> StandardResult:
        result = safe_call(validator, value)
        if isinstance(result, Ok):
            return {"value": result.value}
        return {"issues": [issue.to_dict() for issue in result.issues]}

    return validate


def standard_props(validator: Any) -> dict[str, Any]:
    """The `~standard` props object for a validator."""
    return {
        "version": 1,
        "vendor": get_vendor(),
        "validate": standard_validate(validator),
    }


def to_standard(validator: Any) -> dict[str, Any]:
    """Wrap any validator (V or plain callable) in the `~standard` interop shape."""
    return {"~standard": standard_props(validator)}
