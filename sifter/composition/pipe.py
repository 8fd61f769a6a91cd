"""
Sequential composition.
"""

from __future__ import annotations

from typing import Any

from ..core import V, create_validator, to_validators
from ..metadata import Metadata, SchemaKind, get_meta, merge_constraints, merge_docs
from ..types import Err, Ok


def pipe(*validators: Any) -> V:
    """
    Chain validators left to right; the output of each feeds the next.

    Stops at the first failure and reports it verbatim: stage boundaries are
    never part of the reported path.

    Usage:
        pipe(string, nonempty, min_length(2))
        pipe(number, gte(0), lte(150))
    """
    if not validators:
        raise ValueError("pipe() requires at least one validator")

    steps = tuple(to_validators(validators))
    safes = tuple(step.safe for step in steps)
    checks = tuple(step.check for step in steps)

    if len(steps) == 1:
        (only,) = steps
        check = only.check
        safe = only.safe
    elif len(steps) == 2:
        c0, c1 = checks
        s0, s1 = safes

        def check(value: Any) -> Any:
            return c1(c0(value))

        def safe(value: Any) -> Ok[Any] | Err:
            r0 = s0(value)
            if isinstance(r0, Err):
                return r0
            return s1(r0.value)

    else:

        def check(value: Any) -> Any:
            for c in checks:
                value = c(value)
            return value

        def safe(value: Any) -> Ok[Any] | Err:
            for s in safes:
                result = s(value)
                if isinstance(result, Err):
                    return result
                value = result.value
            return Ok(value)

    metas = [get_meta(step) for step in steps]
    meta = Metadata(
        SchemaKind.PIPE,
        constraints=merge_constraints(metas),
        inner=steps,
        **merge_docs(metas),
    )
    return create_validator(check, safe, meta)

