from __future__ import annotations

from typing import Any, Callable

from ..core import V, create_validator, to_validator
from ..metadata import Metadata, SchemaKind
from ..types import Err, Ok


def lazy(factory: Callable[[], Any]) -> V:
    """
    Defer building a schema until first use, for recursive schemas.

    The factory runs once; its result is cached.

    Usage:
        node = lazy(lambda: object({"value": number, "children": array(node)}))
    """
    cache: list[V] = []

    def resolve() -> V:
        if not cache:
            cache.append(to_validator(factory()))
        return cache[0]

    def check(value: Any) -> Any:
        return resolve().check(value)

    def safe(value: Any) -> Ok[Any] | Err:
        return resolve().safe(value)

    return create_validator(check, safe, Metadata(SchemaKind.LAZY, inner=resolve))
