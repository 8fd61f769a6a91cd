"""
Documentation metadata: descriptions, titles, examples, brands.

These helpers only touch `meta`; the returned validators validate exactly
like the ones they were built from.
"""

from __future__ import annotations

from typing import Any, Iterable

from ..core import V, to_validator
from ..metadata import Metadata, SchemaKind, get_meta


def _with_docs(validator: Any, **docs: Any) -> V:
    v = to_validator(validator)
    meta = get_meta(v) or Metadata(SchemaKind.UNKNOWN)
    return v.with_meta(meta.update(**docs))


def describe(
    validator: Any,
    description: str | None = None,
    *,
    title: str | None = None,
    examples: Iterable[Any] | None = None,
    deprecated: bool | None = None,
) -> V:
    """
    Attach documentation to a validator.

    Only the given fields change; the rest of the metadata is kept.

    Usage:
        describe(string, "User email address", title="Email")
        string.describe(title="Name", examples=["Ada"])
    """
    docs: dict[str, Any] = {}
    if description is not None:
        docs["description"] = description
    if title is not None:
        docs["title"] = title
    if examples is not None:
        docs["examples"] = tuple(examples)
    if deprecated is not None:
        docs["deprecated"] = deprecated
    return _with_docs(validator, **docs)


def brand(validator: Any, name: str) -> V:
    """Tag a validator with a nominal brand name (metadata only)."""
    return _with_docs(validator, brand=name)


def readonly(validator: Any) -> V:
    """Mark a validator's output as read-only (metadata only)."""
    return _with_docs(validator, readonly=True)


def get_description(validator: Any) -> str | None:
    meta = get_meta(validator)
    return meta.description if meta else None


def get_title(validator: Any) -> str | None:
    meta = get_meta(validator)
    return meta.title if meta else None


def get_examples(validator: Any) -> list[Any] | None:
    meta = get_meta(validator)
    if meta is None or meta.examples is None:
        return None
    return list(meta.examples)


def get_brand(validator: Any) -> str | None:
    meta = get_meta(validator)
    return meta.brand if meta else None
