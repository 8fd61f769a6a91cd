"""
Schema configuration: Standard-Schema vendor, JSON Schema draft and
configured error messages.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Union

from .types import Issue

DRAFT_URLS = {
    "draft-07": "http://json-schema.org/draft-07/schema#",
    "draft-2019-09": "https://json-schema.org/draft/2019-09/schema",
    "draft-2020-12": "https://json-schema.org/draft/2020-12/schema",
}

_vendor: ContextVar[str] = ContextVar("vendor", default="sifter")
_draft: ContextVar[str] = ContextVar("draft", default="draft-07")


def get_vendor() -> str:
    """Vendor name reported by Standard-Schema props."""
    return _vendor.get()


def get_default_draft() -> str:
    """JSON Schema draft used when `to_json_schema` is not given one."""
    return _draft.get()


@contextmanager
def schema_context(*, vendor: Optional[str] = None, draft: Optional[str] = None):
    """
    Context manager for schema configuration.

    Args:
        vendor: Vendor name exposed through `~standard` props.
        draft: Default JSON Schema draft ("draft-07", "draft-2019-09",
               "draft-2020-12").

    Example:
        from sifter import object, string, to_json_schema, schema_context

        with schema_context(draft="draft-2020-12"):
            to_json_schema(object({"name": string}))
            # {"$schema": "https://json-schema.org/draft/2020-12/schema", ...}
    """
    if draft is not None and draft not in DRAFT_URLS:
        raise ValueError(f"Unknown JSON Schema draft: {draft}")

    vendor_token = _vendor.set(vendor) if vendor is not None else None
    draft_token = _draft.set(draft) if draft is not None else None
    try:
        yield
    finally:
        if draft_token is not None:
            _draft.reset(draft_token)
        if vendor_token is not None:
            _vendor.reset(vendor_token)


# ---------------------------------------------------------------------------
# Error message configuration
# ---------------------------------------------------------------------------

MessageSource = Union[str, Callable[[Issue], str]]

_global_message: ContextVar[Optional[MessageSource]] = ContextVar("global_message", default=None)
_schema_messages: ContextVar[Mapping[str, MessageSource]] = ContextVar(
    "schema_messages", default=MappingProxyType({})
)
_specific_messages: ContextVar[Mapping[str, MessageSource]] = ContextVar(
    "specific_messages", default=MappingProxyType({})
)


def get_global_message() -> Optional[MessageSource]:
    return _global_message.get()


def set_global_message(message: MessageSource) -> None:
    """Message reported by the parse helpers for every failure without a more specific one."""
    _global_message.set(message)


def delete_global_message() -> None:
    _global_message.set(None)


def get_schema_message(kind: str) -> Optional[MessageSource]:
    return _schema_messages.get().get(str(kind))


def set_schema_message(kind: str, message: MessageSource) -> None:
    """
    Message for failures of schemas of one kind ("string", "object", ...).

    Example:
        set_schema_message(SchemaKind.STRING, "Please enter text")
    """
    _schema_messages.set(MappingProxyType({**_schema_messages.get(), str(kind): message}))


def delete_schema_message(kind: str) -> None:
    remaining = {k: v for k, v in _schema_messages.get().items() if k != str(kind)}
    _schema_messages.set(MappingProxyType(remaining))


def get_specific_message(key: str) -> Optional[MessageSource]:
    return _specific_messages.get().get(key)


def set_specific_message(key: str, message: MessageSource) -> None:
    """
    Replacement for one built-in message, keyed by its text.

    Example:
        set_specific_message("Required", "This field is required")
    """
    _specific_messages.set(MappingProxyType({**_specific_messages.get(), key: message}))


def delete_specific_message(key: str) -> None:
    remaining = {k: v for k, v in _specific_messages.get().items() if k != key}
    _specific_messages.set(MappingProxyType(remaining))


def resolve_message(issue: Issue, kind: Optional[str] = None) -> str:
    """
    Configured message for an issue, or its own message when none applies.

    Lookup order: specific message, message of the schema kind, global message.
    Callable messages receive the issue.
    """
    source = _specific_messages.get().get(issue.message)
    if source is None and kind is not None:
        source = _schema_messages.get().get(str(kind))
    if source is None:
        source = _global_message.get()
    if source is None:
        return issue.message
    return source(issue) if callable(source) else source
