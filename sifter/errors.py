"""
Validation error for sifter.

ValidationError is what the throwing form of every validator raises. It
carries one or more Issues; the flat `message` is either the explicit
single-line message produced by the validator or derived from the issues.
"""

from __future__ import annotations

from typing import Any, Iterable

from .lib.paths import format_path
from .types import Issue


class ValidationError(ValueError):
    """Raised when a value does not conform to a schema."""

    def __init__(self, message: str | None = None, issues: Iterable[Issue] | None = None):
        collected = tuple(issues) if issues is not None else ()
        if not collected:
            collected = (Issue(message or "Validation failed"),)
        if message is None:
            if len(collected) == 1:
                message = collected[0].message
            else:
                message = f"{len(collected)} validation issues"
        super().__init__(message)
        self.message = message
        self.issues = collected

    def __repr__(self) -> str:
        return f"ValidationError({self.message!r})"

    def format(self) -> str:
        """One line per issue: `path: message` (or just the message at the root)."""
        lines = []
        for issue in self.issues:
            if issue.path:
                lines.append(f"{format_path(issue.path)}: {issue.message}")
            else:
                lines.append(issue.message)
        return "\n".join(lines)

    def flatten(self) -> dict[str, Any]:
        """Group messages into root-level and per-field lists."""
        form_errors: list[str] = []
        field_errors: dict[str, list[str]] = {}

        for issue in self.issues:
            if not issue.path:
                form_errors.append(issue.message)
            else:
                field_errors.setdefault(format_path(issue.path), []).append(issue.message)

        return {"form_errors": form_errors, "field_errors": field_errors}


def get_dot_path(issue: Issue) -> str | None:
    """Dot path of an issue, or None when it sits at the root."""
    if not issue.path:
        return None
    return format_path(issue.path)


def error_message(exc: BaseException, default: str = "Unknown error") -> str:
    """Message of a caught exception, normalized for Result errors."""
    if isinstance(exc, ValidationError):
        return exc.message
    return str(exc) or default
