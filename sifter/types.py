"""
Type definitions for sifter.

Provides the Result type (Ok/Err), the Issue record, the MISSING sentinel
and the callable aliases shared by every validator.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")


class _MissingType:
    """Sentinel for an absent value (a key that is not present at all)."""

    _instance: _MissingType | None = None

    def __new__(cls) -> _MissingType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Any = _MissingType()


@dataclass(frozen=True, slots=True)
class Issue:
    """A single failure record with a root-to-leaf path."""

    message: str
    path: tuple[str | int, ...] = ()
    input: Any = MISSING
    expected: str | None = None
    received: str | None = None

    def with_prefix(self, segment: str | int) -> Issue:
        return replace(self, path=(segment, *self.path))

    def with_message(self, message: str) -> Issue:
        return self if message == self.message else replace(self, message=message)

    def to_dict(self) -> dict[str, Any]:
        """Standard-Schema shaped issue (`path` only when non-empty)."""
        out: dict[str, Any] = {"message": self.message}
        if self.path:
            out["path"] = list(self.path)
        return out


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success result containing a value."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err:
    """
    Failure result.

    `error` is the flattened single line ("a: b: Expected number"); `issues`
    holds the same failure with structured paths. When no issues are given a
    single path-less issue is derived from `error`.
    """

    error: str
    issues: tuple[Issue, ...] = field(default=())

    def __post_init__(self) -> None:
        if not self.issues:
            object.__setattr__(self, "issues", (Issue(self.error),))

    @property
    def ok(self) -> bool:
        return False

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Any:
        from .errors import ValidationError

        raise ValidationError(self.error, self.issues)

    def prefixed(self, segment: str | int, label: str | None = None) -> Err:
        """Prepend one structural path segment (object key, array index)."""
        if label is None:
            label = str(segment)
        return Err(
            f"{label}: {self.error}",
            tuple(issue.with_prefix(segment) for issue in self.issues),
        )


# Type aliases
Result = Union[Ok[T], Err]
ParseFn = Callable[[Any], Any]
SafeFn = Callable[[Any], "Ok[Any] | Err"]
