"""Construction-time exceptions for ftlcompose.

Every failure the engine reports is raised synchronously by the call that
caused it, during construction. Queries never raise for missing translations
(the key is echoed instead) and never raise for formatting warnings (those are
logged).

Hierarchy:
    CompositionError (base)
    ├─ LanguageTagError (malformed language identifier; also ValueError)
    ├─ FkeyError (malformed message path; also ValueError)
    ├─ ResourceSyntaxError (syntax errors in a resource, fail-fast mode)
    ├─ EntryCollisionError (duplicate entry on the strict add path)
    └─ FallbackUnavailableError (fallback locale has no composed bundle)

Filesystem failures during discovery are not wrapped: the OSError raised by
the failing read propagates unchanged.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, final

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .diagnostics import SyntaxIssue
    from .enums import FkeyErrorKind

__all__ = [
    "CompositionError",
    "EntryCollisionError",
    "ErrorContext",
    "FallbackUnavailableError",
    "FkeyError",
    "LanguageTagError",
    "ResourceSyntaxError",
]


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Context for locating a construction failure.

    Attributes:
        component: Component where the error occurred (tags, keys, layers, builder)
        operation: Operation being performed (parse, register, finish)
        key: Offending input or identifier (optional)
        locale: Locale bucket involved, "" for the global bucket (optional)
        origin: Origin label of the resource involved (optional)
    """

    component: str
    operation: str
    key: str | None = None
    locale: str | None = None
    origin: str | None = None


class CompositionError(Exception):
    """Base exception for all ftlcompose construction failures.

    Attributes:
        context: Structured diagnostic context (optional)
    """

    def __init__(self, message: str, context: ErrorContext | None = None) -> None:
        """Initialize CompositionError.

        Args:
            message: Human-readable error description
            context: Structured diagnostic context (optional)
        """
        super().__init__(message)
        self.context = context

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{self.__class__.__name__}({self.args[0]!r}, context={self.context!r})"


@final
class LanguageTagError(CompositionError, ValueError):
    """A string is not a valid language identifier."""


@final
class FkeyError(CompositionError, ValueError):
    """A message path is empty, has invalid characters, or too many attributes.

    Attributes:
        kind: Which rule the path broke
    """

    def __init__(
        self,
        message: str,
        kind: FkeyErrorKind,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, context)
        self.kind = kind


@final
class ResourceSyntaxError(CompositionError):
    """One resource contains syntax errors.

    Carries every error the parser found in the resource, not only the first,
    each with its byte span and line range.

    Attributes:
        origin: Origin label of the resource (file path or caller label)
        locale: Locale bucket the resource was registered for, None for global
        issues: Located syntax errors, in source order
    """

    def __init__(
        self,
        issues: Iterable[SyntaxIssue],
        *,
        origin: str | None = None,
        locale: str | None = None,
    ) -> None:
        self.issues: tuple[SyntaxIssue, ...] = tuple(issues)
        self.origin = origin
        self.locale = locale
        context = ErrorContext(
            component="layers",
            operation="parse",
            locale=locale if locale is not None else "",
            origin=origin,
        )
        super().__init__(self._render(), context)

    def _render(self) -> str:
        where = f" `{self.origin}`" if self.origin else ""
        scope = f" for locale {self.locale}" if self.locale else ""
        lines = [f"While parsing resource{where}{scope}, the following errors were found:"]
        lines.extend(issue.format() for issue in self.issues)
        return "\n".join(lines)


@final
class EntryCollisionError(CompositionError):
    """A strict registration defines entries already defined for its locale.

    Attributes:
        names: Colliding entry names (terms keep their leading "-")
        locale: Locale bucket, None for global
    """

    def __init__(
        self,
        names: Iterable[str],
        *,
        locale: str | None = None,
        origin: str | None = None,
    ) -> None:
        self.names: tuple[str, ...] = tuple(sorted(names))
        self.locale = locale
        scope = locale if locale else "global"
        joined = ", ".join(self.names)
        super().__init__(
            f"Entries already defined for {scope}: {joined}",
            ErrorContext(
                component="builder",
                operation="add_resource",
                key=joined,
                locale=locale if locale is not None else "",
                origin=origin,
            ),
        )


@final
class FallbackUnavailableError(CompositionError):
    """The configured fallback locale has no composed bundle.

    Attributes:
        fallback: The requested fallback locale
        available: Locales that do have composed bundles
    """

    def __init__(self, fallback: str, available: Iterable[str]) -> None:
        self.fallback = fallback
        self.available: tuple[str, ...] = tuple(available)
        listed = ", ".join(self.available) or "none"
        super().__init__(
            f"Fallback locale {fallback} is not available (available: {listed})",
            ErrorContext(component="builder", operation="finish", locale=fallback),
        )
