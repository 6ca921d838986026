"""Span-located syntax diagnostics for translation resources.

The FTL parser never stops at the first error: every unparseable entry becomes
a Junk node carrying one or more annotations. This module turns those nodes into
SyntaxIssue records that locate the problem in the original text (character
offsets, UTF-8 byte offsets and 1-based line numbers), so an error can be traced
back to its origin without re-parsing.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ftllexengine.syntax import Junk

if TYPE_CHECKING:
    from ftllexengine.syntax import Resource

__all__ = [
    "SyntaxIssue",
    "collect_syntax_issues",
    "normalize_line_endings",
]


def normalize_line_endings(source: str) -> str:
    """Convert CRLF and lone CR line endings to LF.

    Spans reported by the parser index into LF-normalized text. Layers keep the
    normalized form so offsets and line numbers always agree with the stored
    source.
    """
    return source.replace("\r\n", "\n").replace("\r", "\n")


@dataclass(frozen=True, slots=True)
class SyntaxIssue:
    """One syntax error located in resource source text.

    Attributes:
        code: Parser error code (e.g., "E0003")
        message: Human-readable parser message
        start: Character offset of the offending span (inclusive)
        end: Character offset of the offending span (exclusive)
        byte_start: UTF-8 byte offset matching ``start``
        byte_end: UTF-8 byte offset matching ``end``
        line_start: 1-based line where the span begins
        line_end: 1-based line where the span ends
        snippet: Source text of the unparseable entry
    """

    code: str
    message: str
    start: int
    end: int
    byte_start: int
    byte_end: int
    line_start: int
    line_end: int
    snippet: str

    @property
    def byte_span(self) -> tuple[int, int]:
        """Byte range ``(start, end)`` of the span in UTF-8 encoded source."""
        return (self.byte_start, self.byte_end)

    def format(self) -> str:
        """Render the issue as a location header followed by the quoted snippet."""
        snippet = self.snippet.rstrip("\n")
        return (
            f"Lines {self.line_start} to {self.line_end}: {self.code} {self.message}\n"
            f"'''\n{snippet}\n'''"
        )


def _line_of(source: str, offset: int) -> int:
    return source.count("\n", 0, offset) + 1


def _byte_offset(source: str, offset: int) -> int:
    return len(source[:offset].encode("utf-8"))


def _issue(source: str, junk: Junk, code: str, message: str, start: int, end: int) -> SyntaxIssue:
    # Junk content ends with the newline that terminated the entry; the span's
    # last line is the one holding the last real character.
    last = max(start, end - 1)
    return SyntaxIssue(
        code=code,
        message=message,
        start=start,
        end=end,
        byte_start=_byte_offset(source, start),
        byte_end=_byte_offset(source, end),
        line_start=_line_of(source, start),
        line_end=_line_of(source, last),
        snippet=junk.content,
    )


def collect_syntax_issues(resource: Resource, source: str) -> tuple[SyntaxIssue, ...]:
    """Collect every syntax error of a parsed resource.

    Each Junk entry yields one issue per annotation. The junk span (the whole
    unparseable entry) is used for location, since annotation spans point at a
    single character inside it. Junk without annotations still yields one issue.

    Args:
        resource: Resource returned by ``ftllexengine.syntax.parse``
        source: The LF-normalized text that was parsed

    Returns:
        Issues in source order; empty when the resource parsed cleanly.
    """
    issues: list[SyntaxIssue] = []
    for entry in resource.entries:
        if not isinstance(entry, Junk):
            continue
        if entry.span is not None:
            start, end = entry.span.start, entry.span.end
        else:
            start = max(source.find(entry.content), 0)
            end = start + len(entry.content)
        if not entry.annotations:
            issues.append(_issue(source, entry, "E0000", "unparseable entry", start, end))
            continue
        issues.extend(
            _issue(source, entry, annotation.code, annotation.message, start, end)
            for annotation in entry.annotations
        )
    return tuple(issues)
