"""Enumerations for ftlcompose configuration.

Uses StrEnum for automatic string conversion, so configuration values can be
read from plain strings (``NegotiationStrategy("lookup")``).

Python 3.13+.
"""

from enum import StrEnum


class NegotiationStrategy(StrEnum):
    """How broadly request preferences map onto available locales.

    StrEnum provides automatic string conversion: str(NegotiationStrategy.LOOKUP) == "lookup"
    """

    FILTERING = "filtering"
    """Every available locale matching any requested range, in preference order."""

    MATCHING = "matching"
    """Best match per requested range only."""

    LOOKUP = "lookup"
    """At most one locale: the single best match, or the fallback."""


class SyntaxErrorMode(StrEnum):
    """What construction does when a resource contains syntax errors.

    StrEnum provides automatic string conversion: str(SyntaxErrorMode.COLLECT) == "collect"
    """

    FAIL_FAST = "fail_fast"
    """Raise ResourceSyntaxError at the first faulty resource."""

    COLLECT = "collect"
    """Keep the partially parsed resource, record its errors, continue."""


class FkeyErrorKind(StrEnum):
    """Reason a message path failed to parse.

    StrEnum provides automatic string conversion: str(FkeyErrorKind.EMPTY) == "empty"
    """

    EMPTY = "empty"
    """Path or one of its segments is empty: '', 'msg.', '.attr'"""

    INVALID_CHARS = "invalid_chars"
    """Segment is not a valid Fluent identifier: 'hello world', '1st'"""

    TOO_MANY_ATTRIBUTES = "too_many_attributes"
    """More than one attribute segment: 'msg.attr.extra'"""


__all__ = [
    "FkeyErrorKind",
    "NegotiationStrategy",
    "SyntaxErrorMode",
]
