"""Message paths addressing one translatable string.

An Fkey names a message and, optionally, one of its attributes:

    >>> Fkey.parse("login-button.tooltip")
    Fkey(message='login-button', attribute='tooltip')
    >>> str(Fkey("welcome"))
    'welcome'

Python 3.13+.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ftllexengine.core.identifier_validation import is_valid_identifier

from .enums import FkeyErrorKind
from .errors import ErrorContext, FkeyError

__all__ = ["Fkey"]

_PATH_CHARS_RE = re.compile(r"[A-Za-z0-9._-]*")


def _check_segment(segment: str, path: str, role: str) -> None:
    if not segment:
        msg = f"Empty {role} name in message path {path!r}"
        raise FkeyError(
            msg, FkeyErrorKind.EMPTY, ErrorContext(component="keys", operation="parse", key=path)
        )
    if not is_valid_identifier(segment):
        msg = f"Invalid characters in {role} name {segment!r} of message path {path!r}"
        raise FkeyError(
            msg,
            FkeyErrorKind.INVALID_CHARS,
            ErrorContext(component="keys", operation="parse", key=path),
        )


@dataclass(frozen=True, slots=True)
class Fkey:
    """Message name plus optional attribute name.

    Both parts must be valid Fluent identifiers. Equality and hashing are by
    value, so keys can be used as dictionary keys and built anywhere.

    Attributes:
        message: Message identifier (never empty)
        attribute: Attribute identifier, or None for the message value
    """

    message: str
    attribute: str | None = None

    def __post_init__(self) -> None:
        path = str(self)
        _check_segment(self.message, path, "message")
        if self.attribute is not None:
            _check_segment(self.attribute, path, "attribute")

    @classmethod
    def parse(cls, path: str) -> Fkey:
        """Parse ``message`` or ``message.attribute``.

        Args:
            path: Dotted message path

        Returns:
            Parsed key

        Raises:
            FkeyError: Checked in this order: EMPTY for an empty path,
                INVALID_CHARS for characters outside ASCII alphanumerics,
                ``-``, ``_`` and ``.``, TOO_MANY_ATTRIBUTES for more than one
                dot, then EMPTY or INVALID_CHARS per segment.
        """
        if not path:
            msg = "Message path is empty"
            raise FkeyError(
                msg, FkeyErrorKind.EMPTY, ErrorContext(component="keys", operation="parse", key=path)
            )
        if _PATH_CHARS_RE.fullmatch(path) is None:
            msg = f"Invalid characters in message path {path!r}"
            raise FkeyError(
                msg,
                FkeyErrorKind.INVALID_CHARS,
                ErrorContext(component="keys", operation="parse", key=path),
            )
        segments = path.split(".")
        if len(segments) > 2:
            msg = f"Message path {path!r} has more than one attribute"
            raise FkeyError(
                msg,
                FkeyErrorKind.TOO_MANY_ATTRIBUTES,
                ErrorContext(component="keys", operation="parse", key=path),
            )
        if len(segments) == 2:
            return cls(segments[0], segments[1])
        return cls(segments[0])

    @classmethod
    def coerce(cls, key: Fkey | str) -> Fkey:
        """Return ``key`` unchanged, or parse it if it is a string."""
        if isinstance(key, Fkey):
            return key
        return cls.parse(key)

    def __str__(self) -> str:
        if self.attribute is None:
            return self.message
        return f"{self.message}.{self.attribute}"
