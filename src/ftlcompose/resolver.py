"""Translation resolver: first candidate locale that has the key wins.

Given negotiated candidate locales and a message path, the resolver tries each
candidate's composed bundle in order and formats the first hit. A message that
lacks the requested attribute is a miss for that candidate, not an error: the
next candidate is tried. When nothing resolves, the key's display form is
returned so missing translations are visible on screen instead of raising.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .keys import Fkey

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from ftllexengine import FluentValue

    from .composer import ComposedBundle
    from .tags import LanguageTag

__all__ = [
    "FallbackInfo",
    "TranslationResolver",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Information about a locale fallback event.

    Provided to the ``on_fallback`` callback when a key resolves in a
    candidate other than the first one.

    Attributes:
        requested_locale: The first (preferred) candidate
        resolved_locale: The candidate that actually had the key
        key: The message path that was resolved

    Example:
        >>> def log_fallback(info: FallbackInfo) -> None:
        ...     print(f"Fallback: {info.key} resolved from "
        ...           f"{info.resolved_locale} (requested {info.requested_locale})")
    """

    requested_locale: LanguageTag
    resolved_locale: LanguageTag
    key: Fkey


class TranslationResolver:
    """Resolve message paths against composed bundles.

    Holds no mutable state: resolving the same key with the same candidates and
    arguments always returns the same string.
    """

    __slots__ = ("_bundles", "_on_fallback")

    def __init__(
        self,
        bundles: Mapping[LanguageTag, ComposedBundle],
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        self._bundles = bundles
        self._on_fallback = on_fallback

    def resolve(
        self,
        candidates: Iterable[LanguageTag],
        key: Fkey | str,
        args: Mapping[str, FluentValue] | None = None,
    ) -> str:
        """Format ``key`` from the first candidate that has it.

        Args:
            candidates: Locales to try, in order (usually from negotiation)
            key: Message path, as Fkey or "message" / "message.attribute"
            args: Variables for the pattern (optional)

        Returns:
            Formatted string, or ``str(key)`` if no candidate resolves the key

        Raises:
            FkeyError: If ``key`` is a malformed string
            KeyError: If a candidate has no composed bundle; candidates must come
                from the engine's available locales
        """
        key = Fkey.coerce(key)
        first: LanguageTag | None = None
        for locale in candidates:
            if first is None:
                first = locale
            bundle = self._bundles.get(locale)
            if bundle is None:
                msg = f"No composed bundle for locale {locale}"
                raise KeyError(msg)
            if not bundle.resolves(key):
                continue

            text, errors = bundle.format(key, args)
            for error in errors:
                logger.debug("Formatting %s in %s: %s", key, locale, error)
            if self._on_fallback is not None and locale != first:
                self._on_fallback(FallbackInfo(first, locale, key))
            return text

        logger.debug("Message %s not found in any candidate locale", key)
        return str(key)
