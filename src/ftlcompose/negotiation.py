"""Language negotiation: from a preference string to ordered candidate locales.

Implements the accept-language range parser and the three negotiation
strategies over LanguageTag:

    FILTERING - every available locale matching any requested range, in
                preference order; the fallback is appended if missing
    MATCHING  - the best match per requested range; fallback appended if missing
    LOOKUP    - the single best match, or only the fallback

Each requested range is tried against the unclaimed available locales in six
steps of decreasing precision:

    1. exact match                       en-US  ~ en-US
    2. available locale as a range       en     ~ en-US
    3. maximized request                 en-Latn-US ~ en (via likely subtags)
    4. variants cleared, both as ranges  de-CH-1996 ~ de-CH
    5. region cleared, then maximized    en-GB -> en-Latn-US ~ en-US
    6. region cleared, both as ranges    en ~ en-UK

A locale claimed by one step is not offered again, so results never repeat.

Python 3.13+.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import TYPE_CHECKING

from .constants import DEFAULT_QUALITY, MAX_ACCEPT_LANGUAGE_RANGES, UNDETERMINED_LANGUAGE
from .enums import NegotiationStrategy
from .errors import FallbackUnavailableError, LanguageTagError
from .tags import LanguageTag

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

__all__ = [
    "Negotiator",
    "filter_matches",
    "negotiate_languages",
    "parse_accept_language",
]

logger = logging.getLogger(__name__)


def _quality(params: str) -> float:
    for param in params.split(";"):
        name, _, value = param.partition("=")
        if name.strip().lower() != "q":
            continue
        try:
            quality = float(value.strip())
        except ValueError:
            return DEFAULT_QUALITY
        if math.isnan(quality) or not 0.0 <= quality <= 1.0:
            return DEFAULT_QUALITY
        return quality
    return DEFAULT_QUALITY


def parse_accept_language(preference: str) -> list[LanguageTag]:
    """Parse a weighted language-range string.

    Ranges are comma separated; parameters follow a ``;``. The ``q`` weight
    orders ranges (highest first, ties keep their written order); ranges with
    ``q=0`` are dropped. Unparseable ranges, including ``*``, are dropped
    rather than reported, so this never fails.

    Example:
        >>> [str(t) for t in parse_accept_language("de;q=0.7, en-US, fr;q=0.9")]
        ['en-US', 'fr', 'de']
    """
    weighted: list[tuple[float, int, LanguageTag]] = []
    for position, part in enumerate(preference.split(",")[:MAX_ACCEPT_LANGUAGE_RANGES]):
        raw_range, _, params = part.partition(";")
        raw_range = raw_range.strip()
        if not raw_range:
            continue
        try:
            tag = LanguageTag.parse(raw_range)
        except LanguageTagError:
            logger.debug("Ignoring unparseable language range %r", raw_range)
            continue
        quality = _quality(params)
        if quality <= 0.0:
            continue
        weighted.append((quality, position, tag))

    weighted.sort(key=lambda item: (-item[0], item[1]))
    return list(dict.fromkeys(tag for _, _, tag in weighted))


def _match_steps(requested: LanguageTag) -> Iterator[tuple[LanguageTag, bool, bool]]:
    """Yield ``(range, available_as_range, requested_as_range)`` per step."""
    yield requested, False, False
    yield requested, True, False

    # Likely subtags are never added to an undetermined language.
    if requested.language == UNDETERMINED_LANGUAGE:
        return

    maximized = requested.maximize()
    if maximized != requested:
        yield maximized, True, False

    without_variants = replace(maximized, variants=())
    yield without_variants, True, True

    without_region = replace(without_variants, region=None)
    remaximized = without_region.maximize()
    if remaximized != without_region:
        yield remaximized, True, False

    yield replace(remaximized, region=None), True, True


def _claim(
    pool: list[LanguageTag],
    claimed: list[LanguageTag],
    requested: LanguageTag,
    available_as_range: bool,
    requested_as_range: bool,
    *,
    take_all: bool,
) -> bool:
    found = False
    for tag in list(pool):
        if found and not take_all:
            break
        if tag.matches(requested, available_as_range, requested_as_range):
            pool.remove(tag)
            claimed.append(tag)
            found = True
    return found


def filter_matches(
    requested: Iterable[LanguageTag],
    available: Iterable[LanguageTag],
    strategy: NegotiationStrategy,
) -> list[LanguageTag]:
    """Match requested tags against available ones, without any fallback.

    Args:
        requested: Requested tags, most preferred first
        available: Available tags; their order breaks ties within a step
        strategy: How many matches to take per step and per request

    Returns:
        Matched available tags in match order, without duplicates
    """
    pool = list(dict.fromkeys(available))
    claimed: list[LanguageTag] = []
    take_all = strategy is NegotiationStrategy.FILTERING

    for tag in requested:
        for candidate, available_as_range, requested_as_range in _match_steps(tag):
            if not _claim(
                pool,
                claimed,
                candidate,
                available_as_range,
                requested_as_range,
                take_all=take_all,
            ):
                continue
            if strategy is NegotiationStrategy.MATCHING:
                break
            if strategy is NegotiationStrategy.LOOKUP:
                return claimed
    return claimed


def negotiate_languages(
    requested: Iterable[LanguageTag],
    available: Iterable[LanguageTag],
    fallback: LanguageTag,
    strategy: NegotiationStrategy,
) -> list[LanguageTag]:
    """Match and then guarantee the fallback.

    LOOKUP adds the fallback only when nothing matched; FILTERING and MATCHING
    append it unless it already matched.
    """
    supported = filter_matches(requested, available, strategy)
    if strategy is NegotiationStrategy.LOOKUP:
        if not supported:
            supported.append(fallback)
    elif fallback not in supported:
        supported.append(fallback)
    return supported


class Negotiator:
    """Negotiation bound to a fixed set of available locales.

    Immutable after construction and safe to share between threads.

    Example:
        >>> negotiator = Negotiator(
        ...     [LanguageTag.parse(t) for t in ("en", "en-US", "en-UK")],
        ...     LanguageTag.parse("en-US"),
        ...     NegotiationStrategy.LOOKUP,
        ... )
        >>> [str(t) for t in negotiator.negotiate("de-AT;q=0.9,en-US;q=0.5")]
        ['en-US']
    """

    __slots__ = ("_available", "_fallback", "_strategy")

    def __init__(
        self,
        available: Iterable[LanguageTag],
        fallback: LanguageTag,
        strategy: NegotiationStrategy = NegotiationStrategy.FILTERING,
    ) -> None:
        """Bind the available locales.

        Raises:
            FallbackUnavailableError: If ``fallback`` is not available
        """
        self._available: tuple[LanguageTag, ...] = tuple(sorted(set(available)))
        if fallback not in self._available:
            raise FallbackUnavailableError(str(fallback), (str(t) for t in self._available))
        self._fallback = fallback
        self._strategy = NegotiationStrategy(strategy)

    @property
    def available(self) -> tuple[LanguageTag, ...]:
        return self._available

    @property
    def fallback(self) -> LanguageTag:
        return self._fallback

    @property
    def strategy(self) -> NegotiationStrategy:
        return self._strategy

    def negotiate(self, preference: str) -> list[LanguageTag]:
        """Negotiate a weighted language-range string. Never fails."""
        return self.negotiate_tags(parse_accept_language(preference))

    def negotiate_tags(self, requested: Iterable[LanguageTag]) -> list[LanguageTag]:
        """Negotiate already parsed tags, most preferred first."""
        requested = list(requested)
        result = negotiate_languages(requested, self._available, self._fallback, self._strategy)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Negotiated %s with %s -> %s",
                [str(t) for t in requested],
                self._strategy,
                [str(t) for t in result],
            )
        return result
