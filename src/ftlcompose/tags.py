"""Language identifiers: parsing, base derivation, range matching.

A LanguageTag is the parsed form of a Unicode language identifier such as
``en``, ``en-US``, ``sr-Latn-RS`` or ``de-CH-1996``. Tags are canonicalized at
parse time so that spelling variants of the same identifier compare equal:

    >>> LanguageTag.parse("EN_us") == LanguageTag.parse("en-US")
    True

Babel's CLDR likely-subtags table backs ``maximize()``, which negotiation uses
to match ``en-US`` requests against ``en-Latn-US`` style availability and vice
versa.

Python 3.13+.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass, replace

from .constants import UNDETERMINED_LANGUAGE
from .errors import ErrorContext, LanguageTagError

__all__ = [
    "LanguageTag",
    "likely_subtags",
]

_TAG_RE = re.compile(
    r"(?P<language>[A-Za-z]{2,3}|[A-Za-z]{5,8})"
    r"(?:[-_](?P<script>[A-Za-z]{4}))?"
    r"(?:[-_](?P<region>[A-Za-z]{2}|[0-9]{3}))?"
    r"(?P<variants>(?:[-_](?:[A-Za-z0-9]{5,8}|[0-9][A-Za-z0-9]{3}))*)"
)
_SEPARATOR_RE = re.compile(r"[-_]")


@dataclass(frozen=True, slots=True)
class LanguageTag:
    """Immutable language identifier.

    Attributes:
        language: Lowercase language subtag ("en", "und" when undetermined)
        script: Titlecase script subtag ("Latn") or None
        region: Uppercase region subtag ("US", "419") or None
        variants: Sorted lowercase variant subtags
    """

    language: str
    script: str | None = None
    region: str | None = None
    variants: tuple[str, ...] = ()

    @classmethod
    def parse(cls, tag: str) -> LanguageTag:
        """Parse a language identifier.

        Accepts ``-`` or ``_`` as subtag separator and any letter case.

        Args:
            tag: Identifier such as "en", "en-US", "zh-Hant-TW"

        Returns:
            Canonicalized LanguageTag

        Raises:
            LanguageTagError: If the string is not a valid identifier
        """
        match = _TAG_RE.fullmatch(tag)
        if match is None:
            msg = f"Invalid language identifier: {tag!r}"
            raise LanguageTagError(
                msg, ErrorContext(component="tags", operation="parse", key=tag)
            )

        variants = tuple(
            sorted(v.lower() for v in _SEPARATOR_RE.split(match["variants"]) if v)
        )
        if len(set(variants)) != len(variants):
            msg = f"Duplicate variant subtag in language identifier: {tag!r}"
            raise LanguageTagError(
                msg, ErrorContext(component="tags", operation="parse", key=tag)
            )

        script = match["script"]
        region = match["region"]
        return cls(
            language=match["language"].lower(),
            script=script.title() if script else None,
            region=region.upper() if region else None,
            variants=variants,
        )

    @property
    def has_region(self) -> bool:
        """True if the tag has a region and therefore a distinct base tag."""
        return self.region is not None

    @property
    def base(self) -> LanguageTag:
        """The tag with its region cleared.

        For a tag without region this is the tag itself, not a separate
        inheritance level.
        """
        if self.region is None:
            return self
        return replace(self, region=None)

    @property
    def posix(self) -> str:
        """Underscore-separated form used by Babel ("en_US")."""
        return "_".join(self._subtags())

    @property
    def sort_key(self) -> tuple[str, str, str, tuple[str, ...]]:
        """Key giving a total order; absent subtags sort before present ones."""
        return (self.language, self.script or "", self.region or "", self.variants)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LanguageTag):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __str__(self) -> str:
        return "-".join(self._subtags())

    def _subtags(self) -> list[str]:
        parts = [self.language]
        if self.script:
            parts.append(self.script)
        if self.region:
            parts.append(self.region)
        parts.extend(self.variants)
        return parts

    def matches(
        self,
        other: LanguageTag,
        self_as_range: bool = False,
        other_as_range: bool = False,
    ) -> bool:
        """Compare subtag by subtag, treating absent subtags as wildcards on range sides.

        ``en`` as a range matches ``en-US``; ``en-US`` as a plain tag matches
        only ``en-US``. An undetermined language ("und") counts as absent.

        Args:
            other: Tag to compare with
            self_as_range: Absent subtags of this tag match anything
            other_as_range: Absent subtags of ``other`` match anything
        """
        self_language = None if self.language == UNDETERMINED_LANGUAGE else self.language
        other_language = None if other.language == UNDETERMINED_LANGUAGE else other.language
        return (
            _subtag_matches(self_language, other_language, self_as_range, other_as_range)
            and _subtag_matches(self.script, other.script, self_as_range, other_as_range)
            and _subtag_matches(self.region, other.region, self_as_range, other_as_range)
            and _subtag_matches(
                self.variants or None, other.variants or None, self_as_range, other_as_range
            )
        )

    def maximize(self) -> LanguageTag:
        """Fill absent script and region from CLDR likely subtags.

        ``en`` becomes ``en-Latn-US``, ``zh-TW`` becomes ``zh-Hant-TW``. Present
        subtags are never changed. Returns the tag unchanged when CLDR knows
        nothing about it.
        """
        likely = _lookup_likely(self.language, self.script, self.region)
        if likely is None:
            return self
        language, script, region = likely
        return replace(
            self,
            language=language if self.language == UNDETERMINED_LANGUAGE else self.language,
            script=self.script or script,
            region=self.region or region,
        )


def _subtag_matches[T](
    left: T | None, right: T | None, left_as_range: bool, right_as_range: bool
) -> bool:
    return (left_as_range and left is None) or (right_as_range and right is None) or left == right


@functools.cache
def likely_subtags() -> dict[str, str]:
    """CLDR likely-subtags table from Babel ("en" -> "en_Latn_US").

    Loaded once; the table is read-only afterwards.
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel.core import get_global  # noqa: PLC0415

    return dict(get_global("likely_subtags"))


@functools.lru_cache(maxsize=256)
def _lookup_likely(
    language: str, script: str | None, region: str | None
) -> tuple[str, str | None, str | None] | None:
    from babel.core import parse_locale  # noqa: PLC0415

    table = likely_subtags()
    candidates = []
    if script and region:
        candidates.append(f"{language}_{script}_{region}")
    if region:
        candidates.append(f"{language}_{region}")
    if script:
        candidates.append(f"{language}_{script}")
    candidates.append(language)
    if script:
        candidates.append(f"{UNDETERMINED_LANGUAGE}_{script}")
    if region:
        candidates.append(f"{UNDETERMINED_LANGUAGE}_{region}")

    for candidate in candidates:
        value = table.get(candidate)
        if value is None:
            continue
        lang, territory, found_script, _variant = parse_locale(value)[:4]
        return lang, found_script, territory
    return None
