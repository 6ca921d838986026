"""Resource layers and the store that orders them by locale.

A ResourceLayer is one parsed translation resource: the text it came from, an
optional origin label (usually the file path), the parsed AST, and the syntax
issues the parser recovered from. Layers are immutable and shared by every
composed bundle that includes them.

A LayerStore maps a locale bucket (a LanguageTag, or None for the global
bucket) to the ordered layers registered for it. Order inside a bucket is
insertion order and decides which layer wins when two define the same entry.

Parsing is exposed as a tagged outcome:

    - Parsed(layer): the resource had no syntax errors
    - Recovered(layer, issues): the parser skipped unparseable entries; the
      layer holds everything that did parse

``accept_layer`` applies a SyntaxErrorMode to an outcome: in fail-fast mode a
Recovered outcome is turned into a raised ResourceSyntaxError, in collect mode
its layer is kept and its issues stay attached to it.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ftllexengine.syntax import Message, Term, parse

from .diagnostics import SyntaxIssue, collect_syntax_issues, normalize_line_endings
from .enums import SyntaxErrorMode
from .errors import ResourceSyntaxError

if TYPE_CHECKING:
    from ftllexengine.syntax import Resource

    from .tags import LanguageTag

__all__ = [
    "LayerStore",
    "ParseOutcome",
    "Parsed",
    "Recovered",
    "ResourceLayer",
    "accept_layer",
    "entry_name",
    "parse_layer",
]

logger = logging.getLogger(__name__)

type Entry = Message | Term
"""A named entry a layer contributes to composition."""


def entry_name(entry: Entry) -> str:
    """Composition key of an entry: messages by id, terms by ``-id``."""
    if isinstance(entry, Term):
        return f"-{entry.id.name}"
    return entry.id.name


@dataclass(frozen=True, slots=True)
class ResourceLayer:
    """One parsed translation resource.

    Attributes:
        source: LF-normalized source text, kept for error reporting
        resource: Parsed AST (partial when ``issues`` is non-empty)
        origin: Where the text came from (file path or caller label)
        issues: Syntax errors the parser recovered from
    """

    source: str
    resource: Resource
    origin: str | None = None
    issues: tuple[SyntaxIssue, ...] = ()

    @property
    def has_errors(self) -> bool:
        return bool(self.issues)

    def entries(self) -> Iterator[tuple[str, Entry]]:
        """Yield ``(name, entry)`` for every message and term, in source order.

        Comments and junk are skipped. A name repeated inside the same layer is
        yielded each time; composition keeps the last one.
        """
        for entry in self.resource.entries:
            if isinstance(entry, (Message, Term)):
                yield entry_name(entry), entry

    def entry_names(self) -> frozenset[str]:
        return frozenset(name for name, _ in self.entries())

    def duplicate_names(self) -> frozenset[str]:
        """Names defined more than once inside this layer."""
        seen: set[str] = set()
        duplicates: set[str] = set()
        for name, _ in self.entries():
            if name in seen:
                duplicates.add(name)
            seen.add(name)
        return frozenset(duplicates)

    def __repr__(self) -> str:
        entries = sum(1 for _ in self.entries())
        return (
            f"ResourceLayer(origin={self.origin!r}, entries={entries}, "
            f"issues={len(self.issues)})"
        )


@dataclass(frozen=True, slots=True)
class Parsed:
    """Outcome of a resource that parsed without errors."""

    layer: ResourceLayer


@dataclass(frozen=True, slots=True)
class Recovered:
    """Outcome of a resource the parser had to recover from.

    Attributes:
        layer: Layer holding every entry that did parse
        issues: Non-empty tuple of located syntax errors
    """

    layer: ResourceLayer
    issues: tuple[SyntaxIssue, ...]


type ParseOutcome = Parsed | Recovered


def parse_layer(text: str, origin: str | None = None) -> ParseOutcome:
    """Parse FTL source into a layer.

    Args:
        text: FTL source; line endings are normalized to LF first
        origin: Label used in error messages (optional)

    Returns:
        Parsed if the resource is clean, Recovered otherwise
    """
    source = normalize_line_endings(text)
    resource = parse(source)
    issues = collect_syntax_issues(resource, source)
    layer = ResourceLayer(source=source, resource=resource, origin=origin, issues=issues)
    if issues:
        return Recovered(layer, issues)
    return Parsed(layer)


def accept_layer(
    outcome: ParseOutcome,
    mode: SyntaxErrorMode,
    *,
    locale: LanguageTag | None = None,
) -> ResourceLayer:
    """Apply a syntax error mode to a parse outcome.

    Raises:
        ResourceSyntaxError: If ``outcome`` is Recovered and ``mode`` is FAIL_FAST
    """
    match outcome:
        case Parsed(layer=layer):
            return layer
        case Recovered(layer=layer, issues=issues):
            label = str(locale) if locale is not None else None
            if mode is SyntaxErrorMode.FAIL_FAST:
                raise ResourceSyntaxError(issues, origin=layer.origin, locale=label)
            logger.warning(
                "Recovered from %d syntax error(s) in %s (locale: %s)",
                len(issues),
                layer.origin or "<unnamed resource>",
                label or "global",
            )
            for issue in issues:
                logger.debug("Syntax error in %s: %s", layer.origin, issue.format())
            return layer


class LayerStore(Mapping["LanguageTag | None", tuple[ResourceLayer, ...]]):
    """Ordered layers per locale bucket; ``None`` is the global bucket.

    Reading goes through the Mapping interface (``store[tag]`` returns an
    immutable tuple). Only ``add`` and ``merge`` append.
    """

    __slots__ = ("_buckets",)

    def __init__(self) -> None:
        self._buckets: dict[LanguageTag | None, list[ResourceLayer]] = {}

    def add(self, locale: LanguageTag | None, layer: ResourceLayer) -> None:
        """Append ``layer`` to the bucket of ``locale``, creating the bucket if needed."""
        self._buckets.setdefault(locale, []).append(layer)

    def merge(self, other: LayerStore) -> None:
        """Append every bucket of ``other`` after this store's layers."""
        for locale, layers in other.items():
            for layer in layers:
                self.add(locale, layer)

    def copy(self) -> LayerStore:
        clone = LayerStore()
        clone.merge(self)
        return clone

    def __getitem__(self, locale: LanguageTag | None) -> tuple[ResourceLayer, ...]:
        return tuple(self._buckets[locale])

    def __iter__(self) -> Iterator[LanguageTag | None]:
        return iter(self._buckets)

    def __len__(self) -> int:
        return len(self._buckets)

    @property
    def global_layers(self) -> tuple[ResourceLayer, ...]:
        return tuple(self._buckets.get(None, ()))

    @property
    def locales(self) -> tuple[LanguageTag, ...]:
        """Concrete locales (non-global buckets), sorted."""
        return tuple(sorted(tag for tag in self._buckets if tag is not None))

    @property
    def layer_count(self) -> int:
        return sum(len(layers) for layers in self._buckets.values())

    @property
    def syntax_errors(self) -> tuple[ResourceSyntaxError, ...]:
        """One error per layer that was recovered from syntax errors, in bucket order."""
        return tuple(
            ResourceSyntaxError(
                layer.issues,
                origin=layer.origin,
                locale=str(locale) if locale is not None else None,
            )
            for locale, layers in self._buckets.items()
            for layer in layers
            if layer.has_errors
        )

    def entry_names(self, locale: LanguageTag | None) -> frozenset[str]:
        """Names defined by the bucket's own layers (no inheritance)."""
        names: set[str] = set()
        for layer in self._buckets.get(locale, ()):
            names.update(layer.entry_names())
        return frozenset(names)

    def __repr__(self) -> str:
        buckets = ", ".join(
            f"{locale or 'global'}: {len(layers)}" for locale, layers in self._buckets.items()
        )
        return f"LayerStore({buckets})"
