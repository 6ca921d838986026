"""Inheritance composer: one merged bundle per concrete locale.

For every locale bucket of a LayerStore the composer folds, in order:

    1. every global layer
    2. every layer of the base-language bucket, if the locale has a region
       and that bucket exists (``en`` for ``en-US``)
    3. every layer of the locale's own bucket

Folding is override composition: an entry replaces any earlier entry with the
same name. Messages and terms are separate namespaces (``-brand`` is a term,
``brand`` a message). Region locales therefore see their base language's
entries except where they define their own, and a region never affects its
base or its siblings.

The merged entries are serialized once and handed to a FluentBundle, which
owns pattern formatting, plural rules and the format cache.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from ftllexengine import FluentBundle
from ftllexengine.syntax import Message, Resource, Term, serialize

from .config import EngineConfig
from .constants import FORMATTING_FALLBACK_LOCALE

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from ftllexengine import FluentValue
    from ftllexengine.diagnostics import FrozenFluentError

    from .keys import Fkey
    from .layers import Entry, LayerStore, ResourceLayer
    from .tags import LanguageTag

__all__ = [
    "ComposedBundle",
    "compose",
    "fold_layers",
    "inheritance_chain",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ComposedBundle:
    """Merged entries of one locale, ready for formatting.

    Attributes:
        locale: Locale this bundle serves
        messages: Merged messages by id (read-only)
        terms: Merged terms by id, without the leading "-" (read-only)
        layers: Contributing layers in fold order
        formatter: FluentBundle holding the merged entries
    """

    locale: LanguageTag
    messages: Mapping[str, Message]
    terms: Mapping[str, Term]
    layers: tuple[ResourceLayer, ...]
    formatter: FluentBundle

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        if name.startswith("-"):
            return name[1:] in self.terms
        return name in self.messages

    def get_message(self, message_id: str) -> Message | None:
        return self.messages.get(message_id)

    def resolves(self, key: Fkey) -> bool:
        """Check if ``key`` names something formattable in this bundle.

        A message without the requested attribute, or without a value when no
        attribute is requested, does not resolve. The parser gives an
        attribute-only message an empty value pattern rather than None.
        """
        message = self.messages.get(key.message)
        if message is None:
            return False
        if key.attribute is None:
            return message.value is not None and bool(message.value.elements)
        return any(attribute.id.name == key.attribute for attribute in message.attributes)

    def format(
        self,
        key: Fkey,
        args: Mapping[str, FluentValue] | None = None,
    ) -> tuple[str, tuple[FrozenFluentError, ...]]:
        """Format ``key`` with ``args``.

        Returns:
            Tuple of (formatted_string, errors). Errors are advisory: the string
            is always usable, with fallback text where a placeable failed.
        """
        return self.formatter.format_pattern(key.message, args, attribute=key.attribute)

    def __repr__(self) -> str:
        return (
            f"ComposedBundle(locale={self.locale}, messages={len(self.messages)}, "
            f"terms={len(self.terms)}, layers={len(self.layers)})"
        )


def inheritance_chain(locale: LanguageTag, store: LayerStore) -> tuple[ResourceLayer, ...]:
    """Layers composing ``locale``, in fold order (global, base, own).

    Missing buckets contribute nothing; absence of a layer source is not an
    error.
    """
    chain: list[ResourceLayer] = list(store.get(None, ()))
    if locale.has_region:
        chain.extend(store.get(locale.base, ()))
    chain.extend(store.get(locale, ()))
    return tuple(chain)


def fold_layers(layers: Iterable[ResourceLayer]) -> dict[str, Entry]:
    """Fold layers with last-write-wins semantics.

    Returns:
        Entries keyed by composition name (terms prefixed with "-")
    """
    merged: dict[str, Entry] = {}
    for layer in layers:
        for name, entry in layer.entries():
            merged[name] = entry
    return merged


def _formatting_locales(locale: LanguageTag) -> list[str]:
    candidates = [locale.posix, locale.base.posix, locale.language, FORMATTING_FALLBACK_LOCALE]
    return list(dict.fromkeys(candidates))


def _create_formatter(locale: LanguageTag, config: EngineConfig) -> FluentBundle:
    """Create a FluentBundle for ``locale``, degrading to known Babel locales.

    Region tags Babel has no data for (``en-UK``) use their base language's
    rules; unknown languages use en_US rules.
    """
    *preferred, last_resort = _formatting_locales(locale)
    for candidate in preferred:
        try:
            bundle = FluentBundle(
                candidate,
                use_isolating=config.use_isolating,
                cache=config.cache,
                strict=False,
            )
        except ValueError:
            continue
        if candidate != locale.posix:
            logger.warning(
                "Locale %s is unknown to Babel; formatting with %s rules", locale, candidate
            )
        return bundle
    logger.warning(
        "Locale %s is unknown to Babel; formatting with %s rules", locale, last_resort
    )
    return FluentBundle(
        last_resort,
        use_isolating=config.use_isolating,
        cache=config.cache,
        strict=False,
    )


def _compose_one(
    locale: LanguageTag,
    store: LayerStore,
    config: EngineConfig,
    functions: Mapping[str, Callable[..., FluentValue]],
) -> ComposedBundle:
    layers = inheritance_chain(locale, store)
    merged = fold_layers(layers)

    formatter = _create_formatter(locale, config)
    for name, func in functions.items():
        formatter.add_function(name, func)
    if merged:
        junk = formatter.add_resource(
            serialize(Resource(entries=tuple(merged.values()))),
            source_path=f"<composed {locale}>",
        )
        if junk:
            logger.warning(
                "Composed resource for %s re-parsed with %d junk entries", locale, len(junk)
            )

    messages = {name: entry for name, entry in merged.items() if isinstance(entry, Message)}
    terms = {name[1:]: entry for name, entry in merged.items() if isinstance(entry, Term)}
    logger.debug(
        "Composed %s from %d layer(s): %d message(s), %d term(s)",
        locale,
        len(layers),
        len(messages),
        len(terms),
    )
    return ComposedBundle(
        locale=locale,
        messages=MappingProxyType(messages),
        terms=MappingProxyType(terms),
        layers=layers,
        formatter=formatter,
    )


def compose(
    store: LayerStore,
    config: EngineConfig | None = None,
    functions: Mapping[str, Callable[..., FluentValue]] | None = None,
) -> dict[LanguageTag, ComposedBundle]:
    """Compose every concrete locale of ``store``.

    Global-only content never becomes a locale on its own.

    Args:
        store: Layers to compose
        config: Formatter options (isolation marks, cache); defaults to EngineConfig()
        functions: Formatting functions registered on every bundle, by FTL name

    Returns:
        One ComposedBundle per concrete locale, in sorted locale order
    """
    config = config if config is not None else EngineConfig()
    functions = functions if functions is not None else {}
    return {locale: _compose_one(locale, store, config, functions) for locale in store.locales}

