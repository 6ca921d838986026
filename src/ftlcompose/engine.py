"""Engine construction and queries.

EngineBuilder collects layers and options, then ``finish()`` composes every
locale and returns an immutable LocalizationEngine. Everything that can fail
fails during construction; queries never raise for missing translations.

Example:
    >>> engine = (
    ...     EngineBuilder()
    ...     .add_global_resource("company = Example, inc.", origin="global")
    ...     .add_resource("en", "region = International\\nlanguage = English")
    ...     .add_resource("en-US", "region = United States")
    ...     .finish()
    ... )
    >>> locales = engine.negotiate("en-US")
    >>> engine.resolve(locales, "region")
    'United States'
    >>> engine.resolve(locales, "language")
    'English'
    >>> engine.resolve(locales, "missing-key")
    'missing-key'

Formatting functions are registered on the builder only. A built engine has no
mutating methods and can be shared between threads.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Self

from .composer import compose
from .config import EngineConfig
from .errors import EntryCollisionError, FallbackUnavailableError
from .functions import BUILTIN_FUNCTIONS
from .keys import Fkey
from .layers import LayerStore, ResourceLayer, accept_layer, parse_layer
from .loading import DirectoryDiscovery, LoadSummary, bucket_for
from .negotiation import Negotiator
from .resolver import TranslationResolver

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping
    from pathlib import Path

    from ftllexengine import FluentValue

    from .composer import ComposedBundle
    from .enums import NegotiationStrategy, SyntaxErrorMode
    from .errors import ResourceSyntaxError
    from .loading import LayerSource
    from .resolver import FallbackInfo
    from .tags import LanguageTag

__all__ = [
    "EngineBuilder",
    "LocalizationEngine",
]

logger = logging.getLogger(__name__)


class EngineBuilder:
    """Mutable construction phase of a LocalizationEngine.

    Mutators return the builder, so calls can be chained. Resources are parsed
    as they are added; syntax errors follow ``config.syntax_mode``.

    Two registration paths exist:

    - ``add_resource`` / ``add_global_resource`` (strict): an entry name already
      defined in the same locale bucket raises EntryCollisionError.
    - ``add_overriding_resource`` and layer sources (``load``,
      ``load_directory``): later definitions replace earlier ones.

    Base-language and global content is never a collision: region locales
    override it at composition time.
    """

    __slots__ = ("_config", "_functions", "_store")

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config if config is not None else EngineConfig()
        self._functions: dict[str, Callable[..., FluentValue]] = {}
        self._store = LayerStore()

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def store(self) -> LayerStore:
        """Copy of the layers registered so far."""
        return self._store.copy()

    def _parse(self, locale: LanguageTag | None, text: str, origin: str | None) -> ResourceLayer:
        return accept_layer(parse_layer(text, origin), self._config.syntax_mode, locale=locale)

    def _add_strict(self, locale: LanguageTag | None, text: str, origin: str | None) -> Self:
        layer = self._parse(locale, text, origin)
        collisions = (layer.entry_names() & self._store.entry_names(locale)) | (
            layer.duplicate_names()
        )
        if collisions:
            raise EntryCollisionError(
                collisions,
                locale=str(locale) if locale is not None else None,
                origin=origin,
            )
        self._store.add(locale, layer)
        return self

    def add_global_resource(self, text: str, origin: str | None = None) -> Self:
        """Add a resource shared by every locale.

        Raises:
            ResourceSyntaxError: In fail-fast mode, if ``text`` has syntax errors
            EntryCollisionError: If an entry is already defined globally
        """
        return self._add_strict(None, text, origin)

    def add_resource(
        self, locale: LanguageTag | str, text: str, origin: str | None = None
    ) -> Self:
        """Add a resource to one locale, refusing to redefine entries.

        Args:
            locale: Locale tag; "" registers globally
            text: FTL source
            origin: Label used in error messages (optional)

        Raises:
            LanguageTagError: If ``locale`` is invalid
            ResourceSyntaxError: In fail-fast mode, if ``text`` has syntax errors
            EntryCollisionError: If an entry is already defined for ``locale``
                or defined twice in ``text``
        """
        return self._add_strict(bucket_for(locale), text, origin)

    def add_overriding_resource(
        self, locale: LanguageTag | str, text: str, origin: str | None = None
    ) -> Self:
        """Add a resource to one locale; its entries replace earlier ones.

        Raises:
            LanguageTagError: If ``locale`` is invalid
            ResourceSyntaxError: In fail-fast mode, if ``text`` has syntax errors
        """
        bucket = bucket_for(locale)
        self._store.add(bucket, self._parse(bucket, text, origin))
        return self

    def load(self, source: LayerSource) -> Self:
        """Append every layer of ``source`` (override semantics)."""
        self._store.merge(source.load())
        return self

    def load_directory(self, root: str | Path) -> Self:
        """Discover a locale tree with the builder's syntax error mode.

        Raises:
            OSError: If the tree cannot be read
            ResourceSyntaxError: In fail-fast mode, at the first faulty file
        """
        return self.load(DirectoryDiscovery(root, mode=self._config.syntax_mode))

    def set_fallback_locale(self, locale: LanguageTag | str) -> Self:
        """Set the locale negotiation always falls back to.

        Raises:
            LanguageTagError: If ``locale`` is invalid
        """
        self._config = replace(self._config, fallback_locale=locale)
        return self

    def set_strategy(self, strategy: NegotiationStrategy | str) -> Self:
        self._config = replace(self._config, strategy=strategy)
        return self

    def set_syntax_mode(self, mode: SyntaxErrorMode | str) -> Self:
        """Set how resources added from now on handle syntax errors."""
        self._config = replace(self._config, syntax_mode=mode)
        return self

    def add_function(self, name: str, func: Callable[..., FluentValue]) -> Self:
        """Register a formatting function on every bundle the engine will build.

        A function registered under an existing name (including TITLE)
        replaces it.
        """
        self._functions[name] = func
        return self

    def finish(
        self, *, on_fallback: Callable[[FallbackInfo], None] | None = None
    ) -> LocalizationEngine:
        """Compose every locale and build the engine.

        Args:
            on_fallback: Called when a key resolves in a candidate other than
                the first (optional)

        Raises:
            FallbackUnavailableError: If the fallback locale has no layers
        """
        config = self._config
        store = self._store.copy()
        if config.fallback_locale not in store.locales:
            raise FallbackUnavailableError(
                str(config.fallback_locale), (str(tag) for tag in store.locales)
            )

        functions: dict[str, Callable[..., FluentValue]] = (
            dict(BUILTIN_FUNCTIONS) if config.register_builtins else {}
        )
        functions.update(self._functions)

        engine = LocalizationEngine(
            compose(store, config, functions),
            config,
            load_summary=LoadSummary.from_store(store),
            syntax_errors=store.syntax_errors,
            on_fallback=on_fallback,
        )
        logger.info(
            "Engine built: %d locale(s) [%s], fallback %s, strategy %s",
            len(engine.available),
            ", ".join(str(tag) for tag in engine.available),
            config.fallback_locale,
            config.strategy,
        )
        return engine


class LocalizationEngine:
    """Immutable negotiation and resolution over composed bundles.

    Usually created by ``EngineBuilder.finish()``. Safe to share between
    threads: queries read shared state only, and formatter caches are guarded
    by their bundles.
    """

    __slots__ = (
        "_bundles",
        "_config",
        "_load_summary",
        "_negotiator",
        "_resolver",
        "_syntax_errors",
    )

    def __init__(
        self,
        bundles: Mapping[LanguageTag, ComposedBundle],
        config: EngineConfig,
        *,
        load_summary: LoadSummary | None = None,
        syntax_errors: Iterable[ResourceSyntaxError] = (),
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Bind composed bundles.

        Raises:
            FallbackUnavailableError: If ``config.fallback_locale`` has no bundle
        """
        self._bundles: dict[LanguageTag, ComposedBundle] = dict(sorted(bundles.items()))
        self._config = config
        self._negotiator = Negotiator(self._bundles, config.fallback_locale, config.strategy)
        self._resolver = TranslationResolver(self._bundles, on_fallback)
        self._load_summary = load_summary if load_summary is not None else LoadSummary(())
        self._syntax_errors: tuple[ResourceSyntaxError, ...] = tuple(syntax_errors)

    @property
    def available(self) -> tuple[LanguageTag, ...]:
        """Composed locales, sorted."""
        return self._negotiator.available

    @property
    def fallback(self) -> LanguageTag:
        return self._negotiator.fallback

    @property
    def strategy(self) -> NegotiationStrategy:
        return self._negotiator.strategy

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def syntax_errors(self) -> tuple[ResourceSyntaxError, ...]:
        """Syntax errors recovered from in collect mode, one per faulty resource."""
        return self._syntax_errors

    @property
    def load_summary(self) -> LoadSummary:
        return self._load_summary

    def __contains__(self, locale: object) -> bool:
        return locale in self._bundles

    def bundle(self, locale: LanguageTag | str) -> ComposedBundle:
        """Composed bundle of ``locale``.

        Raises:
            KeyError: If ``locale`` is not available
        """
        tag = bucket_for(locale)
        if tag is None or tag not in self._bundles:
            msg = f"No composed bundle for locale {locale!r}"
            raise KeyError(msg)
        return self._bundles[tag]

    def has_message(self, locale: LanguageTag | str, key: Fkey | str) -> bool:
        """Check if ``key`` resolves in ``locale`` alone, without fallback."""
        return self.bundle(locale).resolves(Fkey.coerce(key))

    def negotiate(self, preference: str) -> list[LanguageTag]:
        """Ordered candidate locales for a weighted language-range string.

        Never fails: an unparseable preference yields the fallback.
        """
        return self._negotiator.negotiate(preference)

    def resolve(
        self,
        candidates: Iterable[LanguageTag],
        key: Fkey | str,
        args: Mapping[str, FluentValue] | None = None,
    ) -> str:
        """Format ``key`` from the first candidate that has it, else echo the key."""
        return self._resolver.resolve(candidates, key, args)

    def translate(
        self,
        preference: str,
        key: Fkey | str,
        args: Mapping[str, FluentValue] | None = None,
    ) -> str:
        """Negotiate ``preference`` and resolve ``key`` in one call."""
        return self.resolve(self.negotiate(preference), key, args)

    def translator(
        self, preference: str
    ) -> Callable[[Fkey | str, Mapping[str, FluentValue] | None], str]:
        """Negotiate once and return a resolving function bound to the result.

        Example:
            >>> t = engine.translator("pt-BR,pt;q=0.8")  # doctest: +SKIP
            >>> t("greeting", {"name": "Ana"})  # doctest: +SKIP
        """
        candidates = tuple(self.negotiate(preference))

        def translate(
            key: Fkey | str, args: Mapping[str, FluentValue] | None = None
        ) -> str:
            return self._resolver.resolve(candidates, key, args)

        return translate

    def __repr__(self) -> str:
        return (
            f"LocalizationEngine(available=[{', '.join(str(t) for t in self.available)}], "
            f"fallback={self.fallback}, strategy={self.strategy})"
        )
