"""Engine configuration.

A single frozen dataclass gathers every construction option, so a builder can
be seeded from one object and configurations can be derived with
``dataclasses.replace``.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ftllexengine import CacheConfig

from .constants import DEFAULT_FALLBACK_LOCALE
from .enums import NegotiationStrategy, SyntaxErrorMode
from .tags import LanguageTag

__all__ = ["EngineConfig"]


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Immutable configuration for building a LocalizationEngine.

    All fields have defaults; ``EngineConfig()`` is a usable configuration.
    String values are accepted for the tag and enum fields and converted at
    construction time.

    Attributes:
        fallback_locale: Locale always available to negotiation (default: "en").
            Must have a composed bundle when the engine is built.
        strategy: Negotiation strategy (default: FILTERING).
        syntax_mode: Syntax error handling (default: FAIL_FAST).
        use_isolating: Wrap placeables in Unicode isolation marks
            (default: True).
        cache: Per-bundle format cache configuration (default: ``CacheConfig()``).
            The cache is guarded by the bundle's reader/writer lock and is safe
            under concurrent formatting. None disables caching.
        register_builtins: Register the TITLE function on every bundle
            (default: True).

    Example:
        >>> config = EngineConfig(fallback_locale="en-US", strategy="lookup")
        >>> config.fallback_locale
        LanguageTag(language='en', script=None, region='US', variants=())
        >>> config.strategy
        <NegotiationStrategy.LOOKUP: 'lookup'>
    """

    fallback_locale: LanguageTag = field(
        default_factory=lambda: LanguageTag.parse(DEFAULT_FALLBACK_LOCALE)
    )
    strategy: NegotiationStrategy = NegotiationStrategy.FILTERING
    syntax_mode: SyntaxErrorMode = SyntaxErrorMode.FAIL_FAST
    use_isolating: bool = True
    cache: CacheConfig | None = field(default_factory=CacheConfig)
    register_builtins: bool = True

    def __post_init__(self) -> None:
        """Normalize string inputs.

        Raises:
            LanguageTagError: If fallback_locale is an invalid identifier
            ValueError: If strategy or syntax_mode is not a known value
            TypeError: If cache is neither a CacheConfig nor None
        """
        fallback: object = self.fallback_locale
        if isinstance(fallback, str):
            object.__setattr__(self, "fallback_locale", LanguageTag.parse(fallback))
        object.__setattr__(self, "strategy", NegotiationStrategy(self.strategy))
        object.__setattr__(self, "syntax_mode", SyntaxErrorMode(self.syntax_mode))
        cache: object = self.cache
        if cache is not None and not isinstance(cache, CacheConfig):
            msg = f"cache must be CacheConfig or None, not {type(cache).__name__}"
            raise TypeError(msg)
