"""ftlcompose - layered Fluent (FTL) translations with locale negotiation.

Composes translations split across a global layer, base-language layers
(``en``) and region overlays (``en-US``) into one bundle per locale, then
answers "what text should this request see for this key" by negotiating the
request's language preferences and walking the resulting fallback chain.

Public API:
    EngineBuilder - Construction phase: add resources, options, functions
    LocalizationEngine - Immutable negotiation + resolution
    EngineConfig - Immutable construction options
    LanguageTag - Parsed language identifier
    Fkey - Message path (message + optional attribute)

Layers and sources:
    ResourceLayer - One parsed translation resource
    LayerStore - Ordered layers per locale bucket (None = global)
    LayerSource - Protocol for anything producing a LayerStore
    DirectoryDiscovery - Reads a locale tree from disk
    SourceRegistry - Collects in-memory resources
    LoadSummary - Per-resource load report
    Parsed / Recovered - Tagged outcomes of parsing one resource

Composition, negotiation, resolution:
    compose - Build composed bundles from a LayerStore
    ComposedBundle - Merged entries of one locale
    Negotiator - Negotiation bound to available locales
    parse_accept_language - Parse weighted language ranges
    negotiate_languages - Match requested against available locales
    TranslationResolver - First-candidate-wins message resolution
    FallbackInfo - Record passed to ``on_fallback`` callbacks

Enums:
    NegotiationStrategy - FILTERING, MATCHING, LOOKUP
    SyntaxErrorMode - FAIL_FAST, COLLECT
    FkeyErrorKind - EMPTY, INVALID_CHARS, TOO_MANY_ATTRIBUTES

Exceptions:
    CompositionError - Base of all construction errors
    LanguageTagError, FkeyError, ResourceSyntaxError,
    EntryCollisionError, FallbackUnavailableError
    SyntaxIssue - One located syntax error

Requires ftllexengine with Babel for parsing and formatting.

Python 3.13+.
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .composer import ComposedBundle, compose
from .config import EngineConfig
from .diagnostics import SyntaxIssue
from .engine import EngineBuilder, LocalizationEngine
from .enums import FkeyErrorKind, NegotiationStrategy, SyntaxErrorMode
from .errors import (
    CompositionError,
    EntryCollisionError,
    ErrorContext,
    FallbackUnavailableError,
    FkeyError,
    LanguageTagError,
    ResourceSyntaxError,
)
from .keys import Fkey
from .layers import LayerStore, Parsed, Recovered, ResourceLayer, parse_layer
from .loading import DirectoryDiscovery, LayerSource, LoadSummary, SourceRegistry
from .negotiation import Negotiator, negotiate_languages, parse_accept_language
from .resolver import FallbackInfo, TranslationResolver
from .tags import LanguageTag

__all__ = [
    "ComposedBundle",
    "CompositionError",
    "DirectoryDiscovery",
    "EngineBuilder",
    "EngineConfig",
    "EntryCollisionError",
    "ErrorContext",
    "FallbackInfo",
    "FallbackUnavailableError",
    "Fkey",
    "FkeyError",
    "FkeyErrorKind",
    "LanguageTag",
    "LanguageTagError",
    "LayerSource",
    "LayerStore",
    "LoadSummary",
    "LocalizationEngine",
    "NegotiationStrategy",
    "Negotiator",
    "Parsed",
    "Recovered",
    "ResourceLayer",
    "ResourceSyntaxError",
    "SourceRegistry",
    "SyntaxErrorMode",
    "SyntaxIssue",
    "TranslationResolver",
    "__version__",
    "compose",
    "negotiate_languages",
    "parse_accept_language",
    "parse_layer",
]

try:
    __version__ = _get_version("ftlcompose")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"
