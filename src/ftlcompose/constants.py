"""Shared constants for ftlcompose.

Constants are grouped by domain:
- Discovery: which files count as translation resources
- Locales: default fallback locale and formatting fallback
- Negotiation: quality-weight handling for accept-language strings

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Discovery
    "FTL_EXTENSION",
    # Locales
    "DEFAULT_FALLBACK_LOCALE",
    "FORMATTING_FALLBACK_LOCALE",
    "UNDETERMINED_LANGUAGE",
    # Negotiation
    "DEFAULT_QUALITY",
    "MAX_ACCEPT_LANGUAGE_RANGES",
    # Functions
    "TITLE_FUNCTION_NAME",
]

# ============================================================================
# DISCOVERY
# ============================================================================

FTL_EXTENSION: str = ".ftl"
"""File suffix of translation resources. Other files in a locale tree are ignored."""

# ============================================================================
# LOCALES
# ============================================================================

DEFAULT_FALLBACK_LOCALE: str = "en"
"""Fallback locale used when the builder is not told otherwise."""

FORMATTING_FALLBACK_LOCALE: str = "en_US"
"""Babel locale whose number/plural rules are used for locales Babel does not know."""

UNDETERMINED_LANGUAGE: str = "und"
"""BCP 47 language subtag meaning "no language"; acts as a wildcard in matching."""

# ============================================================================
# NEGOTIATION
# ============================================================================

DEFAULT_QUALITY: float = 1.0
"""Weight of a language range that carries no (or an invalid) q parameter."""

# Accept-Language headers come from untrusted clients. Ranges past this bound
# are ignored so negotiation stays linear in a small constant.
MAX_ACCEPT_LANGUAGE_RANGES: int = 64

# ============================================================================
# FUNCTIONS
# ============================================================================

TITLE_FUNCTION_NAME: str = "TITLE"
"""Name under which the built-in capitalization function is registered."""
