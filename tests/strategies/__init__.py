"""Hypothesis strategies for ftlcompose property-based testing.

Strategies are organized by domain:

- tags: language tags and weighted language-range strings
- composition: message identifiers, FTL values and layered resources

Usage:
    from tests.strategies import language_tags, message_ids
    from tests.strategies.composition import layered_entries

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - language_tags, accept_language_strings
    - layered_entries
"""

from .composition import fkey_paths, ftl_values, layered_entries, message_ids
from .tags import accept_language_strings, language_tag_strings, language_tags

__all__ = [
    "accept_language_strings",
    "fkey_paths",
    "ftl_values",
    "language_tag_strings",
    "language_tags",
    "layered_entries",
    "message_ids",
]
