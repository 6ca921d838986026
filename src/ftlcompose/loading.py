"""Layer sources: directory discovery and explicit registration.

Provides the protocol every layer source implements, the two built-in
implementations, and the per-resource load report.

Components:
    LayerSource - Protocol for anything that can produce a LayerStore
    DirectoryDiscovery - Walks a locale tree on disk
    SourceRegistry - Collects in-memory resources one call at a time
    LayerLoadResult - Immutable record of one loaded resource
    LoadSummary - Immutable aggregate of all load results of a store

Directory layout understood by DirectoryDiscovery::

    locales/
        global.ftl          -> global bucket
        en/main.ftl         -> en
        en/app/menu.ftl     -> en (deeper nesting stays in the first tag)
        en-US/main.ftl      -> en-US (base: en)
        _drafts/old.ftl     -> skipped, "_drafts" is not a language tag

Names of five to eight letters (``assets``, ``english``) are well-formed
language subtags and therefore become locales of their own.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from .constants import FTL_EXTENSION
from .enums import SyntaxErrorMode
from .errors import LanguageTagError
from .layers import LayerStore, ResourceLayer, accept_layer, parse_layer
from .tags import LanguageTag

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .diagnostics import SyntaxIssue

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "LayerSource",
    # Concrete sources
    "DirectoryDiscovery",
    "SourceRegistry",
    # Load reporting
    "LayerLoadResult",
    "LoadSummary",
    # Helpers
    "bucket_for",
]

logger = logging.getLogger(__name__)


class LayerSource(Protocol):
    """Protocol for producing a LayerStore.

    This is a Protocol (structural typing) rather than ABC so that callers can
    plug in their own sources (a database, a package resource bundle) without
    inheriting from anything.

    Example:
        >>> class DictSource:
        ...     def __init__(self, texts: dict[str, str]) -> None:
        ...         self.texts = texts
        ...     def load(self) -> LayerStore:
        ...         registry = SourceRegistry()
        ...         for locale, text in self.texts.items():
        ...             registry.register(locale, text, origin=f"dict:{locale}")
        ...         return registry.load()
    """

    def load(self) -> LayerStore:
        """Build the store.

        Raises:
            ResourceSyntaxError: In fail-fast mode, at the first faulty resource
            OSError: If a resource cannot be read
        """
        ...


def bucket_for(locale: LanguageTag | str | None) -> LanguageTag | None:
    """Map a registration locale to its bucket key.

    ``None`` and the empty string denote the global bucket.

    Raises:
        LanguageTagError: If ``locale`` is a non-empty invalid identifier
    """
    if locale is None or isinstance(locale, LanguageTag):
        return locale
    if not locale:
        return None
    return LanguageTag.parse(locale)


@dataclass(frozen=True, slots=True)
class DirectoryDiscovery:
    """Layer source reading a locale tree from disk.

    Entries are visited in lexically sorted order, depth first, files of a
    directory before its subdirectories. Only ``.ftl`` files are read.

    A file directly in the root is a global layer. Any deeper file belongs to
    the locale named by its first directory below the root; that name must be a
    single language tag such as ``en`` or ``en-US``. Files under a directory
    whose name is not a tag are skipped.

    Attributes:
        root: Directory to walk
        mode: What to do with syntax errors (default: fail fast)
    """

    root: str | Path
    mode: SyntaxErrorMode = SyntaxErrorMode.FAIL_FAST

    def load(self) -> LayerStore:
        """Walk the tree and parse every resource file.

        Returns:
            Store with the global bucket and one bucket per locale directory

        Raises:
            ResourceSyntaxError: In fail-fast mode, at the first faulty file
            OSError: If the root or a file cannot be read (FileNotFoundError,
                NotADirectoryError, PermissionError, ...)
            UnicodeDecodeError: If a file is not valid UTF-8
        """
        root = Path(self.root)
        store = LayerStore()
        for path in self._walk(root, root):
            relative = path.relative_to(root)
            locale = self._locale_of(relative)
            if locale is _SKIP:
                continue
            text = path.read_text(encoding="utf-8")
            logger.debug("Discovered %s for %s", path, locale or "global")
            layer = accept_layer(parse_layer(text, origin=str(path)), self.mode, locale=locale)
            store.add(locale, layer)
        logger.info(
            "Discovered %d resource(s) in %d bucket(s) under %s",
            store.layer_count,
            len(store),
            root,
        )
        return store

    def _walk(self, root: Path, directory: Path) -> Iterator[Path]:
        subdirectories: list[Path] = []
        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if entry.is_dir():
                subdirectories.append(entry)
            elif entry.is_file() and entry.suffix == FTL_EXTENSION:
                yield entry
        for subdirectory in subdirectories:
            if directory == root and _tag_or_skip(subdirectory.name) is _SKIP:
                continue
            yield from self._walk(root, subdirectory)

    @staticmethod
    def _locale_of(relative: Path) -> LanguageTag | None | _Skip:
        if len(relative.parts) == 1:
            return None
        return _tag_or_skip(relative.parts[0])


class _Skip:
    """Marker for paths that belong to no bucket."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<skip>"


_SKIP = _Skip()


def _tag_or_skip(name: str) -> LanguageTag | _Skip:
    try:
        return LanguageTag.parse(name)
    except LanguageTagError:
        logger.debug("Skipping %r: not a language tag", name)
        return _SKIP


class SourceRegistry:
    """Layer source fed one resource at a time.

    Each call to ``register`` appends to the bucket of its locale, in call
    order. The empty string registers into the global bucket.

    Example:
        >>> registry = SourceRegistry()
        >>> _ = registry.register("", "company = Example, inc.", origin="global")
        >>> _ = registry.register("en", "hello = Hello")
        >>> sorted(str(tag) for tag in registry.load().locales)
        ['en']
    """

    __slots__ = ("_mode", "_store")

    def __init__(self, *, mode: SyntaxErrorMode = SyntaxErrorMode.FAIL_FAST) -> None:
        self._mode = mode
        self._store = LayerStore()

    def register(
        self,
        locale: LanguageTag | str | None,
        text: str,
        origin: str | None = None,
    ) -> ResourceLayer:
        """Parse ``text`` and append it to the bucket of ``locale``.

        Returns:
            The appended layer

        Raises:
            LanguageTagError: If ``locale`` is not a valid identifier
            ResourceSyntaxError: In fail-fast mode, if ``text`` has syntax errors
        """
        bucket = bucket_for(locale)
        layer = accept_layer(parse_layer(text, origin=origin), self._mode, locale=bucket)
        self._store.add(bucket, layer)
        return layer

    def load(self) -> LayerStore:
        """Return a copy of everything registered so far."""
        return self._store.copy()


@dataclass(frozen=True, slots=True)
class LayerLoadResult:
    """Record of one resource that went into a store.

    Attributes:
        locale: Bucket locale, None for global
        origin: Origin label of the resource
        issues: Syntax errors recovered from (collect mode)
    """

    locale: LanguageTag | None
    origin: str | None
    issues: tuple[SyntaxIssue, ...] = ()

    @property
    def is_clean(self) -> bool:
        """Check if the resource parsed without syntax errors."""
        return not self.issues


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of the resources in a store.

    Attributes:
        results: One result per layer, in bucket order

    Example:
        >>> summary = LoadSummary.from_store(DirectoryDiscovery("locales").load())
        >>> for result in summary.get_with_errors():
        ...     print(result.origin, len(result.issues))
    """

    results: tuple[LayerLoadResult, ...]

    @classmethod
    def from_store(cls, store: LayerStore) -> LoadSummary:
        return cls(
            tuple(
                LayerLoadResult(locale=locale, origin=layer.origin, issues=layer.issues)
                for locale, layers in store.items()
                for layer in layers
            )
        )

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"LoadSummary(total={self.total}, issues={self.issue_count})"

    @property
    def total(self) -> int:
        """Number of resources loaded."""
        return len(self.results)

    @property
    def issue_count(self) -> int:
        """Total number of syntax errors across all resources."""
        return sum(len(r.issues) for r in self.results)

    @property
    def has_errors(self) -> bool:
        return self.issue_count > 0

    @property
    def all_clean(self) -> bool:
        """Check if every resource parsed without syntax errors."""
        return not self.has_errors

    def get_with_errors(self) -> tuple[LayerLoadResult, ...]:
        """Get all results with syntax errors."""
        return tuple(r for r in self.results if not r.is_clean)

    def get_by_locale(self, locale: LanguageTag | str | None) -> tuple[LayerLoadResult, ...]:
        """Get all results of one bucket ("" or None for global)."""
        bucket = bucket_for(locale)
        return tuple(r for r in self.results if r.locale == bucket)
