"""Tests for the exception hierarchy.

Python 3.13+.
"""

import pytest

from ftlcompose import (
    CompositionError,
    EntryCollisionError,
    ErrorContext,
    FallbackUnavailableError,
    FkeyError,
    FkeyErrorKind,
    LanguageTagError,
    ResourceSyntaxError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "error",
        [
            LanguageTagError("bad tag"),
            FkeyError("bad key", FkeyErrorKind.EMPTY),
            ResourceSyntaxError(()),
            EntryCollisionError(["x"]),
            FallbackUnavailableError("en", []),
        ],
    )
    def test_all_are_composition_errors(self, error: CompositionError) -> None:
        assert isinstance(error, CompositionError)

    def test_parse_errors_are_value_errors(self) -> None:
        assert issubclass(LanguageTagError, ValueError)
        assert issubclass(FkeyError, ValueError)
        assert not issubclass(EntryCollisionError, ValueError)


class TestMessages:
    def test_collision_names_sorted(self) -> None:
        error = EntryCollisionError({"b", "-a"}, locale="en-US")
        assert error.names == ("-a", "b")
        assert str(error) == "Entries already defined for en-US: -a, b"

    def test_collision_global(self) -> None:
        assert str(EntryCollisionError(["x"])) == "Entries already defined for global: x"

    def test_fallback_unavailable(self) -> None:
        error = FallbackUnavailableError("en", ["de", "fr"])
        assert str(error) == "Fallback locale en is not available (available: de, fr)"
        assert error.context == ErrorContext(component="builder", operation="finish", locale="en")

    def test_resource_syntax_error_context(self) -> None:
        error = ResourceSyntaxError((), origin="a.ftl", locale="lv")
        assert error.context is not None
        assert error.context.origin == "a.ftl"
        assert error.context.locale == "lv"
        assert str(error) == (
            "While parsing resource `a.ftl` for locale lv, the following errors were found:"
        )

    def test_repr(self) -> None:
        error = LanguageTagError("bad", ErrorContext(component="tags", operation="parse"))
        assert repr(error).startswith("LanguageTagError('bad', context=ErrorContext(")
