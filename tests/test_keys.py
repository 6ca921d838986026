"""Tests for Fkey message paths.

Python 3.13+.
"""

import pytest
from hypothesis import given

from ftlcompose import Fkey, FkeyError, FkeyErrorKind

from tests.strategies import fkey_paths


class TestFkeyParse:
    """Fkey.parse accepts message and message.attribute paths."""

    def test_message_only(self) -> None:
        key = Fkey.parse("welcome")
        assert key == Fkey("welcome")
        assert key.attribute is None

    def test_message_and_attribute(self) -> None:
        key = Fkey.parse("login-button.tooltip")
        assert key.message == "login-button"
        assert key.attribute == "tooltip"

    def test_str(self) -> None:
        assert str(Fkey("login", "tooltip")) == "login.tooltip"
        assert str(Fkey("login")) == "login"

    @pytest.mark.parametrize("path", ["", ".", "a.", ".a"])
    def test_empty_segment(self, path: str) -> None:
        with pytest.raises(FkeyError) as exc_info:
            Fkey.parse(path)
        assert exc_info.value.kind is FkeyErrorKind.EMPTY

    def test_too_many_attributes(self) -> None:
        with pytest.raises(FkeyError) as exc_info:
            Fkey.parse("a.b.c")
        assert exc_info.value.kind is FkeyErrorKind.TOO_MANY_ATTRIBUTES

    @pytest.mark.parametrize("path", ["1abc", "a b", "-term", "msg.9", "héllo"])
    def test_invalid_characters(self, path: str) -> None:
        with pytest.raises(FkeyError) as exc_info:
            Fkey.parse(path)
        assert exc_info.value.kind is FkeyErrorKind.INVALID_CHARS

    @pytest.mark.parametrize("path", ["a b.c.d", "é.b.c", "a.b.c!"])
    def test_characters_checked_before_segment_count(self, path: str) -> None:
        with pytest.raises(FkeyError) as exc_info:
            Fkey.parse(path)
        assert exc_info.value.kind is FkeyErrorKind.INVALID_CHARS

    def test_constructor_validates(self) -> None:
        with pytest.raises(FkeyError):
            Fkey("")

    def test_error_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="more than one attribute"):
            Fkey.parse("a.b.c")

    def test_error_context_carries_path(self) -> None:
        with pytest.raises(FkeyError) as exc_info:
            Fkey.parse("a b")
        assert exc_info.value.context is not None
        assert exc_info.value.context.key == "a b"


class TestFkeyCoerce:
    def test_key_passes_through(self) -> None:
        key = Fkey("x")
        assert Fkey.coerce(key) is key

    def test_string_parsed(self) -> None:
        assert Fkey.coerce("x.y") == Fkey("x", "y")

    @given(fkey_paths())
    def test_display_form_parses_back(self, path: str) -> None:
        assert str(Fkey.parse(path)) == path

    def test_usable_as_dict_key(self) -> None:
        assert {Fkey("a", "b"): 1}[Fkey.parse("a.b")] == 1
