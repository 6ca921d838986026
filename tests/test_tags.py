"""Tests for LanguageTag parsing, derivation and range matching.

Python 3.13+.
"""

import pytest
from hypothesis import event, given

from ftlcompose import LanguageTag, LanguageTagError
from ftlcompose.tags import likely_subtags

from tests.strategies import language_tag_strings, language_tags


class TestParse:
    """LanguageTag.parse canonicalization and rejection."""

    def test_language_only(self) -> None:
        assert LanguageTag.parse("en") == LanguageTag("en")

    def test_language_and_region(self) -> None:
        tag = LanguageTag.parse("en-US")
        assert tag.language == "en"
        assert tag.region == "US"
        assert tag.script is None

    def test_case_and_separator_canonicalized(self) -> None:
        """Spelling variants of one identifier compare equal."""
        assert LanguageTag.parse("EN_us") == LanguageTag.parse("en-US")

    def test_script_titlecased(self) -> None:
        tag = LanguageTag.parse("zh-hant-tw")
        assert tag.script == "Hant"
        assert tag.region == "TW"
        assert str(tag) == "zh-Hant-TW"

    def test_numeric_region(self) -> None:
        assert LanguageTag.parse("es-419").region == "419"

    def test_variants_sorted_and_lowercased(self) -> None:
        tag = LanguageTag.parse("de-CH-FONIPA-1996")
        assert tag.variants == ("1996", "fonipa")

    def test_syntactically_valid_unknown_region(self) -> None:
        """UK is not an ISO region but is a well-formed region subtag."""
        assert str(LanguageTag.parse("en-UK")) == "en-UK"

    @pytest.mark.parametrize(
        "value",
        ["", "e", "en-", "-en", "en--US", "en US", "*", "english9", "en-US-x", "en-Latn-Latn"],
    )
    def test_invalid_identifiers_rejected(self, value: str) -> None:
        with pytest.raises(LanguageTagError) as exc_info:
            LanguageTag.parse(value)
        assert exc_info.value.context is not None
        assert exc_info.value.context.key == value

    def test_duplicate_variant_rejected(self) -> None:
        with pytest.raises(LanguageTagError, match="Duplicate variant"):
            LanguageTag.parse("de-1996-1996")

    def test_error_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="Invalid language identifier"):
            LanguageTag.parse("not a tag")

    @given(language_tags())
    def test_canonical_string_parses_back(self, tag: LanguageTag) -> None:
        """str() output is itself a canonical identifier."""
        assert LanguageTag.parse(str(tag)) == tag
        assert LanguageTag.parse(tag.posix) == tag

    @given(language_tag_strings())
    def test_mangled_spelling_is_idempotent(self, value: str) -> None:
        tag = LanguageTag.parse(value)
        assert LanguageTag.parse(str(tag)) == tag
        event(f"separator={'_' if '_' in value else '-'}")


class TestDerivation:
    """Base tag, POSIX form and ordering."""

    def test_base_clears_region(self) -> None:
        assert LanguageTag.parse("en-US").base == LanguageTag.parse("en")

    def test_base_keeps_script_and_variants(self) -> None:
        base = LanguageTag.parse("sr-Latn-RS").base
        assert str(base) == "sr-Latn"

    def test_base_without_region_is_self(self) -> None:
        tag = LanguageTag.parse("en")
        assert tag.base is tag
        assert not tag.has_region

    def test_posix(self) -> None:
        assert LanguageTag.parse("pt-BR").posix == "pt_BR"

    def test_sorting_places_base_first(self) -> None:
        tags = [LanguageTag.parse(t) for t in ("en-US", "de", "en", "en-GB")]
        assert [str(t) for t in sorted(tags)] == ["de", "en", "en-GB", "en-US"]

    def test_lt_with_foreign_type(self) -> None:
        assert LanguageTag.parse("en").__lt__("en") is NotImplemented

    def test_hashable(self) -> None:
        assert len({LanguageTag.parse("en-us"), LanguageTag.parse("EN-US")}) == 1

    @given(language_tags())
    def test_base_never_has_region(self, tag: LanguageTag) -> None:
        assert tag.base.region is None
        assert tag.base.language == tag.language


class TestMatches:
    """Subtag-wise comparison with range wildcards."""

    def test_exact(self) -> None:
        en_us = LanguageTag.parse("en-US")
        assert en_us.matches(LanguageTag.parse("en-US"))

    def test_range_matches_more_specific(self) -> None:
        en = LanguageTag.parse("en")
        en_us = LanguageTag.parse("en-US")
        assert en.matches(en_us, self_as_range=True)
        assert not en.matches(en_us)

    def test_tag_does_not_match_broader_range(self) -> None:
        en = LanguageTag.parse("en")
        en_us = LanguageTag.parse("en-US")
        assert not en_us.matches(en, self_as_range=True)
        assert en_us.matches(en, other_as_range=True)

    def test_undetermined_language_is_wildcard(self) -> None:
        und = LanguageTag.parse("und-US")
        assert und.matches(LanguageTag.parse("en-US"), self_as_range=True)

    @given(language_tags())
    def test_every_tag_matches_itself(self, tag: LanguageTag) -> None:
        assert tag.matches(tag)
        assert tag.base.matches(tag, self_as_range=True)


class TestMaximize:
    """Likely-subtags expansion."""

    def test_language_gets_script_and_region(self) -> None:
        assert str(LanguageTag.parse("en").maximize()) == "en-Latn-US"

    def test_region_selects_script(self) -> None:
        assert str(LanguageTag.parse("zh-TW").maximize()) == "zh-Hant-TW"

    def test_present_region_kept(self) -> None:
        assert str(LanguageTag.parse("en-GB").maximize()) == "en-Latn-GB"

    def test_undetermined_language_filled(self) -> None:
        tag = LanguageTag.parse("und-Cyrl").maximize()
        assert tag.language == "ru"
        assert tag.script == "Cyrl"

    def test_table_loaded_from_babel(self) -> None:
        table = likely_subtags()
        assert table["en"] == "en_Latn_US"
        assert likely_subtags() is table

    @given(language_tags())
    def test_idempotent(self, tag: LanguageTag) -> None:
        once = tag.maximize()
        assert once.maximize() == once
        assert once.variants == tag.variants
