"""Tests for inheritance composition.

Python 3.13+.
"""

import logging

import pytest
from hypothesis import given, settings

from ftlcompose import (
    ComposedBundle,
    EngineConfig,
    Fkey,
    LanguageTag,
    LayerStore,
    SourceRegistry,
    compose,
)
from ftlcompose.composer import fold_layers, inheritance_chain
from tests.strategies import layered_entries
from tests.strategies.composition import to_ftl

EN = LanguageTag.parse("en")
EN_US = LanguageTag.parse("en-US")
EN_UK = LanguageTag.parse("en-UK")

PLAIN = EngineConfig(use_isolating=False)


def _store(*registrations: tuple[str, str]) -> LayerStore:
    registry = SourceRegistry()
    for locale, text in registrations:
        registry.register(locale, text, origin=locale or "global")
    return registry.load()


def _text(bundle: ComposedBundle, key: str, args: dict[str, str | int] | None = None) -> str:
    text, _errors = bundle.format(Fkey.parse(key), args)
    return text


@pytest.fixture
def company_store() -> LayerStore:
    return _store(
        ("", "company = Example, inc.\n"),
        ("en", "region = International\nlanguage = English\n"),
        ("en-US", "region = United States\n"),
        ("en-UK", "region = United Kingdom\n"),
    )


class TestInheritanceChain:
    def test_region_locale_chain(self, company_store: LayerStore) -> None:
        chain = inheritance_chain(EN_US, company_store)
        assert [layer.origin for layer in chain] == ["global", "en", "en-US"]

    def test_base_locale_chain(self, company_store: LayerStore) -> None:
        chain = inheritance_chain(EN, company_store)
        assert [layer.origin for layer in chain] == ["global", "en"]

    def test_missing_base_is_skipped(self) -> None:
        store = _store(("pt-BR", "a = 1\n"))
        chain = inheritance_chain(LanguageTag.parse("pt-BR"), store)
        assert [layer.origin for layer in chain] == ["pt-BR"]


class TestFoldLayers:
    def test_last_write_wins(self) -> None:
        store = _store(("en", "a = first\nb = kept\n"), ("en", "a = second\n"))
        merged = fold_layers(store[EN])
        assert set(merged) == {"a", "b"}
        assert merged["a"].value is not None

    def test_messages_and_terms_are_separate(self) -> None:
        store = _store(("en", "brand = message\n-brand = term\n"))
        assert set(fold_layers(store[EN])) == {"brand", "-brand"}


class TestCompose:
    """One composed bundle per concrete locale."""

    def test_locales(self, company_store: LayerStore) -> None:
        bundles = compose(company_store, PLAIN)
        assert list(bundles) == [EN, EN_UK, EN_US]

    def test_region_overrides_base(self, company_store: LayerStore) -> None:
        bundles = compose(company_store, PLAIN)
        assert _text(bundles[EN_US], "region") == "United States"
        assert _text(bundles[EN], "region") == "International"

    def test_region_inherits_base_and_global(self, company_store: LayerStore) -> None:
        bundle = compose(company_store, PLAIN)[EN_US]
        assert _text(bundle, "language") == "English"
        assert _text(bundle, "company") == "Example, inc."

    def test_siblings_isolated(self, company_store: LayerStore) -> None:
        bundles = compose(company_store, PLAIN)
        assert _text(bundles[EN_UK], "region") == "United Kingdom"
        assert _text(bundles[EN_US], "region") == "United States"

    def test_global_only_store_has_no_bundles(self) -> None:
        assert compose(_store(("", "a = 1\n"))) == {}

    def test_comment_only_locale_composes_from_global(self) -> None:
        store = _store(("", "company = ACME\n"), ("en", "# nothing translated yet\n"))
        assert _text(compose(store, PLAIN)[EN], "company") == "ACME"

    def test_term_from_global_used_by_locale(self) -> None:
        store = _store(
            ("", "-brand = Firefox\n"),
            ("en", "about = About { -brand }\n"),
        )
        assert _text(compose(store, PLAIN)[EN], "about") == "About Firefox"

    def test_term_overridden_in_region(self) -> None:
        store = _store(
            ("en", "-brand = Firefox\nabout = About { -brand }\n"),
            ("en-US", "-brand = Firefox US\n"),
        )
        bundles = compose(store, PLAIN)
        assert _text(bundles[EN_US], "about") == "About Firefox US"
        assert _text(bundles[EN], "about") == "About Firefox"

    def test_variables(self) -> None:
        store = _store(("en", "hello = Hello, { $name }!\n"))
        assert _text(compose(store, PLAIN)[EN], "hello", {"name": "Ana"}) == "Hello, Ana!"

    def test_isolation_marks_by_default(self) -> None:
        store = _store(("en", "hello = Hello, { $name }!\n"))
        assert _text(compose(store)[EN], "hello", {"name": "Ana"}) == "Hello, \u2068Ana\u2069!"

    def test_plural_rules_follow_locale(self) -> None:
        store = _store(
            (
                "en",
                "emails = { $count ->\n"
                "    [one] One email\n"
                "   *[other] { $count } emails\n"
                "    }\n",
            ),
        )
        bundle = compose(store, PLAIN)[EN]
        assert _text(bundle, "emails", {"count": 1}) == "One email"
        assert _text(bundle, "emails", {"count": 3}) == "3 emails"

    def test_locale_unknown_to_babel(self, caplog: pytest.LogCaptureFixture) -> None:
        store = _store(("zz", "hello = Hello\n"))
        with caplog.at_level(logging.WARNING, logger="ftlcompose.composer"):
            bundle = compose(store, PLAIN)[LanguageTag.parse("zz")]
        assert _text(bundle, "hello") == "Hello"
        assert "unknown to Babel" in caplog.text

    def test_functions_registered(self) -> None:
        store = _store(("en", "shout = { SHOUT($word) }\n"))
        bundle = compose(store, PLAIN, {"SHOUT": lambda value: str(value).upper()})[EN]
        assert _text(bundle, "shout", {"word": "hey"}) == "HEY"

    @given(layered_entries())
    @settings(max_examples=50, deadline=None)
    def test_override_order(self, layers: dict[str, dict[str, str]]) -> None:
        """Region beats base beats global; nothing leaks from other buckets."""
        registry = SourceRegistry()
        registry.register("", to_ftl(layers["global"]))
        registry.register("en", to_ftl(layers["base"]))
        registry.register("en-US", to_ftl(layers["region"]))
        bundles = compose(registry.load(), PLAIN)
        expected_us = layers["global"] | layers["base"] | layers["region"]
        expected_en = layers["global"] | layers["base"]
        assert set(bundles[EN_US].messages) == set(expected_us)
        assert set(bundles[EN].messages) == set(expected_en)
        for message_id, value in expected_us.items():
            assert _text(bundles[EN_US], message_id) == value
        for message_id, value in expected_en.items():
            assert _text(bundles[EN], message_id) == value


class TestComposedBundle:
    """Lookups on a composed bundle."""

    @pytest.fixture
    def bundle(self) -> ComposedBundle:
        store = _store(
            (
                "en",
                "login = Log in\n    .tooltip = Sign in here\n"
                "menu =\n    .label = Menu\n"
                "-brand = Firefox\n",
            ),
        )
        return compose(store, PLAIN)[EN]

    def test_contains(self, bundle: ComposedBundle) -> None:
        assert "login" in bundle
        assert "-brand" in bundle
        assert "brand" not in bundle
        assert 42 not in bundle

    def test_resolves_value_and_attribute(self, bundle: ComposedBundle) -> None:
        assert bundle.resolves(Fkey("login"))
        assert bundle.resolves(Fkey("login", "tooltip"))

    def test_missing_attribute_does_not_resolve(self, bundle: ComposedBundle) -> None:
        assert not bundle.resolves(Fkey("login", "title"))

    def test_message_without_value(self, bundle: ComposedBundle) -> None:
        assert not bundle.resolves(Fkey("menu"))
        assert bundle.resolves(Fkey("menu", "label"))

    def test_missing_message(self, bundle: ComposedBundle) -> None:
        assert not bundle.resolves(Fkey("missing"))
        assert bundle.get_message("missing") is None

    def test_format_attribute(self, bundle: ComposedBundle) -> None:
        assert _text(bundle, "login.tooltip") == "Sign in here"

    def test_repr(self, bundle: ComposedBundle) -> None:
        assert repr(bundle) == "ComposedBundle(locale=en, messages=2, terms=1, layers=1)"
