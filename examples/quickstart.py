"""Quickstart example for ftlcompose.

Builds an engine from the locale tree next to this file and shows layered
inheritance, negotiation and attribute fallback:

    locales/global.ftl     shared by every locale
    locales/en/            base language
    locales/en-US/         region overlay on en
    locales/en-UK/         region overlay on en
    locales/lv/            a second language

WARNING: Examples use use_isolating=False for cleaner terminal output.
NEVER disable bidi isolation in production applications that support RTL languages.

Python 3.13+.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ftlcompose import EngineBuilder, EngineConfig, FallbackInfo

LOCALES = Path(__file__).parent / "locales"


def report_fallback(info: FallbackInfo) -> None:
    print(f"  (fallback: {info.key} from {info.resolved_locale}, wanted {info.requested_locale})")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    engine = (
        EngineBuilder(EngineConfig(use_isolating=False))
        .load_directory(LOCALES)
        .set_fallback_locale("en")
        .finish(on_fallback=report_fallback)
    )
    print(engine)

    # Example 1: Region overlay over a base language
    print("=" * 50)
    print("Example 1: en-UK inherits from en")
    print("=" * 50)
    locales = engine.negotiate("en-UK")
    print("Candidates:", ", ".join(str(tag) for tag in locales))
    for key in ("region", "color", "language", "copyright"):
        print(f"{key}: {engine.resolve(locales, key)}")
    # Output: United Kingdom / Colour / English / © Example, inc.

    # Example 2: Weighted preferences and a missing key
    print("\n" + "=" * 50)
    print("Example 2: Negotiating lv-LV,en;q=0.5")
    print("=" * 50)
    translate = engine.translator("lv-LV,en;q=0.5")
    print(translate("welcome", {"name": "anna"}))
    print(translate("cart-items", {"count": 3}))
    print(translate("login.tooltip", None))
    print(translate("no-such-message", None))
    # Output: Laipni lūdzam Example, inc., Anna! / 3 items in your cart (fallback) / ...


if __name__ == "__main__":
    main()
