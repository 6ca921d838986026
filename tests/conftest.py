"""Pytest configuration for the ftlcompose test suite.

Hypothesis profiles:
- dev: local runs, 200 examples
- ci: CI=true or HYPOTHESIS_PROFILE=ci, 50 derandomized examples

Heavier property tests cap themselves with @settings(max_examples=50).
"""

import os
from pathlib import Path

import pytest
from hypothesis import settings

settings.register_profile("dev", max_examples=200)
settings.register_profile("ci", max_examples=50, derandomize=True, print_blob=True)

_CI = os.environ.get("CI") == "true"
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "ci" if _CI else "dev"))


@pytest.fixture
def locale_tree(tmp_path: Path) -> Path:
    """A small locale directory: global file, en, en-US, en-UK and a non-tag folder."""
    files = {
        "global.ftl": "company = Example, inc.\n",
        "en/main.ftl": "region = International\nlanguage = English\n",
        "en-US/main.ftl": "region = United States\n",
        "en-UK/main.ftl": "region = United Kingdom\n",
        "_drafts/old.ftl": "ignored = yes\n",
    }
    for relative, text in files.items():
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return tmp_path
