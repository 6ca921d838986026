"""Built-in formatting functions registered on every composed bundle.

Custom functions follow the FluentBundle calling convention: positional FTL
arguments arrive as positional Python arguments, named FTL arguments as
snake_case keywords.

    FTL:    greeting = Hello, { TITLE($name) }!
    Python: title("ana") -> "Ana"

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import TITLE_FUNCTION_NAME

if TYPE_CHECKING:
    from collections.abc import Callable

    from ftllexengine import FluentValue

__all__ = [
    "BUILTIN_FUNCTIONS",
    "title",
]


def title(value: FluentValue) -> str:
    """Uppercase the first character of ``value``, leaving the rest untouched.

    Unlike ``str.title`` this does not touch the remainder:
    ``title("new york")`` is ``"New york"``, ``title("eBay")`` is ``"EBay"``.
    """
    text = str(value)
    return text[:1].upper() + text[1:]


BUILTIN_FUNCTIONS: dict[str, Callable[..., FluentValue]] = {
    TITLE_FUNCTION_NAME: title,
}
"""Functions registered when ``EngineConfig.register_builtins`` is true."""
