"""Grammar rules for translation keys and candidate language codes.

Single source of truth for the two token grammars used by langcache:

Translation key grammar:
    [a-zA-Z_<high>][a-zA-Z0-9_<high>]*

    <high> is any code point from U+007F upward, the text equivalent of the
    "high byte" range of byte-oriented identifier rules.

    - Start: ASCII letter, underscore, or <high>
    - Continue: the same set plus ASCII digits
    - Length: at most MAX_KEY_LENGTH characters

Language code grammar:
    [a-zA-Z0-9_-]+

Thread Safety:
    All functions in this module are pure functions with no shared state.

Python 3.13+.
"""

from __future__ import annotations

import re

__all__ = [
    "MAX_KEY_LENGTH",
    "is_valid_key",
    "is_valid_language_code",
]

MAX_KEY_LENGTH = 1024

_KEY_PATTERN: re.Pattern[str] = re.compile(
    r"[a-zA-Z_\x7f-\U0010ffff][a-zA-Z0-9_\x7f-\U0010ffff]*"
)
_LANGUAGE_CODE_PATTERN: re.Pattern[str] = re.compile(r"[a-zA-Z0-9_-]+")


def is_valid_key(key: str) -> bool:
    """Validate a fully-qualified translation key.

    Args:
        key: Flattened key, sections already joined by the separator

    Returns:
        True if the key may be stored in a compiled table

    Example:
        >>> is_valid_key("welcomepage_greeting")
        True
        >>> is_valid_key("1greeting")
        False
        >>> is_valid_key("menu.item")
        False
    """
    if not key or len(key) > MAX_KEY_LENGTH:
        return False
    return _KEY_PATTERN.fullmatch(key) is not None


def is_valid_language_code(code: str) -> bool:
    """Check a candidate language token against [a-zA-Z0-9_-]+.

    Example:
        >>> is_valid_language_code("en-US")
        True
        >>> is_valid_language_code("de<>")
        False
    """
    return _LANGUAGE_CODE_PATTERN.fullmatch(code) is not None
