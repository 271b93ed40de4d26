"""Bridging negotiated language codes to Babel locales.

Language negotiation keeps codes exactly as the visitor sent them
(``en-us``, ``zh-CN``). Hosts that format dates or numbers for the applied
language need a Babel Locale; these helpers perform that conversion at the
boundary.

Python 3.13+.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "clear_locale_cache",
    "get_babel_locale",
    "normalize_locale",
]


def normalize_locale(language_code: str) -> str:
    """Convert a hyphenated language code to POSIX form for Babel.

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return language_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(language_code: str) -> Locale:
    """Get a Babel Locale for a language code, with caching.

    Args:
        language_code: Hyphenated or POSIX language code, any case

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If Babel has no data for the locale
        ValueError: If the code is not a parseable locale identifier

    Example:
        >>> get_babel_locale("en-us").territory
        'US'
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(language_code))


def clear_locale_cache() -> None:
    """Drop cached Locale objects (tests and long-lived reloading hosts)."""
    get_babel_locale.cache_clear()
