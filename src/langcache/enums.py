"""Enumerations for langcache type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class SignalSource(StrEnum):
    """Origin of a candidate language, in descending priority order.

    StrEnum provides automatic string conversion: str(SignalSource.QUERY) == "query"
    """

    FORCED = "forced"
    """Explicit override configured on the I18n object"""

    HEADER = "header"
    """Custom current-language request header"""

    QUERY = "query"
    """Query-string parameter: ?lang=fr"""

    SESSION = "session"
    """Session-stored language parameter"""

    ACCEPT_LANGUAGE = "accept_language"
    """Entries of the Accept-Language header, in listed order"""

    COOKIE = "cookie"
    """Cookie-stored language value"""

    FALLBACK = "fallback"
    """Configured fallback language, always present"""


class SourceFormat(StrEnum):
    """Recognized translation source formats, keyed by file extension."""

    INI = "ini"
    PROPERTIES = "properties"
    JSON = "json"


class InitState(StrEnum):
    """Lifecycle state of an I18n object."""

    UNCONFIGURED = "unconfigured"
    """Settings may still change; nothing resolved or compiled yet"""

    INITIALIZED = "initialized"
    """Applied language chosen and every artifact fresh; settings frozen"""


__all__ = [
    "InitState",
    "SignalSource",
    "SourceFormat",
]
