"""Error types for langcache.

Python 3.13+. Zero external dependencies.
"""

from .errors import (
    ArtifactLoadError,
    CacheWriteError,
    I18nError,
    InvalidKeyError,
    MissingSourceError,
    NoLanguageFoundError,
    ReconfigurationError,
    TranslationFormatError,
    UnknownKeyError,
    UnsupportedFormatError,
)

__all__ = [
    "ArtifactLoadError",
    "CacheWriteError",
    "I18nError",
    "InvalidKeyError",
    "MissingSourceError",
    "NoLanguageFoundError",
    "ReconfigurationError",
    "TranslationFormatError",
    "UnknownKeyError",
    "UnsupportedFormatError",
]
