"""langcache - visitor language negotiation with a compiled translation cache.

Resolves a visitor's preferred language from ranked request signals,
locates the matching translation source (ini, properties or json), and
compiles its strings into cached artifacts that are rebuilt only when their
sources change.

Public API:
    I18n - Configuration, init(), applied language, lookups
    TranslationRegistry - Loads compiled languages into handles
    LanguageHandle - translate()/t() over one compiled language
    RequestSignals - Request-scoped negotiation inputs
    resolve_user_langs - Candidate-list resolution without an I18n object

Exceptions:
    I18nError - Base exception class
    NoLanguageFoundError, MissingSourceError, UnsupportedFormatError, InvalidKeyError,
    CacheWriteError, ArtifactLoadError, UnknownKeyError,
    TranslationFormatError, ReconfigurationError

Submodules:
    langcache.negotiation - Signals, header sources, LanguageResolver
    langcache.compilation - Loader, compiler, cache manager
    langcache.runtime - Registry and handles
    langcache.localization - I18n orchestrator and type aliases
"""

from .diagnostics import (
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
from .localization import I18n
from .negotiation import RequestSignals, resolve_user_langs
from .runtime import LanguageHandle, TranslationRegistry

try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("langcache")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ArtifactLoadError",
    "CacheWriteError",
    "I18n",
    "I18nError",
    "InvalidKeyError",
    "MissingSourceError",
    "LanguageHandle",
    "NoLanguageFoundError",
    "ReconfigurationError",
    "RequestSignals",
    "TranslationFormatError",
    "TranslationRegistry",
    "UnknownKeyError",
    "UnsupportedFormatError",
    "__version__",
    "resolve_user_langs",
]
