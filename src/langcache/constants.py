"""Shared constants for langcache.

Centralized defaults used across negotiation, compilation and the
initialization orchestrator. Placing them here avoids circular imports
and provides a single source of truth.

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Path templates
    "LANGUAGE_PLACEHOLDER",
    "DEFAULT_FILE_PATH",
    "DEFAULT_CACHE_PATH",
    # Negotiation
    "DEFAULT_FALLBACK_LANG",
    "DEFAULT_LANG_PARAM",
    "DEFAULT_LANG_HEADER",
    "ACCEPT_LANGUAGE_HEADER",
    "QUALITY_SEPARATOR",
    "VARIANT_SEPARATOR",
    # Compilation
    "DEFAULT_SECTION_SEPARATOR",
    "ARTIFACT_FORMAT_VERSION",
    # Cache layout
    "CACHE_NAMESPACE",
    "CACHE_SUFFIX",
    "CACHE_FILE_MODE",
    "CACHE_DIR_MODE",
    "COMPILER_HASH_LENGTH",
]

# ============================================================================
# PATH TEMPLATES
# ============================================================================

LANGUAGE_PLACEHOLDER = "{LANGUAGE}"
"""Placeholder substituted with a language code in the source file template."""

DEFAULT_FILE_PATH = "./lang/{LANGUAGE}.ini"
"""Default source resource template. Must contain LANGUAGE_PLACEHOLDER."""

DEFAULT_CACHE_PATH = "./langcache/"
"""Default cache root. Best kept as a directory holding nothing else."""

# ============================================================================
# NEGOTIATION
# ============================================================================

DEFAULT_FALLBACK_LANG = "en-US"
"""Lowest-priority candidate; a source file for it should always exist."""

DEFAULT_LANG_PARAM = "lang"
"""Name of the query, session and cookie parameter carrying a language."""

DEFAULT_LANG_HEADER = "current_language"
"""Custom request header carrying the client's current language."""

ACCEPT_LANGUAGE_HEADER = "accept_language"

QUALITY_SEPARATOR = ";q="
VARIANT_SEPARATOR = "-"

# ============================================================================
# COMPILATION
# ============================================================================

DEFAULT_SECTION_SEPARATOR = "_"
"""Joins a section name and a key: [welcomepage] greeting -> welcomepage_greeting."""

ARTIFACT_FORMAT_VERSION = 1

# ============================================================================
# CACHE LAYOUT
# ============================================================================

CACHE_NAMESPACE = "langcache"
CACHE_SUFFIX = ".cache"
CACHE_FILE_MODE = 0o644
CACHE_DIR_MODE = 0o755
COMPILER_HASH_LENGTH = 16
