"""langcache exception hierarchy.

Every failure is terminal for the operation in progress: nothing is retried
and nothing is swallowed. Each class also derives from the builtin exception
a caller would naturally catch (ValueError, KeyError, OSError, RuntimeError)
so host applications can handle them without importing this module.

Hierarchy:
    I18nError
    ├─ NoLanguageFoundError (no source matches any candidate)
    ├─ MissingSourceError (a language or fallback source is absent)
    ├─ UnsupportedFormatError (unrecognized or unparseable source)
    ├─ InvalidKeyError (flattened key is not a valid identifier)
    ├─ CacheWriteError (artifact cannot be persisted)
    ├─ ArtifactLoadError (artifact cannot be read back)
    ├─ UnknownKeyError (lookup of an absent key)
    ├─ TranslationFormatError (positional arguments do not fit the template)
    └─ ReconfigurationError (mutator called after init)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from pathlib import Path

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


class I18nError(Exception):
    """Base exception for all langcache errors."""


class NoLanguageFoundError(I18nError, RuntimeError):
    """No source resource exists for any candidate language.

    Attributes:
        candidates: The candidate list that was searched, in priority order
    """

    def __init__(self, candidates: tuple[str, ...]) -> None:
        self.candidates = candidates
        super().__init__(
            f"No language file was found for any of: {', '.join(candidates) or '(none)'}"
        )


class MissingSourceError(I18nError, FileNotFoundError):
    """Source resource needed for compilation does not exist.

    Raised for the compiled language itself and, when fallback merging is
    enabled, for the fallback language.

    Attributes:
        language: Language code whose source is missing
        path: Expected source file
    """

    def __init__(self, language: str, path: Path | str) -> None:
        self.language = language
        self.path = Path(path)
        super().__init__(
            f"No translation source for language '{language}' at path '{self.path}'"
        )


class UnsupportedFormatError(I18nError, ValueError):
    """Source resource has an unrecognized extension or cannot be parsed.

    Attributes:
        path: The offending source file
    """

    def __init__(self, message: str, path: Path | str) -> None:
        super().__init__(message)
        self.path = Path(path)


class InvalidKeyError(I18nError, ValueError):
    """A fully-qualified translation key is not a valid identifier or is ambiguous.

    Aborts compilation for the language entirely.

    Attributes:
        key: The flattened key that failed validation
    """

    def __init__(self, key: str, reason: str = "it is not a valid identifier") -> None:
        self.key = key
        super().__init__(f"Cannot compile translation key {key!r} because {reason}")


class CacheWriteError(I18nError, OSError):
    """Compiled artifact (or the cache root) could not be written.

    Attributes:
        path: Path that could not be written
    """

    def __init__(self, path: Path | str, reason: str = "") -> None:
        self.path = Path(path)
        msg = f"Could not write cache file to path '{self.path}'. Is it writable?"
        if reason:
            msg = f"{msg} ({reason})"
        # OSError.__init__ with a single argument keeps str(e) == msg
        super().__init__(msg)


class ArtifactLoadError(I18nError, ValueError):
    """Compiled artifact is missing or malformed.

    Attributes:
        path: The artifact file
    """

    def __init__(self, message: str, path: Path | str) -> None:
        super().__init__(message)
        self.path = Path(path)


class UnknownKeyError(I18nError, KeyError):
    """Requested translation key is absent from the active table.

    Attributes:
        key: The requested key
        language: Language code of the table that was searched
    """

    def __init__(self, key: str, language: str) -> None:
        self.key = key
        self.language = language
        super().__init__(key)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the sole argument
        return f"Unknown translation key {self.key!r} for language '{self.language}'"


class TranslationFormatError(I18nError, ValueError):
    """Positional arguments could not be substituted into a template.

    Attributes:
        key: Translation key whose template was being formatted
    """

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        super().__init__(f"Cannot format translation {key!r}: {reason}")


class ReconfigurationError(I18nError, RuntimeError):
    """A configuration mutator was called on an initialized object."""
