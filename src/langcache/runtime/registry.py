"""Translation registry and per-language lookup handles.

A registry loads compiled artifacts from the cache and hands out
LanguageHandle objects. Handles are plain values owned by the caller; any
number may coexist, so concurrent requests in different languages each keep
their own. The registry itself only remembers the handle it loaded last.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from langcache.compilation.cache import CacheManager
from langcache.compilation.compiler import CompiledArtifact
from langcache.localization.types import LanguageCode

__all__ = ["LanguageHandle", "TranslationRegistry"]

logger = logging.getLogger(__name__)


class LanguageHandle:
    """Lookup handle over one compiled language table.

    Example:
        >>> handle = registry.load("en-US")
        >>> handle.t("greeting")
        'Hello, World!'
        >>> handle.t("items_count", 3)
        '3 items'
    """

    __slots__ = ("_artifact",)

    def __init__(self, artifact: CompiledArtifact) -> None:
        self._artifact = artifact

    def __repr__(self) -> str:
        return f"LanguageHandle(language={self.language!r}, keys={len(self._artifact)})"

    def __contains__(self, key: object) -> bool:
        return key in self._artifact

    def __iter__(self) -> Iterator[str]:
        return iter(self._artifact.strings)

    def __len__(self) -> int:
        return len(self._artifact)

    @property
    def language(self) -> LanguageCode:
        """Language code of the loaded table (read-only)."""
        return self._artifact.language

    @property
    def artifact(self) -> CompiledArtifact:
        return self._artifact

    def keys(self) -> tuple[str, ...]:
        """All translation keys, in compilation order."""
        return tuple(self._artifact.strings)

    def translate(self, key: str, *args: Any) -> str:
        """Translate a key, substituting positional arguments if given.

        Args:
            key: Fully-qualified translation key
            *args: Values for ``%s``/``%d`` style placeholders, in order

        Raises:
            UnknownKeyError: If the key is not in the table
            TranslationFormatError: If args do not fit the template
        """
        return self._artifact.translate(key, args)

    def t(self, key: str, *args: Any) -> str:
        """Alias for :meth:`translate`."""
        return self.translate(key, *args)


class TranslationRegistry:
    """Loads compiled artifacts into handles.

    ``load`` is idempotent for the active language: requesting the same code
    again returns the very same handle without touching the cache. Requesting
    another code replaces the active handle. Handles returned earlier stay
    valid.

    Attributes:
        active: Handle loaded by the most recent ``load`` call, if any
    """

    __slots__ = ("_active", "_cache")

    def __init__(self, cache: CacheManager) -> None:
        self._cache = cache
        self._active: LanguageHandle | None = None

    @property
    def active(self) -> LanguageHandle | None:
        return self._active

    def load(self, language: LanguageCode) -> LanguageHandle:
        """Return a handle for a language's compiled artifact.

        Raises:
            ArtifactLoadError: If the artifact is missing or malformed
        """
        if self._active is not None and self._active.language == language:
            return self._active

        handle = LanguageHandle(self._cache.read(language))
        logger.debug("Loaded translations for '%s' (%d keys)", language, len(handle))
        self._active = handle
        return handle

    def translate(self, key: str, *args: Any) -> str:
        """Translate through the active handle.

        Raises:
            RuntimeError: If no language has been loaded yet
            UnknownKeyError: If the key is not in the active table
        """
        if self._active is None:
            msg = "No language loaded; call load() first"
            raise RuntimeError(msg)
        return self._active.translate(key, *args)

    def t(self, key: str, *args: Any) -> str:
        """Alias for :meth:`translate`."""
        return self.translate(key, *args)
