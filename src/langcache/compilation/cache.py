"""Compiled-artifact cache: staleness checks and recompilation.

An artifact is regenerated when any of these hold:
    - no artifact exists at the expected cache path
    - the artifact is older than its source resource
    - fallback merging is enabled and the artifact is older than the
      fallback language's source resource

Concurrency:
    There is no lock around the cache directory. Two processes finding the
    same stale artifact both recompile it; the last writer wins. Each write
    goes to a temporary sibling and is moved into place with os.replace(),
    so readers see either the old or the new file.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from langcache.compilation.compiler import CompiledArtifact, TranslationCompiler, compiler_hash
from langcache.compilation.loader import ConfigLoader, FileConfigLoader
from langcache.constants import CACHE_DIR_MODE, CACHE_FILE_MODE, CACHE_NAMESPACE, CACHE_SUFFIX
from langcache.diagnostics.errors import ArtifactLoadError, CacheWriteError, MissingSourceError
from langcache.localization.types import ConfigTree, LanguageCode

__all__ = [
    "CacheManager",
    "merge_trees",
]

logger = logging.getLogger(__name__)


def merge_trees(base: ConfigTree, override: ConfigTree) -> dict[str, Any]:
    """Deep-merge two ConfigTrees, ``override`` winning at every depth.

    Mappings present on both sides are merged recursively rather than
    replaced, so keys found only in ``base`` survive inside shared sections.
    Neither input is modified.

    Args:
        base: Lower-priority tree (the fallback language)
        override: Higher-priority tree (the primary language)

    Returns:
        New merged tree; base key order first, override-only keys appended

    Example:
        >>> merge_trees(
        ...     {"greeting": "Hello", "menu": {"a": "A", "b": "B"}},
        ...     {"greeting": "Hallo", "menu": {"a": "Ä"}},
        ... )
        {'greeting': 'Hallo', 'menu': {'a': 'Ä', 'b': 'B'}}
    """
    merged: dict[str, Any] = {
        key: dict(value) if isinstance(value, Mapping) else value
        for key, value in base.items()
    }
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = merge_trees(current, value)
        else:
            merged[key] = value
    return merged


class CacheManager:
    """Keeps compiled artifacts in a cache directory up to date.

    Artifacts are stored at
    ``<cache_root>/<namespace>_<compiler hash>_<language>.cache``.

    Example:
        >>> manager = CacheManager(
        ...     source_path=lambda lang: Path(f"lang/{lang}.ini"),
        ...     cache_root=Path("langcache"),
        ... )
        >>> artifact = manager.ensure_fresh("en-US")
        >>> artifact.translate("greeting")
        'Hello, World!'
    """

    __slots__ = (
        "_cache_root",
        "_compiler",
        "_fallback_lang",
        "_loader",
        "_merge_fallback",
        "_namespace",
        "_source_path",
    )

    def __init__(
        self,
        source_path: Callable[[LanguageCode], Path],
        cache_root: Path | str,
        *,
        compiler: TranslationCompiler | None = None,
        loader: ConfigLoader | None = None,
        fallback_lang: LanguageCode | None = None,
        merge_fallback: bool = False,
        namespace: str = CACHE_NAMESPACE,
    ) -> None:
        """Initialize the cache manager.

        Args:
            source_path: Maps a language code to its source resource path
            cache_root: Directory holding compiled artifacts
            compiler: Compiler to use (default: ``_`` section separator)
            loader: Source loader (default: FileConfigLoader)
            fallback_lang: Language merged underneath every other language
                when merge_fallback is enabled
            merge_fallback: Merge fallback strings into every language
            namespace: Artifact filename prefix

        Raises:
            ValueError: If merge_fallback is enabled without a fallback_lang
        """
        if merge_fallback and not fallback_lang:
            msg = "fallback_lang required when merge_fallback is enabled"
            raise ValueError(msg)

        self._source_path = source_path
        self._cache_root = Path(cache_root)
        self._compiler = compiler if compiler is not None else TranslationCompiler()
        self._loader: ConfigLoader = loader if loader is not None else FileConfigLoader()
        self._fallback_lang = fallback_lang
        self._merge_fallback = merge_fallback
        self._namespace = namespace

    @property
    def cache_root(self) -> Path:
        """Directory holding compiled artifacts (read-only)."""
        return self._cache_root

    @property
    def compiler(self) -> TranslationCompiler:
        return self._compiler

    def cache_path(self, language: LanguageCode) -> Path:
        """Return the artifact path for a language."""
        filename = f"{self._namespace}_{compiler_hash()}_{language}{CACHE_SUFFIX}"
        return self._cache_root / filename

    def _source(self, language: LanguageCode) -> Path:
        path = self._source_path(language)
        if not path.is_file():
            raise MissingSourceError(language, path)
        return path

    def ensure_root(self) -> None:
        """Create the cache root (recursively) if it does not exist.

        Raises:
            CacheWriteError: If the directory cannot be created
        """
        try:
            self._cache_root.mkdir(mode=CACHE_DIR_MODE, parents=True, exist_ok=True)
        except OSError as e:
            raise CacheWriteError(self._cache_root, str(e)) from e

    def is_stale(self, language: LanguageCode) -> bool:
        """Decide whether the artifact for a language must be regenerated.

        Raises:
            MissingSourceError: If the language's source (or, when merging,
                the fallback source) does not exist
        """
        try:
            artifact_mtime = self.cache_path(language).stat().st_mtime
        except OSError:
            return True

        if artifact_mtime < self._source(language).stat().st_mtime:
            return True

        if self._merge_fallback:
            assert self._fallback_lang is not None
            fallback_mtime = self._source(self._fallback_lang).stat().st_mtime
            if artifact_mtime < fallback_mtime:
                return True

        return False

    def ensure_fresh(self, language: LanguageCode) -> CompiledArtifact:
        """Return an up-to-date artifact, recompiling it if stale.

        Raises:
            MissingSourceError: If a needed source file does not exist
            UnsupportedFormatError: If a source cannot be read as a ConfigTree
            InvalidKeyError: If a flattened key is not a valid identifier
            CacheWriteError: If the artifact cannot be persisted
            ArtifactLoadError: If a fresh artifact on disk is malformed
        """
        if not self.is_stale(language):
            logger.debug("Cache hit for language '%s'", language)
            return self.read(language)

        artifact = self.compile(language)
        self.write(artifact)
        logger.info(
            "Compiled language '%s' (%d keys) to %s",
            language,
            len(artifact),
            self.cache_path(language),
        )
        return artifact

    def compile(self, language: LanguageCode) -> CompiledArtifact:
        """Load, optionally merge, and compile a language without touching the cache."""
        config = self._loader.load(self._source(language))
        if self._merge_fallback:
            assert self._fallback_lang is not None
            fallback = self._loader.load(self._source(self._fallback_lang))
            config = merge_trees(fallback, config)
        return self._compiler.build(language, config)

    def write(self, artifact: CompiledArtifact) -> Path:
        """Persist an artifact, world-readable and owner-writable.

        Raises:
            CacheWriteError: If the artifact cannot be written
        """
        path = self.cache_path(artifact.language)
        text = self._compiler.serialize(artifact)
        self.ensure_root()

        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=".tmp", dir=self._cache_root
            )
        except OSError as e:
            raise CacheWriteError(path, str(e)) from e

        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text)
            tmp_path.chmod(CACHE_FILE_MODE)
            os.replace(tmp_path, path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise CacheWriteError(path, str(e)) from e
        return path

    def read(self, language: LanguageCode) -> CompiledArtifact:
        """Read a compiled artifact from the cache without a staleness check.

        Raises:
            ArtifactLoadError: If the artifact is missing, malformed, or was
                compiled for another language
        """
        path = self.cache_path(language)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            msg = f"Cannot read compiled artifact '{path}': {e}"
            raise ArtifactLoadError(msg, path) from e

        artifact = self._compiler.deserialize(text, path)
        if artifact.language != language:
            msg = (
                f"Compiled artifact '{path}' holds language '{artifact.language}', "
                f"expected '{language}'"
            )
            raise ArtifactLoadError(msg, path)
        return artifact
