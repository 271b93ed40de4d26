"""Compilation pipeline: source loading, flattening, and the artifact cache.

Submodules:
    loader   - ConfigLoader protocol and FileConfigLoader (ini/properties/json)
    compiler - TranslationCompiler, CompiledArtifact, compiler_hash
    cache    - CacheManager (staleness, merge-with-fallback, persistence)

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from .cache import CacheManager, merge_trees
from .compiler import CompiledArtifact, TranslationCompiler, compiler_hash
from .loader import ConfigLoader, FileConfigLoader, source_format

__all__ = [
    # Loading
    "ConfigLoader",
    "FileConfigLoader",
    "source_format",
    # Compilation
    "CompiledArtifact",
    "TranslationCompiler",
    "compiler_hash",
    # Cache
    "CacheManager",
    "merge_trees",
]
