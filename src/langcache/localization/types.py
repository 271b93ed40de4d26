"""Type aliases for the langcache domain.

Provides semantic type aliases used throughout the package and by user
code when annotating I18n call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping

__all__ = [
    "CandidateList",
    "ConfigTree",
    "FlatTable",
    "LanguageCode",
    "TranslationKey",
]

type LanguageCode = str
"""Language token matching [a-zA-Z0-9_-]+ (e.g., 'en', 'en-US', 'zh-CN')."""

type CandidateList = tuple[LanguageCode, ...]
"""Priority-ranked unique language codes, index 0 is the highest priority."""

type TranslationKey = str
"""Fully-qualified translation key (e.g., 'greeting', 'menu_item1')."""

type ConfigTree = Mapping[str, str | ConfigTree]
"""Nested mapping read from a source resource; sections nest one level deep."""

type FlatTable = dict[TranslationKey, str]
"""Flattened key -> string table produced by the compiler."""
