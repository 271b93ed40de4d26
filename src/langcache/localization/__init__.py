"""Initialization orchestrator and domain type aliases.

Submodules:
    types        - PEP 695 type aliases (LanguageCode, CandidateList, ConfigTree, ...)
    orchestrator - I18n (configuration, init state machine, lookups)

Python 3.13+.
"""

from langcache.localization.orchestrator import I18n
from langcache.localization.types import (
    CandidateList,
    ConfigTree,
    FlatTable,
    LanguageCode,
    TranslationKey,
)

__all__ = [
    "CandidateList",
    "ConfigTree",
    "FlatTable",
    "I18n",
    "LanguageCode",
    "TranslationKey",
]
