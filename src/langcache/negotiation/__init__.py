"""Language negotiation package.

Submodules:
    signals  - HeaderSource protocol, header sources, RequestSignals
    resolver - LanguageResolver and the candidate-list pipeline

Python 3.13+. Zero external dependencies.
"""

from .resolver import LanguageResolver, parse_accept_language, resolve_user_langs, trim_variant
from .signals import EnvironHeaderSource, HeaderSource, MappingHeaderSource, RequestSignals

__all__ = [
    "EnvironHeaderSource",
    "HeaderSource",
    "LanguageResolver",
    "MappingHeaderSource",
    "RequestSignals",
    "parse_accept_language",
    "resolve_user_langs",
    "trim_variant",
]
