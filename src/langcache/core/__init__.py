"""Core utilities shared across negotiation and compilation.

Exports:
    is_valid_key: Translation key grammar check
    is_valid_language_code: Candidate language token check

Python 3.13+.
"""

from .identifiers import MAX_KEY_LENGTH, is_valid_key, is_valid_language_code

__all__ = ["MAX_KEY_LENGTH", "is_valid_key", "is_valid_language_code"]
