"""Runtime lookup package.

Python 3.13+.
"""

from .registry import LanguageHandle, TranslationRegistry

__all__ = ["LanguageHandle", "TranslationRegistry"]
