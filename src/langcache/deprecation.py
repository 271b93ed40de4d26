"""Deprecation utilities for langcache.

Provides a standardized deprecation warning and a decorator for keeping
renamed APIs callable with clear migration guidance.

Policy:
    - Deprecated features remain functional for at least 2 minor versions
    - Warnings name the version where the feature will be removed
    - Warnings include the replacement

Python 3.13+.
"""

import functools
import warnings
from collections.abc import Callable
from typing import ParamSpec, TypeVar

__all__ = [
    "deprecated",
    "warn_deprecated",
]

P = ParamSpec("P")
R = TypeVar("R")


def warn_deprecated(
    feature: str,
    *,
    removal_version: str,
    alternative: str | None = None,
    stacklevel: int = 2,
) -> None:
    """Issue a DeprecationWarning with the standard message format.

    Args:
        feature: Name of the deprecated feature
        removal_version: Version when feature will be removed (e.g., "1.0.0")
        alternative: Suggested replacement (optional)
        stacklevel: Stack level for warning (default: 2, caller's caller)

    Example:
        >>> warn_deprecated(
        ...     "I18n.set_section_seperator()",
        ...     removal_version="1.0.0",
        ...     alternative="I18n.set_section_separator()",
        ... )
    """
    msg = f"{feature} is deprecated and will be removed in version {removal_version}."
    if alternative:
        msg += f" Use {alternative} instead."

    warnings.warn(msg, DeprecationWarning, stacklevel=stacklevel)


def deprecated(
    *,
    removal_version: str,
    alternative: str | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator to mark a function or method as deprecated.

    Emits DeprecationWarning on each call. Preserves the signature and
    appends a deprecation note to the docstring.

    Args:
        removal_version: Version when feature will be removed
        alternative: Suggested replacement API (optional)
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            warn_deprecated(
                f"{func.__qualname__}()",
                removal_version=removal_version,
                alternative=alternative,
                stacklevel=3,
            )
            return func(*args, **kwargs)

        deprecation_note = (
            f"\n\n.. deprecated::\n"
            f"    Will be removed in version {removal_version}."
        )
        if alternative:
            deprecation_note += f"\n    Use :meth:`{alternative}` instead."

        if wrapper.__doc__:
            wrapper.__doc__ += deprecation_note
        else:
            wrapper.__doc__ = deprecation_note.strip()

        return wrapper

    return decorator
