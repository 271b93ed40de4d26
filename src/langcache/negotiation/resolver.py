"""Language-preference resolution from ranked request signals.

Produces the ordered candidate list consulted when picking a translation
resource. Negotiation is purely syntactic: headers are split on literal
separators, nothing is inferred about scripts or browser locales.

Priority (highest first):
    1. Forced language
    2. Custom current-language header
    3. Query-string parameter
    4. Session parameter
    5. Accept-Language entries, in header order
    6. Cookie parameter
    7. Fallback language (always present)

Pipeline: collect in priority order -> trim variants (optional) ->
stable-unique -> drop tokens outside [a-zA-Z0-9_-].

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from langcache.constants import (
    ACCEPT_LANGUAGE_HEADER,
    DEFAULT_FALLBACK_LANG,
    DEFAULT_LANG_HEADER,
    DEFAULT_LANG_PARAM,
    QUALITY_SEPARATOR,
    VARIANT_SEPARATOR,
)
from langcache.core.identifiers import is_valid_language_code
from langcache.enums import SignalSource
from langcache.localization.types import CandidateList, LanguageCode
from langcache.negotiation.signals import RequestSignals

__all__ = [
    "LanguageResolver",
    "parse_accept_language",
    "resolve_user_langs",
    "trim_variant",
]

logger = logging.getLogger(__name__)


def trim_variant(code: str) -> str:
    """Reduce a language code to its primary subtag.

    Example:
        >>> trim_variant("en-US")
        'en'
        >>> trim_variant("zh_Hant")
        'zh_Hant'
    """
    return code.split(VARIANT_SEPARATOR, 1)[0]


def parse_accept_language(header: str) -> list[str]:
    """Split an Accept-Language value into lower-cased entries.

    Entries keep the order they are listed in; quality values are cut off
    but never used for sorting.

    Example:
        >>> parse_accept_language("nl,fr;q=0.8,en-US;q=0.5")
        ['nl', 'fr', 'en-us']
    """
    return [
        part.split(QUALITY_SEPARATOR, 1)[0].lower()
        for part in header.split(",")
    ]


def _header_value(headers: Mapping[str, Any], name: str) -> Any:
    """Case-insensitive header lookup; the first matching name wins."""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def _string_signal(mapping: Mapping[str, Any], name: str) -> str | None:
    value = mapping.get(name)
    return value if isinstance(value, str) else None


@dataclass(frozen=True, slots=True)
class LanguageResolver:
    """Resolver bound to one negotiation configuration.

    Attributes:
        fallback: Lowest-priority language, always appended
        variant_enabled: Keep region/script variants (``en-US``). When False
            every candidate is cut to the text before its first ``-``.
        forced: Explicit override placed first, if set
        lang_param: Query/session/cookie parameter name
        lang_header: Custom current-language header name

    Example:
        >>> resolver = LanguageResolver(fallback="en", variant_enabled=False)
        >>> resolver.resolve(RequestSignals(accept_language="nl,fr;q=0.8,en-us;q=0.5"))
        ('nl', 'fr', 'en')
    """

    fallback: LanguageCode = DEFAULT_FALLBACK_LANG
    variant_enabled: bool = True
    forced: LanguageCode | None = None
    lang_param: str = DEFAULT_LANG_PARAM
    lang_header: str = DEFAULT_LANG_HEADER

    def collect(self, signals: RequestSignals) -> Iterator[tuple[SignalSource, str]]:
        """Yield raw candidates with their source, in priority order.

        No trimming, deduplication or filtering is applied here.
        """
        if self.forced:
            yield SignalSource.FORCED, self.forced

        headers = signals.headers.get_headers()
        header_lang = _header_value(headers, self.lang_header)
        if isinstance(header_lang, str):
            yield SignalSource.HEADER, header_lang

        if (query_lang := _string_signal(signals.query, self.lang_param)) is not None:
            yield SignalSource.QUERY, query_lang

        if (session_lang := _string_signal(signals.session, self.lang_param)) is not None:
            yield SignalSource.SESSION, session_lang

        accept = signals.accept_language
        if accept is None:
            header_accept = _header_value(headers, ACCEPT_LANGUAGE_HEADER)
            accept = header_accept if isinstance(header_accept, str) else None
        if accept is not None:
            for entry in parse_accept_language(accept):
                yield SignalSource.ACCEPT_LANGUAGE, entry

        if (cookie_lang := _string_signal(signals.cookies, self.lang_param)) is not None:
            yield SignalSource.COOKIE, cookie_lang

        yield SignalSource.FALLBACK, self.fallback

    def resolve(self, signals: RequestSignals | None = None) -> CandidateList:
        """Produce the ordered, unique, sanitized candidate list.

        Args:
            signals: Request signals; None means no request data at all

        Returns:
            Candidate language codes, highest priority first. Never empty as
            long as the fallback itself is a legal token.
        """
        signals = signals if signals is not None else RequestSignals()

        raw = [code for _source, code in self.collect(signals)]
        if not self.variant_enabled:
            raw = [trim_variant(code) for code in raw]

        # dict.fromkeys() removes duplicates while maintaining insertion order
        unique = list(dict.fromkeys(raw))
        candidates = tuple(code for code in unique if is_valid_language_code(code))

        if len(candidates) != len(unique):
            logger.debug(
                "Dropped illegal language candidates: %s",
                [code for code in unique if not is_valid_language_code(code)],
            )
        logger.debug("Resolved user languages: %s", candidates)
        return candidates


def resolve_user_langs(
    signals: RequestSignals | None = None,
    *,
    variant_enabled: bool = True,
    fallback: LanguageCode = DEFAULT_FALLBACK_LANG,
    forced: LanguageCode | None = None,
) -> CandidateList:
    """Resolve candidate languages with the default parameter names.

    Convenience wrapper around :class:`LanguageResolver`.

    Example:
        >>> resolve_user_langs(forced="es", variant_enabled=False, fallback="en")
        ('es', 'en')
    """
    resolver = LanguageResolver(
        fallback=fallback,
        variant_enabled=variant_enabled,
        forced=forced,
    )
    return resolver.resolve(signals)
