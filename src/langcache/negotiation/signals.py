"""Request signal inputs for language negotiation.

The host environment supplies read-only request data; this module gives it
a typed shape and keeps header extraction pluggable.

Components:
    HeaderSource - Protocol returning request headers (structural typing)
    MappingHeaderSource - Headers from an explicit mapping
    EnvironHeaderSource - Headers extracted from a WSGI/CGI environ
    RequestSignals - Immutable bundle of every request-scoped signal

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from http.cookies import SimpleCookie
from types import MappingProxyType
from typing import Any, Protocol
from urllib.parse import parse_qsl

from langcache.constants import DEFAULT_LANG_HEADER

__all__ = [
    "EnvironHeaderSource",
    "HeaderSource",
    "MappingHeaderSource",
    "RequestSignals",
]

_EMPTY: Mapping[str, Any] = MappingProxyType({})


class HeaderSource(Protocol):
    """Protocol for supplying request headers to the resolver.

    Hosts inject whatever matches their server: a framework request object
    adapter, a WSGI environ, or a plain mapping in tests. Header names are
    compared case-insensitively by the resolver, so implementations may
    return names in any case.

    Example:
        >>> class FlaskHeaders:
        ...     def __init__(self, request):
        ...         self._request = request
        ...     def get_headers(self):
        ...         return dict(self._request.headers)
    """

    def get_headers(self) -> Mapping[str, str]:
        """Return all request headers available to the host."""
        ...


@dataclass(frozen=True, slots=True)
class MappingHeaderSource:
    """Header source backed by an explicit mapping."""

    headers: Mapping[str, str] = field(default_factory=dict)

    def get_headers(self) -> Mapping[str, str]:
        return self.headers


@dataclass(frozen=True, slots=True)
class EnvironHeaderSource:
    """Header source over a WSGI/CGI style environ.

    Mirrors what a CGI server exposes: every ``HTTP_*`` (or ``http_*``)
    variable becomes a header named by the lower-cased remainder, so
    ``HTTP_CURRENT_LANGUAGE`` is reported as ``current_language``. A bare
    variable whose lower-cased name equals the custom language header is
    reported under that name as well.

    Attributes:
        environ: The environ mapping (e.g. ``os.environ`` or a WSGI environ)
        custom_header: Bare variable name accepted without the HTTP_ prefix
    """

    environ: Mapping[str, Any]
    custom_header: str = DEFAULT_LANG_HEADER

    def get_headers(self) -> Mapping[str, str]:
        headers: dict[str, str] = {}
        custom = self.custom_header.lower()
        for key, value in self.environ.items():
            if key[:5] in ("HTTP_", "http_"):
                headers[key[5:].lower()] = value
            elif key.lower() == custom:
                headers[custom] = value
        return headers


@dataclass(frozen=True, slots=True)
class RequestSignals:
    """Immutable bundle of the request-scoped language signals.

    Every field is optional; an empty RequestSignals resolves to the forced
    and fallback languages only. Values that are not strings (for example a
    list from a repeated query parameter) are ignored by the resolver.

    Attributes:
        headers: Source of request headers (custom header, Accept-Language)
        query: Query-string parameters
        session: Session-stored values
        cookies: Cookie values
        accept_language: Explicit Accept-Language value. When None the
            resolver reads the ``accept_language`` entry of ``headers``.
    """

    headers: HeaderSource = field(default_factory=MappingHeaderSource)
    query: Mapping[str, Any] = _EMPTY
    session: Mapping[str, Any] = _EMPTY
    cookies: Mapping[str, Any] = _EMPTY
    accept_language: str | None = None

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, Any],
        session: Mapping[str, Any] | None = None,
        *,
        custom_header: str = DEFAULT_LANG_HEADER,
    ) -> RequestSignals:
        """Build signals from a WSGI environ.

        Query parameters come from ``QUERY_STRING`` (the last occurrence of a
        repeated parameter wins), cookies from ``HTTP_COOKIE`` and the
        preference header from ``HTTP_ACCEPT_LANGUAGE``.

        Args:
            environ: WSGI environ of the current request
            session: Session mapping, if the host keeps one
            custom_header: Name of the custom current-language header

        Returns:
            RequestSignals for the request

        Example:
            >>> signals = RequestSignals.from_environ(
            ...     {"QUERY_STRING": "lang=fr", "HTTP_ACCEPT_LANGUAGE": "nl,en;q=0.5"}
            ... )
            >>> signals.query["lang"]
            'fr'
        """
        query = dict(parse_qsl(environ.get("QUERY_STRING", ""), keep_blank_values=True))

        cookies: dict[str, str] = {}
        raw_cookie = environ.get("HTTP_COOKIE")
        if raw_cookie:
            jar: SimpleCookie = SimpleCookie()
            jar.load(raw_cookie)
            cookies = {name: morsel.value for name, morsel in jar.items()}

        return cls(
            headers=EnvironHeaderSource(environ, custom_header=custom_header),
            query=query,
            session=session if session is not None else _EMPTY,
            cookies=cookies,
            accept_language=environ.get("HTTP_ACCEPT_LANGUAGE"),
        )
