"""I18n: configuration, initialization, and access to compiled languages.

Lifecycle:
    UNCONFIGURED -> init() -> INITIALIZED

While UNCONFIGURED every setting may change. init() then:
    1. discovers the available languages next to the source file template
    2. resolves the visitor's candidate languages
    3. picks the first candidate with an existing source file as the applied
       language (NoLanguageFoundError if none has one)
    4. ensures a fresh compiled artifact for every discovered language

Once INITIALIZED the configuration is frozen: every mutator raises
ReconfigurationError. A failed init() leaves the object UNCONFIGURED.

Python 3.13+.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from langcache.compilation.cache import CacheManager
from langcache.compilation.compiler import TranslationCompiler
from langcache.compilation.loader import ConfigLoader, FileConfigLoader
from langcache.constants import (
    DEFAULT_CACHE_PATH,
    DEFAULT_FALLBACK_LANG,
    DEFAULT_FILE_PATH,
    DEFAULT_LANG_HEADER,
    DEFAULT_LANG_PARAM,
    DEFAULT_SECTION_SEPARATOR,
    LANGUAGE_PLACEHOLDER,
)
from langcache.deprecation import deprecated
from langcache.diagnostics.errors import NoLanguageFoundError, ReconfigurationError
from langcache.enums import InitState
from langcache.locale_utils import get_babel_locale
from langcache.localization.types import CandidateList, LanguageCode
from langcache.negotiation.resolver import LanguageResolver
from langcache.negotiation.signals import RequestSignals
from langcache.runtime.registry import LanguageHandle, TranslationRegistry

if TYPE_CHECKING:
    from babel import Locale

__all__ = ["I18n"]

logger = logging.getLogger(__name__)


def _validate_file_path(file_path: str) -> None:
    # Without the placeholder every language would map to the same file
    if LANGUAGE_PLACEHOLDER not in Path(file_path).name:
        msg = (
            f"file_path must contain '{LANGUAGE_PLACEHOLDER}' in its file name, "
            f"got: '{file_path}'"
        )
        raise ValueError(msg)


class I18n:
    """Language negotiation plus compiled-translation cache for one site.

    Example:
        >>> i18n = I18n("lang/{LANGUAGE}.ini", "langcache/", "en-US")
        >>> i18n.set_merge_fallback(True)
        >>> i18n.set_signals(RequestSignals.from_environ(environ, session))
        >>> i18n.init()
        >>> i18n.applied_lang
        'zh-CN'
        >>> i18n.t("greeting")
        '世界，你好！'
        >>> i18n.load("en-US").t("greeting")
        'Hello, World!'
    """

    __slots__ = (
        "_applied_lang",
        "_cache",
        "_cache_path",
        "_fallback_lang",
        "_file_path",
        "_forced_lang",
        "_lang_header",
        "_lang_param",
        "_languages",
        "_loader",
        "_merge_fallback",
        "_registry",
        "_section_separator",
        "_signals",
        "_state",
        "_user_langs",
        "_variant_enabled",
    )

    def __init__(
        self,
        file_path: str | None = None,
        cache_path: str | None = None,
        fallback_lang: LanguageCode | None = None,
        *,
        signals: RequestSignals | None = None,
        loader: ConfigLoader | None = None,
    ) -> None:
        """Configure an I18n object. All arguments are optional.

        Args:
            file_path: Source file template containing ``{LANGUAGE}``
                (default: ``./lang/{LANGUAGE}.ini``)
            cache_path: Directory for compiled artifacts, no placeholders
                (default: ``./langcache/``)
            fallback_lang: Lowest-priority language; its source file should
                always exist (default: ``en-US``)
            signals: Request signals used by init() (default: none)
            loader: Source loader (default: FileConfigLoader)

        Raises:
            ValueError: If file_path lacks the ``{LANGUAGE}`` placeholder
        """
        if file_path:
            _validate_file_path(file_path)

        self._file_path = file_path or DEFAULT_FILE_PATH
        self._cache_path = cache_path or DEFAULT_CACHE_PATH
        self._fallback_lang: LanguageCode = fallback_lang or DEFAULT_FALLBACK_LANG
        self._variant_enabled = True
        self._merge_fallback = False
        self._forced_lang: LanguageCode | None = None
        self._section_separator = DEFAULT_SECTION_SEPARATOR
        self._lang_param = DEFAULT_LANG_PARAM
        self._lang_header = DEFAULT_LANG_HEADER
        self._signals = signals if signals is not None else RequestSignals()
        self._loader: ConfigLoader = loader if loader is not None else FileConfigLoader()

        self._state = InitState.UNCONFIGURED
        self._user_langs: CandidateList = ()
        self._languages: tuple[LanguageCode, ...] = ()
        self._applied_lang: LanguageCode | None = None
        self._cache: CacheManager | None = None
        self._registry: TranslationRegistry | None = None

    def __repr__(self) -> str:
        return (
            f"I18n(file_path={self._file_path!r}, cache_path={self._cache_path!r}, "
            f"state={self._state.value}, applied_lang={self._applied_lang!r})"
        )

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def state(self) -> InitState:
        return self._state

    @property
    def is_initialized(self) -> bool:
        return self._state is InitState.INITIALIZED

    @property
    def applied_lang(self) -> LanguageCode | None:
        """Language chosen by init(); None before init."""
        return self._applied_lang

    @property
    def applied_locale(self) -> Locale:
        """Babel Locale for the applied language.

        Raises:
            RuntimeError: If called before init()
            babel.core.UnknownLocaleError: If Babel has no data for it
        """
        applied = self._require_initialized()
        return get_babel_locale(applied)

    @property
    def user_langs(self) -> CandidateList:
        """Candidate languages computed by init(); empty before init."""
        return self._user_langs

    @property
    def languages(self) -> tuple[LanguageCode, ...]:
        """Languages discovered by init(); empty before init."""
        return self._languages

    @property
    def file_path(self) -> str:
        return self._file_path

    @property
    def cache_path(self) -> str:
        return self._cache_path

    @property
    def fallback_lang(self) -> LanguageCode:
        return self._fallback_lang

    @property
    def forced_lang(self) -> LanguageCode | None:
        return self._forced_lang

    @property
    def lang_variant_enabled(self) -> bool:
        return self._variant_enabled

    @property
    def merge_fallback(self) -> bool:
        return self._merge_fallback

    @property
    def section_separator(self) -> str:
        return self._section_separator

    @property
    def signals(self) -> RequestSignals:
        return self._signals

    # ------------------------------------------------------------------
    # Configuration (pre-init only)
    # ------------------------------------------------------------------

    def _fail_after_init(self) -> None:
        if self.is_initialized:
            msg = (
                f"This {type(self).__name__} object is already initialized, "
                "so you can not change any settings."
            )
            raise ReconfigurationError(msg)

    def set_file_path(self, file_path: str) -> None:
        self._fail_after_init()
        _validate_file_path(file_path)
        self._file_path = file_path

    def set_cache_path(self, cache_path: str) -> None:
        self._fail_after_init()
        self._cache_path = cache_path

    def set_lang_variant_enabled(self, enabled: bool) -> None:
        """Allow region variants such as ``en-us``; when False ``en`` is used."""
        self._fail_after_init()
        self._variant_enabled = enabled

    def set_fallback_lang(self, fallback_lang: LanguageCode) -> None:
        self._fail_after_init()
        self._fallback_lang = fallback_lang

    def set_merge_fallback(self, merge_fallback: bool) -> None:
        """Merge fallback-language strings underneath every other language."""
        self._fail_after_init()
        self._merge_fallback = merge_fallback

    def set_forced_lang(self, forced_lang: LanguageCode | None) -> None:
        self._fail_after_init()
        self._forced_lang = forced_lang

    def set_section_separator(self, section_separator: str) -> None:
        """Set the string joining section and key names.

        With ``greeting`` in section ``welcomepage`` the default ``_`` gives
        ``welcomepage_greeting``; ``ABC`` would give ``welcomepageABCgreeting``.
        """
        self._fail_after_init()
        self._section_separator = section_separator

    @deprecated(removal_version="1.0.0", alternative="I18n.set_section_separator")
    def set_section_seperator(self, section_separator: str) -> None:
        """Misspelled alias of set_section_separator()."""
        self.set_section_separator(section_separator)

    def set_lang_param(self, lang_param: str) -> None:
        """Name of the query/session/cookie parameter (default ``lang``)."""
        self._fail_after_init()
        self._lang_param = lang_param

    def set_lang_header(self, lang_header: str) -> None:
        """Name of the custom language header (default ``current_language``)."""
        self._fail_after_init()
        self._lang_header = lang_header

    def set_signals(self, signals: RequestSignals) -> None:
        self._fail_after_init()
        self._signals = signals

    # ------------------------------------------------------------------
    # Negotiation and discovery
    # ------------------------------------------------------------------

    def resolver(self) -> LanguageResolver:
        """Build a LanguageResolver from the current configuration."""
        return LanguageResolver(
            fallback=self._fallback_lang,
            variant_enabled=self._variant_enabled,
            forced=self._forced_lang,
            lang_param=self._lang_param,
            lang_header=self._lang_header,
        )

    def get_user_langs(self, signals: RequestSignals | None = None) -> CandidateList:
        """Return the candidate languages, highest priority first.

        Order: forced language, custom header, query parameter, session
        parameter, Accept-Language entries, cookie, fallback. Duplicates
        keep their first position; tokens outside ``[a-zA-Z0-9_-]`` are
        dropped.

        Args:
            signals: Request signals to use instead of the configured ones
        """
        return self.resolver().resolve(signals if signals is not None else self._signals)

    def source_path(self, language: LanguageCode) -> Path:
        """Source file path for a language code."""
        return Path(self._file_path.replace(LANGUAGE_PLACEHOLDER, language))

    def discover_languages(self) -> tuple[LanguageCode, ...]:
        """List languages with a source file, sorted by code.

        A file belongs to the template when its name matches the template's
        file name around the placeholder (``{LANGUAGE}.ini`` matches
        ``zh-CN.ini`` but not ``README.md``). A missing directory yields no
        languages.
        """
        template = Path(self._file_path)
        prefix, _, suffix = template.name.partition(LANGUAGE_PLACEHOLDER)
        directory = template.parent
        if not directory.is_dir():
            return ()

        languages = []
        for entry in sorted(directory.iterdir()):
            name = entry.name
            if not entry.is_file() or len(name) <= len(prefix) + len(suffix):
                continue
            if name.startswith(prefix) and name.endswith(suffix):
                languages.append(name[len(prefix) : len(name) - len(suffix)])
        return tuple(languages)

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    def init(self) -> None:
        """Resolve the applied language and refresh every compiled artifact.

        Raises:
            ReconfigurationError: If already initialized
            NoLanguageFoundError: If no candidate has a source file
            MissingSourceError: If merging is enabled and the fallback language
                has no source file
            UnsupportedFormatError: If a source cannot be parsed
            InvalidKeyError: If a flattened key is not a valid identifier
            CacheWriteError: If the cache cannot be written
        """
        self._fail_after_init()

        languages = self.discover_languages()
        user_langs = self.get_user_langs()

        applied = next(
            (code for code in user_langs if self.source_path(code).is_file()), None
        )
        if applied is None:
            raise NoLanguageFoundError(user_langs)

        cache = CacheManager(
            self.source_path,
            self._cache_path,
            compiler=TranslationCompiler(self._section_separator),
            loader=self._loader,
            fallback_lang=self._fallback_lang,
            merge_fallback=self._merge_fallback,
        )
        cache.ensure_root()
        for language in languages:
            cache.ensure_fresh(language)
        if applied not in languages:
            # Case-insensitive filesystems match a candidate spelled unlike its file
            cache.ensure_fresh(applied)

        self._languages = languages
        self._user_langs = user_langs
        self._applied_lang = applied
        self._cache = cache
        self._registry = TranslationRegistry(cache)
        self._state = InitState.INITIALIZED

        logger.info(
            "I18n initialized: applied=%s, candidates=%s, languages=%s",
            applied,
            user_langs,
            languages,
        )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def _require_initialized(self) -> LanguageCode:
        if self._applied_lang is None or not self.is_initialized:
            msg = f"{type(self).__name__} is not initialized; call init() first"
            raise RuntimeError(msg)
        return self._applied_lang

    def registry(self) -> TranslationRegistry:
        """Create a new, independent registry over the compiled cache."""
        self._require_initialized()
        assert self._cache is not None
        return TranslationRegistry(self._cache)

    def load(self, language: LanguageCode | None = None) -> LanguageHandle:
        """Load a handle for a language (default: the applied language).

        Raises:
            RuntimeError: If called before init()
            ArtifactLoadError: If no compiled artifact exists for the language
        """
        applied = self._require_initialized()
        assert self._registry is not None
        return self._registry.load(language or applied)

    def translate(self, key: str, *args: Any) -> str:
        """Translate a key in the applied language.

        Raises:
            UnknownKeyError: If the key is not in the applied language
        """
        return self.load().translate(key, *args)

    def t(self, key: str, *args: Any) -> str:
        """Alias for :meth:`translate`."""
        return self.translate(key, *args)
