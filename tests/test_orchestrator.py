"""Tests for the I18n orchestrator: configuration, init() and lookups.

Python 3.13+.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from langcache import (
    I18n,
    I18nError,
    InvalidKeyError,
    MissingSourceError,
    NoLanguageFoundError,
    ReconfigurationError,
    RequestSignals,
    UnknownKeyError,
)
from langcache.compilation import compiler_hash
from langcache.enums import InitState


def _i18n(lang_dir: Path, cache_dir: Path, **signals: object) -> I18n:
    i18n = I18n(str(lang_dir / "{LANGUAGE}.ini"), str(cache_dir), "en-US")
    if signals:
        i18n.set_signals(RequestSignals(**signals))  # type: ignore[arg-type]
    return i18n


class TestConfiguration:
    """Constructor defaults and pre-init setters."""

    def test_defaults(self) -> None:
        i18n = I18n()
        assert i18n.file_path == "./lang/{LANGUAGE}.ini"
        assert i18n.cache_path == "./langcache/"
        assert i18n.fallback_lang == "en-US"
        assert i18n.lang_variant_enabled is True
        assert i18n.merge_fallback is False
        assert i18n.forced_lang is None
        assert i18n.section_separator == "_"
        assert i18n.state is InitState.UNCONFIGURED
        assert i18n.applied_lang is None
        assert i18n.user_langs == ()

    def test_file_path_requires_placeholder(self) -> None:
        with pytest.raises(ValueError, match="LANGUAGE"):
            I18n("lang/en.ini")

    def test_placeholder_in_directory_only_rejected(self) -> None:
        i18n = I18n()
        with pytest.raises(ValueError):
            i18n.set_file_path("lang/{LANGUAGE}/strings.ini")

    def test_setters_before_init(self) -> None:
        i18n = I18n()
        i18n.set_file_path("l10n/{LANGUAGE}.json")
        i18n.set_cache_path("/tmp/compiled")
        i18n.set_fallback_lang("de")
        i18n.set_forced_lang("fr")
        i18n.set_lang_variant_enabled(False)
        i18n.set_merge_fallback(True)
        i18n.set_section_separator(".")

        assert i18n.file_path == "l10n/{LANGUAGE}.json"
        assert i18n.cache_path == "/tmp/compiled"
        assert i18n.fallback_lang == "de"
        assert i18n.forced_lang == "fr"
        assert i18n.lang_variant_enabled is False
        assert i18n.merge_fallback is True
        assert i18n.section_separator == "."

    def test_misspelled_separator_setter_warns(self) -> None:
        i18n = I18n()
        with pytest.warns(DeprecationWarning, match="set_section_separator"):
            i18n.set_section_seperator("ABC")
        assert i18n.section_separator == "ABC"

    def test_custom_param_and_header_names(self) -> None:
        i18n = I18n()
        i18n.set_lang_param("locale")
        i18n.set_lang_header("x_language")
        signals = RequestSignals(query={"locale": "sv", "lang": "fr"})
        assert i18n.get_user_langs(signals) == ("sv", "en-US")


class TestInit:
    """init() picks the applied language and compiles every language."""

    def test_no_signals_applies_fallback(self, lang_dir: Path, cache_dir: Path) -> None:
        i18n = _i18n(lang_dir, cache_dir)
        i18n.init()

        assert i18n.is_initialized
        assert i18n.applied_lang == "en-US"
        assert i18n.user_langs == ("en-US",)
        assert i18n.t("greeting") == "Hello, World!"

    def test_query_selects_language(self, lang_dir: Path, cache_dir: Path) -> None:
        i18n = _i18n(lang_dir, cache_dir, query={"lang": "zh-CN"})
        i18n.init()

        assert i18n.applied_lang == "zh-CN"
        assert i18n.user_langs == ("zh-CN", "en-US")
        assert i18n.t("greeting") == "世界，你好！"
        assert i18n.t("menu_item1") == "菜单 1"
        assert i18n.t("welcome", "Li") == "欢迎，Li！"

    def test_first_candidate_with_file_wins(self, lang_dir: Path, cache_dir: Path) -> None:
        i18n = _i18n(lang_dir, cache_dir, query={"lang": "fr"}, session={"lang": "zh-CN"})
        i18n.init()
        assert i18n.user_langs == ("fr", "zh-CN", "en-US")
        assert i18n.applied_lang == "zh-CN"

    def test_forced_language_beats_signals(self, lang_dir: Path, cache_dir: Path) -> None:
        i18n = _i18n(lang_dir, cache_dir, query={"lang": "zh-CN"})
        i18n.set_forced_lang("en-US")
        i18n.init()
        assert i18n.applied_lang == "en-US"

    def test_every_discovered_language_compiled(self, lang_dir: Path, cache_dir: Path) -> None:
        i18n = _i18n(lang_dir, cache_dir)
        i18n.init()

        assert i18n.languages == ("en-US", "zh-CN")
        for language in i18n.languages:
            assert (cache_dir / f"langcache_{compiler_hash()}_{language}.cache").is_file()

    def test_cache_reused_by_next_request(self, lang_dir: Path, cache_dir: Path) -> None:
        _i18n(lang_dir, cache_dir).init()
        artifact = cache_dir / f"langcache_{compiler_hash()}_en-US.cache"
        first_mtime = artifact.stat().st_mtime_ns

        second = _i18n(lang_dir, cache_dir, query={"lang": "zh-CN"})
        second.init()
        assert artifact.stat().st_mtime_ns == first_mtime
        assert second.load("en-US").t("farewell") == "Goodbye, World!"

    def test_variants_disabled(self, lang_dir: Path, cache_dir: Path) -> None:
        (lang_dir / "de.ini").write_text('greeting = "Hallo, Welt!"\n', encoding="utf-8")
        i18n = _i18n(lang_dir, cache_dir, query={"lang": "de-AT"})
        i18n.set_lang_variant_enabled(False)
        i18n.init()

        assert i18n.user_langs == ("de", "en")
        assert i18n.applied_lang == "de"
        assert i18n.t("greeting") == "Hallo, Welt!"

    def test_environ_signals(self, lang_dir: Path, cache_dir: Path) -> None:
        environ = {
            "QUERY_STRING": "page=2",
            "HTTP_COOKIE": "lang=zh-CN",
            "HTTP_ACCEPT_LANGUAGE": "fr-FR,fr;q=0.8",
        }
        i18n = _i18n(lang_dir, cache_dir)
        i18n.set_signals(RequestSignals.from_environ(environ))
        i18n.init()

        assert i18n.user_langs == ("fr-fr", "fr", "zh-CN", "en-US")
        assert i18n.applied_lang == "zh-CN"

    def test_custom_separator(self, lang_dir: Path, cache_dir: Path) -> None:
        i18n = _i18n(lang_dir, cache_dir)
        i18n.set_section_separator("ABC")
        i18n.init()
        assert i18n.t("menuABCitem2") == "Item 2"

    def test_applied_locale(self, lang_dir: Path, cache_dir: Path) -> None:
        i18n = _i18n(lang_dir, cache_dir, query={"lang": "zh-CN"})
        i18n.init()
        assert i18n.applied_locale.language == "zh"


class TestFallbackMerge:
    """Missing strings come from the fallback language when merging."""

    def test_missing_key_filled(self, lang_dir: Path, cache_dir: Path) -> None:
        i18n = _i18n(lang_dir, cache_dir, query={"lang": "zh-CN"})
        i18n.set_merge_fallback(True)
        i18n.init()

        assert i18n.t("greeting") == "世界，你好！"
        assert i18n.t("farewell") == "Goodbye, World!"
        assert i18n.t("items", 5) == "5 items"

    def test_missing_key_without_merge(self, lang_dir: Path, cache_dir: Path) -> None:
        i18n = _i18n(lang_dir, cache_dir, query={"lang": "zh-CN"})
        i18n.init()
        with pytest.raises(UnknownKeyError):
            i18n.t("farewell")


class TestInitFailures:
    """Errors raised from init() and the state they leave behind."""

    def test_no_language_found(self, lang_dir: Path, cache_dir: Path) -> None:
        i18n = _i18n(lang_dir, cache_dir, query={"lang": "fr"})
        i18n.set_fallback_lang("it")

        with pytest.raises(NoLanguageFoundError) as exc_info:
            i18n.init()
        assert exc_info.value.candidates == ("fr", "it")
        assert i18n.state is InitState.UNCONFIGURED
        assert not cache_dir.exists()

    def test_failed_init_can_be_reconfigured(self, lang_dir: Path, cache_dir: Path) -> None:
        i18n = _i18n(lang_dir, cache_dir)
        i18n.set_fallback_lang("it")
        with pytest.raises(NoLanguageFoundError):
            i18n.init()

        i18n.set_fallback_lang("en-US")
        i18n.init()
        assert i18n.applied_lang == "en-US"

    def test_invalid_key_in_any_language(self, lang_dir: Path, cache_dir: Path) -> None:
        (lang_dir / "de.ini").write_text('bad-key = "x"\n', encoding="utf-8")
        i18n = _i18n(lang_dir, cache_dir)

        with pytest.raises(InvalidKeyError, match="bad-key"):
            i18n.init()
        assert not i18n.is_initialized

    def test_merge_with_missing_fallback_source(self, lang_dir: Path, cache_dir: Path) -> None:
        i18n = _i18n(lang_dir, cache_dir, query={"lang": "zh-CN"})
        i18n.set_fallback_lang("it")
        i18n.set_merge_fallback(True)

        with pytest.raises(MissingSourceError) as exc_info:
            i18n.init()
        assert exc_info.value.path == lang_dir / "it.ini"
        assert isinstance(exc_info.value, I18nError)
        assert not i18n.is_initialized

    def test_lookup_before_init(self) -> None:
        i18n = I18n()
        with pytest.raises(RuntimeError, match="init"):
            i18n.t("greeting")
        with pytest.raises(RuntimeError):
            _ = i18n.applied_locale


class TestFrozenAfterInit:
    """Every mutator raises once the object is initialized."""

    @pytest.fixture
    def initialized(self, lang_dir: Path, cache_dir: Path) -> I18n:
        i18n = _i18n(lang_dir, cache_dir)
        i18n.init()
        return i18n

    @pytest.mark.parametrize(
        ("method", "value"),
        [
            ("set_file_path", "x/{LANGUAGE}.ini"),
            ("set_cache_path", "x/"),
            ("set_lang_variant_enabled", False),
            ("set_fallback_lang", "de"),
            ("set_merge_fallback", True),
            ("set_forced_lang", "de"),
            ("set_section_separator", "."),
            ("set_lang_param", "locale"),
            ("set_lang_header", "x_lang"),
            ("set_signals", RequestSignals()),
        ],
    )
    def test_mutators_raise(self, initialized: I18n, method: str, value: object) -> None:
        with pytest.raises(ReconfigurationError, match="already initialized"):
            getattr(initialized, method)(value)

    def test_second_init_raises(self, initialized: I18n) -> None:
        with pytest.raises(ReconfigurationError):
            initialized.init()

    def test_settings_unchanged_after_rejection(self, initialized: I18n) -> None:
        with pytest.raises(ReconfigurationError):
            initialized.set_fallback_lang("de")
        assert initialized.fallback_lang == "en-US"


class TestLoading:
    """Handles and registries obtained after init()."""

    def test_load_defaults_to_applied(self, lang_dir: Path, cache_dir: Path) -> None:
        i18n = _i18n(lang_dir, cache_dir, query={"lang": "zh-CN"})
        i18n.init()
        assert i18n.load().language == "zh-CN"
        assert i18n.load() is i18n.load()

    def test_other_language_handles_coexist(self, lang_dir: Path, cache_dir: Path) -> None:
        i18n = _i18n(lang_dir, cache_dir, query={"lang": "zh-CN"})
        i18n.init()

        english = i18n.load("en-US")
        assert english.t("greeting") == "Hello, World!"
        assert i18n.t("greeting") == "世界，你好！"
        assert english.t("greeting") == "Hello, World!"

    def test_independent_registries(self, lang_dir: Path, cache_dir: Path) -> None:
        i18n = _i18n(lang_dir, cache_dir)
        i18n.init()

        first = i18n.registry()
        second = i18n.registry()
        first.load("zh-CN")
        second.load("en-US")
        assert first.t("menu_item1") == "菜单 1"
        assert second.t("menu_item1") == "Item 1"


class TestDiscovery:
    """Languages found next to the source template."""

    def test_unrelated_files_ignored(self, lang_dir: Path, cache_dir: Path) -> None:
        (lang_dir / "README.md").write_text("docs", encoding="utf-8")
        (lang_dir / "de.json").write_text("{}", encoding="utf-8")
        (lang_dir / "fr.ini").mkdir()
        assert _i18n(lang_dir, cache_dir).discover_languages() == ("en-US", "zh-CN")

    def test_template_prefix(self, lang_dir: Path, cache_dir: Path) -> None:
        (lang_dir / "site-de.ini").write_text('greeting = "Hallo"\n', encoding="utf-8")
        i18n = I18n(str(lang_dir / "site-{LANGUAGE}.ini"), str(cache_dir))
        assert i18n.discover_languages() == ("de",)

    def test_missing_directory(self, tmp_path: Path, cache_dir: Path) -> None:
        i18n = I18n(str(tmp_path / "absent" / "{LANGUAGE}.ini"), str(cache_dir))
        assert i18n.discover_languages() == ()

    def test_source_path(self) -> None:
        assert I18n("lang/{LANGUAGE}.ini").source_path("de") == Path("lang/de.ini")
