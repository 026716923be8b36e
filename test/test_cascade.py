from __future__ import annotations

from pathlib import Path

from tldr_tools.config import Settings
from tldr_tools.pages import PageResolver, language_candidates, platform_candidates, resolve, search_order
from tldr_tools.pages.cascade import normalize_locale


def _settings(tmp_path: Path, **changes) -> Settings:
    return Settings(cache_root=tmp_path / "cache", **changes)


def _write_page(settings: Settings, language: str, platform: str, command: str) -> Path:
    path = settings.page_source / language / platform / f"{command}.md"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"# {command}\n", encoding="utf-8")
    return path


def _write_local(settings: Settings, command: str) -> Path:
    path = settings.local_root / f"{command}.md"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("# mine\n", encoding="utf-8")
    return path


def test_local_override_always_wins(tmp_path: Path) -> None:
    for platform in ("linux", "osx", "windows"):
        settings = _settings(tmp_path, preferred_platform=platform, language_override="fr")
        _write_page(settings, "pages.fr", platform, "tar")
        local = _write_local(settings, "tar")

        assert resolve("tar", settings) == local
        assert PageResolver(settings).resolve("tar").is_local_override


def test_preferred_platform_before_common(tmp_path: Path) -> None:
    settings = _settings(tmp_path, preferred_platform="osx")
    _write_page(settings, "pages", "common", "say")
    osx = _write_page(settings, "pages", "osx", "say")

    assert resolve("say", settings) == osx


def test_platform_is_tried_before_language(tmp_path: Path) -> None:
    settings = _settings(tmp_path, preferred_platform="osx", language_list="fr")
    _write_page(settings, "pages.fr", "common", "open")
    english_osx = _write_page(settings, "pages", "osx", "open")

    assert resolve("open", settings) == english_osx


def test_language_cascade_within_a_platform(tmp_path: Path) -> None:
    settings = _settings(tmp_path, preferred_platform="linux", language_list="de:fr")
    _write_page(settings, "pages", "linux", "ls")
    french = _write_page(settings, "pages.fr", "linux", "ls")

    assert resolve("ls", settings) == french


def test_explicit_language_has_no_default_fallback(tmp_path: Path) -> None:
    settings = _settings(tmp_path, language_override="de")
    _write_page(settings, "pages", "common", "tar")

    assert language_candidates("de", "fr", "fr_FR.UTF-8") == ["pages.de"]
    assert resolve("tar", settings) is None


def test_falls_back_to_later_platforms(tmp_path: Path) -> None:
    settings = _settings(tmp_path, preferred_platform="linux")
    found = _write_page(settings, "pages", "windows", "dir")

    location = PageResolver(settings).resolve("dir")

    assert location.path == found
    assert location.platform == "windows"
    assert location.language_dir == "pages"


def test_missing_page_returns_none(tmp_path: Path) -> None:
    assert resolve("nope", _settings(tmp_path)) is None


def test_language_candidates_from_locale() -> None:
    assert language_candidates(None, "fr:de", "es_ES.utf8") == [
        "pages.fr",
        "pages.de",
        "pages.es_ES",
        "pages",
    ]


def test_language_candidates_skip_posix_locales() -> None:
    assert language_candidates(None, "C:fr", "POSIX") == ["pages.fr", "pages"]
    assert language_candidates(None, "", "C.UTF-8") == ["pages"]


def test_language_candidates_without_locale() -> None:
    assert language_candidates(None) == ["pages"]


def test_normalize_locale() -> None:
    assert normalize_locale("pt_BR.UTF-8") == "pt_BR"
    assert normalize_locale("de_DE@euro") == "de_DE"
    assert normalize_locale("fr") == "fr"


def test_platform_candidates_order() -> None:
    assert platform_candidates("osx") == ["osx", "common", "linux", "windows", "sunos", "android"]
    assert platform_candidates("common") == ["common", "linux", "osx", "windows", "sunos", "android"]


def test_search_order_exhausts_languages_per_platform(tmp_path: Path) -> None:
    settings = _settings(tmp_path, preferred_platform="sunos", language_list="fr")

    order = list(search_order(settings))

    assert order[:4] == [
        ("sunos", "pages.fr"),
        ("sunos", "pages"),
        ("common", "pages.fr"),
        ("common", "pages"),
    ]
    platforms = [platform for platform, _ in order]
    for index, platform in enumerate(platforms[1:], start=1):
        if platform != platforms[index - 1]:
            assert platform not in platforms[:index]
