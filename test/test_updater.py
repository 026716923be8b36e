from __future__ import annotations

import io
import zipfile
from pathlib import Path
from urllib.error import HTTPError

import pytest

from tldr_tools.cache import ARCHIVE_URL, PAGES_BASE_URL, clear_cache, fetch_page, is_stale, update_cache
from tldr_tools.cache import fetch as fetch_module
from tldr_tools.cache import updater as updater_module
from tldr_tools.config import Settings
from tldr_tools.pages import ExtractionFailure, NetworkFailure, TldrError


def make_archive(files: dict[str, str]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, text in files.items():
            archive.writestr(name, text)
    return buffer.getvalue()


def test_update_cache_extracts_archive_and_touches_marker(tmp_path: Path) -> None:
    settings = Settings(cache_root=tmp_path)
    payload = make_archive({"pages/common/tar.md": "# tar\n", "pages.fr/linux/ls.md": "# ls\n"})
    requested: list[str] = []

    def fetcher(url: str, timeout: float) -> bytes:
        requested.append(url)
        return payload

    count = update_cache(settings, fetcher=fetcher)

    assert requested == [ARCHIVE_URL]
    assert count == 2
    assert (settings.page_source / "pages" / "common" / "tar.md").read_text(encoding="utf-8") == "# tar\n"
    assert (settings.page_source / "pages.fr" / "linux" / "ls.md").is_file()
    assert not is_stale(settings.index_marker)


def test_update_overwrites_existing_pages(tmp_path: Path) -> None:
    settings = Settings(cache_root=tmp_path)
    page = settings.page_source / "pages" / "common" / "tar.md"
    page.parent.mkdir(parents=True)
    page.write_text("old", encoding="utf-8")

    update_cache(settings, fetcher=lambda url, timeout: make_archive({"pages/common/tar.md": "new"}))

    assert page.read_text(encoding="utf-8") == "new"


def test_bad_archive_leaves_marker_untouched(tmp_path: Path) -> None:
    settings = Settings(cache_root=tmp_path)

    with pytest.raises(ExtractionFailure):
        update_cache(settings, fetcher=lambda url, timeout: b"not a zip")

    assert not settings.index_marker.exists()
    assert is_stale(settings.index_marker)


def test_archive_members_outside_destination_are_rejected(tmp_path: Path) -> None:
    settings = Settings(cache_root=tmp_path / "cache")

    with pytest.raises(ExtractionFailure):
        update_cache(settings, fetcher=lambda url, timeout: make_archive({"../evil.md": "x"}))

    assert not (tmp_path / "evil.md").exists()


def test_network_failure_propagates_from_update(tmp_path: Path) -> None:
    def fetcher(url: str, timeout: float) -> bytes:
        raise NetworkFailure(url, "offline")

    with pytest.raises(NetworkFailure):
        update_cache(Settings(cache_root=tmp_path), fetcher=fetcher)


def test_clear_cache_keeps_local_overrides(tmp_path: Path) -> None:
    settings = Settings(cache_root=tmp_path)
    (settings.page_source / "pages").mkdir(parents=True)
    settings.local_root.mkdir()
    (settings.local_root / "mine.md").write_text("# mine\n", encoding="utf-8")

    assert clear_cache(settings)
    assert not settings.page_source.exists()
    assert (settings.local_root / "mine.md").is_file()
    assert not clear_cache(settings)


def test_fetch_page_walks_platforms_then_languages(tmp_path: Path) -> None:
    settings = Settings(cache_root=tmp_path, preferred_platform="osx", language_list="fr")
    requested: list[str] = []
    target = f"{PAGES_BASE_URL}/pages/common/tar.md"

    def fetcher(url: str, timeout: float) -> bytes:
        requested.append(url)
        if url != target:
            raise NetworkFailure(url, "HTTP 404", code=404)
        return b"# tar\n"

    location, text = fetch_page("tar", settings, fetcher=fetcher)

    assert requested == [
        f"{PAGES_BASE_URL}/pages.fr/osx/tar.md",
        f"{PAGES_BASE_URL}/pages/osx/tar.md",
        f"{PAGES_BASE_URL}/pages.fr/common/tar.md",
        target,
    ]
    assert text == "# tar\n"
    assert location.platform == "common"
    assert location.url == target


def test_fetch_page_returns_none_when_every_attempt_fails(tmp_path: Path) -> None:
    def fetcher(url: str, timeout: float) -> bytes:
        raise NetworkFailure(url, "offline")

    assert fetch_page("tar", Settings(cache_root=tmp_path), fetcher=fetcher) is None


def test_fetch_page_stops_after_a_connection_failure(tmp_path: Path) -> None:
    settings = Settings(cache_root=tmp_path, language_list="fr:de", primary_locale="es_ES.UTF-8")
    requested: list[str] = []

    def fetcher(url: str, timeout: float) -> bytes:
        requested.append(url)
        raise NetworkFailure(url, "[Errno -3] Temporary failure in name resolution")

    assert fetch_page("tar", settings, fetcher=fetcher) is None
    assert len(requested) == 1


def test_fetch_bytes_keeps_http_status(monkeypatch) -> None:
    def fake_urlopen(request, timeout):
        raise HTTPError(request.full_url, 404, "Not Found", None, None)

    monkeypatch.setattr(fetch_module, "urlopen", fake_urlopen)

    with pytest.raises(NetworkFailure) as excinfo:
        fetch_module.fetch_bytes("https://example.invalid/page.md")

    assert excinfo.value.code == 404


def test_clear_cache_reports_removal_errors(tmp_path: Path, monkeypatch) -> None:
    settings = Settings(cache_root=tmp_path)
    settings.page_source.mkdir(parents=True)

    def fail(path):
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr(updater_module.shutil, "rmtree", fail)

    with pytest.raises(TldrError):
        clear_cache(settings)
