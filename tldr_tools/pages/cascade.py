from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from ..config import PLATFORMS, Settings
from .types import PageLocation

DEFAULT_LANGUAGE_DIR = "pages"
SKIPPED_LOCALES = frozenset({"C", "POSIX"})


def language_dir(code: str) -> str:
    return f"{DEFAULT_LANGUAGE_DIR}.{code}"


def normalize_locale(value: str) -> str:
    """Strip the encoding and modifier from a locale name (``es_ES.utf8`` -> ``es_ES``)."""

    return value.split(".", 1)[0].split("@", 1)[0].strip()


def platform_candidates(preferred: str) -> List[str]:
    """Return platforms in search order: the preferred one, then ``common``, then the rest."""

    ordered: List[str] = []
    for platform in (preferred, "common", *PLATFORMS):
        if platform and platform not in ordered and platform in PLATFORMS:
            ordered.append(platform)
    return ordered


def language_candidates(
    override: Optional[str],
    language_list: str = "",
    primary_locale: str = "",
) -> List[str]:
    """Return page directory names to try, most preferred first.

    An explicit override yields exactly one tagged directory and never falls
    back to the untagged default.
    """

    if override:
        return [language_dir(override)]

    if not language_list and not primary_locale:
        return [DEFAULT_LANGUAGE_DIR]

    candidates: List[str] = []
    for raw in [*language_list.split(":"), primary_locale]:
        code = normalize_locale(raw)
        if not code or code in SKIPPED_LOCALES:
            continue
        directory = language_dir(code)
        if directory not in candidates:
            candidates.append(directory)
    candidates.append(DEFAULT_LANGUAGE_DIR)
    return candidates


def search_order(settings: Settings) -> Iterator[Tuple[str, str]]:
    """Yield ``(platform, language_dir)`` pairs; platform is the outer, slower-varying key."""

    languages = language_candidates(
        settings.language_override,
        settings.language_list,
        settings.primary_locale,
    )
    for platform in platform_candidates(settings.preferred_platform):
        for language in languages:
            yield platform, language


def is_page_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


class PageResolver:
    """Search the cache for the best page: local override, then platform, then language."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def local_override(self, command: str) -> Optional[Path]:
        candidate = self.settings.local_root / f"{command}.md"
        return candidate if is_page_file(candidate) else None

    def candidates(self) -> Iterator[Tuple[str, str]]:
        return search_order(self.settings)

    def resolve(self, command: str) -> Optional[PageLocation]:
        override = self.local_override(command)
        if override is not None:
            return PageLocation(command, "local", "", path=override)

        root = self.settings.page_source
        for platform, language in self.candidates():
            path = root / language / platform / f"{command}.md"
            if is_page_file(path):
                return PageLocation(command, platform, language, path=path)
        return None


def resolve(command: str, settings: Settings) -> Optional[Path]:
    """Return the path of the best cached page for ``command``, or None."""

    location = PageResolver(settings).resolve(command)
    return location.path if location else None
