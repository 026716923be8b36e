from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from ..config import PLATFORMS, Settings
from .cascade import DEFAULT_LANGUAGE_DIR, is_page_file, platform_candidates


def _page_names(directory: Path) -> Iterable[str]:
    try:
        entries = list(directory.iterdir())
    except OSError:
        return ()
    return (entry.stem for entry in entries if entry.suffix == ".md" and is_page_file(entry))


def listing_platforms(settings: Settings) -> List[str]:
    if settings.list_all:
        return list(PLATFORMS)
    preferred = platform_candidates(settings.preferred_platform)
    return preferred[:2] if preferred[0] != "common" else preferred[:1]


def list_pages(settings: Settings) -> List[str]:
    """Return sorted unique command names, including local overrides."""

    names = set(_page_names(settings.local_root))
    default_tree = settings.page_source / DEFAULT_LANGUAGE_DIR
    for platform in listing_platforms(settings):
        names.update(_page_names(default_tree / platform))
    return sorted(names)
