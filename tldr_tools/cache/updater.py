from __future__ import annotations

import io
import shutil
import zipfile
from pathlib import Path

from ..config import Settings
from ..pages.types import ExtractionFailure, TldrError
from ..utils import debug
from .fetch import ARCHIVE_URL, Fetcher, fetch_bytes


def extract_archive(payload: bytes, destination: Path, *, label: Path | None = None) -> int:
    """Unpack a zip payload over ``destination``; return the number of members written."""

    archive_label = label or destination / "tldr.zip"
    try:
        destination.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(io.BytesIO(payload)) as archive:
            members = archive.namelist()
            root = destination.resolve()
            for member in members:
                target = (destination / member).resolve()
                if target != root and root not in target.parents:
                    raise ExtractionFailure(archive_label, f"unsafe member path {member!r}")
            archive.extractall(destination)
    except zipfile.BadZipFile as exc:
        raise ExtractionFailure(archive_label, exc) from exc
    except OSError as exc:
        raise ExtractionFailure(archive_label, exc) from exc
    return len(members)


def update_cache(settings: Settings, fetcher: Fetcher = fetch_bytes) -> int:
    """Download the page archive and refresh the cached corpus.

    The freshness marker is only touched after a successful extraction, so a
    failed update is retried on the next run.
    """

    debug(settings, f"downloading {ARCHIVE_URL}")
    payload = fetcher(ARCHIVE_URL, settings.timeout)
    count = extract_archive(payload, settings.page_source, label=Path(ARCHIVE_URL.rsplit("/", 1)[-1]))
    try:
        settings.index_marker.touch()
    except OSError as exc:
        raise ExtractionFailure(settings.index_marker, exc) from exc
    debug(settings, f"extracted {count} entries into {settings.page_source}")
    return count


def clear_cache(settings: Settings) -> bool:
    """Remove the downloaded corpus; local overrides are kept."""

    if not settings.page_source.exists():
        return False
    try:
        shutil.rmtree(settings.page_source)
    except OSError as exc:
        raise TldrError(f"could not remove {settings.page_source}: {exc}") from exc
    return True
