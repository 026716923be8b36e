from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class TldrError(RuntimeError):
    """Base class for errors raised while locating or refreshing pages."""


class PageNotFound(TldrError):
    """Raised when no cached or remote page exists for a command."""

    def __init__(self, command: str, platform: Optional[str] = None) -> None:
        self.command = command
        self.platform = platform
        super().__init__(f"page not found: {command}")


class NetworkFailure(TldrError):
    """Raised when a download cannot be completed."""

    def __init__(self, url: str, reason: object, code: Optional[int] = None) -> None:
        self.url = url
        self.reason = reason
        self.code = code
        super().__init__(f"could not fetch {url}: {reason}")


class ExtractionFailure(TldrError):
    """Raised when the page archive cannot be unpacked into the cache."""

    def __init__(self, archive: Path, reason: object) -> None:
        self.archive = archive
        self.reason = reason
        super().__init__(f"could not extract {archive}: {reason}")


@dataclass(frozen=True)
class PageLocation:
    """Where a page was found: a cached file or a remote URL."""

    command: str
    platform: str
    language_dir: str
    path: Optional[Path] = None
    url: Optional[str] = None

    @property
    def is_local_override(self) -> bool:
        return self.platform == "local"
