from __future__ import annotations

from typing import Callable, Optional, Tuple
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .. import __version__
from ..config import Settings
from ..pages.cascade import search_order
from ..pages.types import NetworkFailure, PageLocation
from ..utils import debug

PAGES_BASE_URL = "https://raw.githubusercontent.com/tldr-pages/tldr/main"
ARCHIVE_URL = "https://github.com/tldr-pages/tldr/releases/latest/download/tldr.zip"
USER_AGENT = f"tldr-tools/{__version__} (+https://github.com/tldr-pages/tldr)"

Fetcher = Callable[[str, float], bytes]


def fetch_bytes(url: str, timeout: float = 30.0) -> bytes:
    """Download ``url`` in a single GET request."""

    request = Request(url, headers={"User-Agent": USER_AGENT})
    try:
        with urlopen(request, timeout=timeout) as response:
            return response.read()
    except HTTPError as exc:
        raise NetworkFailure(url, f"HTTP {exc.code}", code=exc.code) from exc
    except URLError as exc:
        raise NetworkFailure(url, exc.reason) from exc
    except OSError as exc:
        raise NetworkFailure(url, exc) from exc


def page_url(command: str, platform: str, language: str) -> str:
    return f"{PAGES_BASE_URL}/{language}/{platform}/{command}.md"


def fetch_page(
    command: str,
    settings: Settings,
    fetcher: Fetcher = fetch_bytes,
) -> Optional[Tuple[PageLocation, str]]:
    """Fetch a page straight from the upstream repository, bypassing the cache.

    Only a 404 moves on to the next candidate; any other failure ends the
    search as not found.
    """

    for platform, language in search_order(settings):
        url = page_url(command, platform, language)
        try:
            payload = fetcher(url, settings.timeout)
        except NetworkFailure as exc:
            debug(settings, str(exc))
            if exc.code == 404:
                continue
            return None
        location = PageLocation(command, platform, language, url=url)
        return location, payload.decode("utf-8", errors="replace")
    return None
