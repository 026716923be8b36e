from .fetch import ARCHIVE_URL, PAGES_BASE_URL, fetch_bytes, fetch_page, page_url
from .freshness import MAX_CACHE_AGE, is_stale
from .updater import clear_cache, extract_archive, update_cache

__all__ = [
    "ARCHIVE_URL",
    "MAX_CACHE_AGE",
    "PAGES_BASE_URL",
    "clear_cache",
    "extract_archive",
    "fetch_bytes",
    "fetch_page",
    "is_stale",
    "page_url",
    "update_cache",
]
