from .cascade import (
    DEFAULT_LANGUAGE_DIR,
    PageResolver,
    language_candidates,
    platform_candidates,
    resolve,
    search_order,
)
from .listing import list_pages
from .types import ExtractionFailure, NetworkFailure, PageLocation, PageNotFound, TldrError

__all__ = [
    "DEFAULT_LANGUAGE_DIR",
    "ExtractionFailure",
    "NetworkFailure",
    "PageLocation",
    "PageNotFound",
    "PageResolver",
    "TldrError",
    "language_candidates",
    "list_pages",
    "platform_candidates",
    "resolve",
    "search_order",
]
