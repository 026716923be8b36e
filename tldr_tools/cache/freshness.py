from __future__ import annotations

import time
from datetime import timedelta
from pathlib import Path
from typing import Optional

MAX_CACHE_AGE = timedelta(days=14)


def is_stale(
    marker: Path,
    max_age: timedelta = MAX_CACHE_AGE,
    now: Optional[float] = None,
) -> bool:
    """Return True when the marker is missing, unreadable or older than ``max_age``."""

    try:
        modified = marker.stat().st_mtime
    except OSError:
        return True
    current = time.time() if now is None else now
    return current - modified > max_age.total_seconds()
