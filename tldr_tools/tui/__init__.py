from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from ..config import Settings


def launch_browser(settings: "Settings") -> int:
    try:
        from .app import PageBrowserApp
    except ImportError as exc:  # pragma: no cover - textual missing
        raise RuntimeError(
            "The Textual dependency is required for the tldr page browser. "
            "Install with `pip install textual`."
        ) from exc

    app = PageBrowserApp(settings)
    try:
        app.run()
    except KeyboardInterrupt:
        return 130
    return 0


__all__ = ["launch_browser"]
