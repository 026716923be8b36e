from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Mapping, TextIO

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .config import Settings

FALSE_VALUES = frozenset({"", "0", "false", "no", "off"})


def env_flag(environ: Mapping[str, str], name: str) -> bool:
    """Return True when the environment variable is set to a truthy value."""

    return environ.get(name, "").strip().lower() not in FALSE_VALUES


def normalize_command(text: str) -> str:
    """Lowercase a command name and join its words with dashes."""

    return "-".join(text.strip().lower().split())


def debug(settings: "Settings", message: str, stream: TextIO | None = None) -> None:
    if not settings.debug:
        return
    (stream or sys.stderr).write(f"tldr: debug: {message}\n")


def warn(message: str, stream: TextIO | None = None) -> None:
    (stream or sys.stderr).write(f"tldr: {message}\n")
