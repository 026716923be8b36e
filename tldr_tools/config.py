from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping, Optional, Tuple

from .utils import env_flag

PLATFORMS: Tuple[str, ...] = ("common", "linux", "osx", "windows", "sunos", "android")
COLOR_MODES: Tuple[str, ...] = ("auto", "always", "never")

CACHE_HOME_ENV = "TLDR_CACHE_HOME"
NO_CACHE_ENV = "TLDR_NO_CACHE"
PLATFORM_ENV = "TLDR_PLATFORM"
LANGUAGE_ENV = "TLDR_LANGUAGE"
DEBUG_ENV = "TLDR_DEBUG"


def detect_platform(platform_name: str, environ: Mapping[str, str]) -> str:
    """Map a ``sys.platform`` value onto a page platform directory."""

    if platform_name.startswith("linux"):
        return "android" if environ.get("ANDROID_ROOT") else "linux"
    if platform_name == "darwin":
        return "osx"
    if platform_name in ("win32", "cygwin"):
        return "windows"
    if platform_name.startswith("sunos"):
        return "sunos"
    return "linux"


def default_cache_root(environ: Mapping[str, str]) -> Path:
    override = environ.get(CACHE_HOME_ENV)
    if override:
        return Path(override).expanduser()
    xdg = environ.get("XDG_CACHE_HOME")
    if xdg:
        return Path(xdg).expanduser() / "tldr"
    home = environ.get("HOME")
    base = Path(home) if home else Path.home()
    return base / ".cache" / "tldr"


@dataclass(frozen=True)
class Settings:
    """Per-process configuration shared by the cascade, cache and renderer."""

    cache_root: Path
    preferred_platform: str = "linux"
    language_override: Optional[str] = None
    language_list: str = ""
    primary_locale: str = ""
    cache_enabled: bool = True
    list_all: bool = False
    debug: bool = False
    color: str = "auto"
    timeout: float = 30.0
    style_overrides: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, str] | None = None,
        platform_name: str | None = None,
    ) -> "Settings":
        env = os.environ if environ is None else environ
        platform = env.get(PLATFORM_ENV) or detect_platform(platform_name or sys.platform, env)
        return cls(
            cache_root=default_cache_root(env),
            preferred_platform=platform,
            language_override=env.get(LANGUAGE_ENV) or None,
            language_list=env.get("LANGUAGE", ""),
            primary_locale=env.get("LANG", ""),
            cache_enabled=not env_flag(env, NO_CACHE_ENV),
            debug=env_flag(env, DEBUG_ENV),
            style_overrides={key: value for key, value in env.items() if key.startswith("TLDR_")},
        )

    @property
    def page_source(self) -> Path:
        return self.cache_root / "page-source"

    @property
    def local_root(self) -> Path:
        return self.cache_root / "local"

    @property
    def index_marker(self) -> Path:
        return self.page_source / "index.json"

    def with_overrides(self, **changes) -> "Settings":
        """Return a copy with the non-None values in ``changes`` applied."""

        return replace(self, **{key: value for key, value in changes.items() if value is not None})
