from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Callable, List, Mapping, Optional, TextIO

from tldr_tools import __version__
from tldr_tools.cache import fetch_bytes, fetch_page, is_stale
from tldr_tools.cache.fetch import Fetcher
from tldr_tools.cache.updater import clear_cache, update_cache
from tldr_tools.config import COLOR_MODES, PLATFORMS, Settings
from tldr_tools.manpage import print_man_page
from tldr_tools.pages import PageNotFound, PageResolver, TldrError, list_pages
from tldr_tools.render import StyleResolver, capabilities_for, render_document
from tldr_tools.utils import debug, normalize_command, warn

BrowserLauncher = Callable[[Settings], int]


def build_parser(command: Optional["TldrCommand"] = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tldr",
        description="Show simplified, example-driven manual pages.",
    )
    parser.add_argument(
        "command",
        nargs="*",
        help="Command to look up. Words are joined with dashes; empty reads a page from stdin.",
    )
    parser.add_argument(
        "-p",
        "--platform",
        choices=PLATFORMS,
        help="Preferred platform for page lookup.",
    )
    parser.add_argument(
        "-L",
        "--language",
        help="Language code to show pages in (disables the English fallback).",
    )
    parser.add_argument("-u", "--update", action="store_true", help="Refresh the local page mirror.")
    parser.add_argument(
        "-c",
        "--clear-cache",
        action="store_true",
        help="Delete the local page mirror.",
    )
    parser.add_argument(
        "-l",
        "--list",
        action="store_true",
        help="List pages for the preferred platform and common.",
    )
    parser.add_argument("-a", "--list-all", action="store_true", help="List pages for every platform.")
    parser.add_argument("-r", "--render", type=Path, help="Render a local Markdown page file.")
    parser.add_argument(
        "-n",
        "--no-cache",
        action="store_true",
        help="Fetch pages over the network instead of using the mirror.",
    )
    parser.add_argument(
        "--color",
        choices=COLOR_MODES,
        help="When to emit terminal styling (default: auto).",
    )
    parser.add_argument("--browse", action="store_true", help="Open the interactive page browser.")
    parser.add_argument("-m", "--man", action="store_true", help="Show the tldr manual page.")
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.set_defaults(func=(command or TldrCommand()).execute)
    return parser


def parse_args(argv: List[str]) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def main(argv: List[str], command: Optional["TldrCommand"] = None) -> int:
    args = build_parser(command).parse_args(argv)
    return args.func(args)


def cli() -> None:
    """Entry point for the console script."""

    raise SystemExit(main(sys.argv[1:]))


class TldrCommand:
    """Drive a single tldr invocation: maintenance flags, listing or page display."""

    def __init__(
        self,
        *,
        environ: Mapping[str, str] | None = None,
        fetcher: Fetcher = fetch_bytes,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        browser_launcher: BrowserLauncher | None = None,
    ) -> None:
        self._environ = environ
        self._fetcher = fetcher
        self._stdin = stdin
        self._stdout = stdout
        self._stderr = stderr
        self._browser_launcher = browser_launcher

    @property
    def stdout(self) -> TextIO:
        return self._stdout or sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr or sys.stderr

    def settings_from_args(self, args) -> Settings:
        environ = os.environ if self._environ is None else self._environ
        settings = Settings.from_environ(environ)
        return settings.with_overrides(
            preferred_platform=args.platform,
            language_override=args.language,
            color=args.color,
            cache_enabled=False if args.no_cache else None,
            list_all=True if args.list_all else None,
        )

    def execute(self, args) -> int:
        if args.man:
            print_man_page(stream=self.stdout)
            return 0

        settings = self.settings_from_args(args)
        debug(settings, f"cache root {settings.cache_root}", self.stderr)

        if args.clear_cache:
            try:
                cleared = clear_cache(settings)
            except TldrError as exc:
                warn(f"clear failed: {exc}", self.stderr)
                return 1
            if cleared:
                self.stdout.write(f"Removed {settings.page_source}\n")
            else:
                self.stdout.write("Nothing to clear.\n")
            if not (args.update or self._has_page_request(args)):
                return 0

        if args.update:
            try:
                count = update_cache(settings, fetcher=self._fetcher)
            except TldrError as exc:
                warn(f"update failed: {exc}", self.stderr)
                return 1
            self.stdout.write(f"Updated {count} entries in {settings.page_source}\n")
            if not self._has_page_request(args):
                return 0

        if args.render is not None:
            return self.render_file(args.render, settings)

        if args.list or args.list_all:
            self.refresh_if_stale(settings)
            for name in list_pages(settings):
                self.stdout.write(f"{name}\n")
            return 0

        if args.browse:
            return self.launch_browser(settings)

        command = normalize_command(" ".join(args.command))
        if not command:
            stream = self._stdin or sys.stdin
            return self.write_page(stream.read(), settings)
        return self.show_page(command, settings)

    def show_page(self, command: str, settings: Settings) -> int:
        try:
            text = self.load_page(command, settings)
        except PageNotFound as exc:
            warn(str(exc), self.stderr)
            return 1
        return self.write_page(text, settings)

    def load_page(self, command: str, settings: Settings) -> str:
        """Return page source from the mirror, falling back to a direct download."""

        if settings.cache_enabled:
            self.refresh_if_stale(settings)
            location = PageResolver(settings).resolve(command)
            if location is not None and location.path is not None:
                debug(settings, f"using {location.path}", self.stderr)
                try:
                    return location.path.read_text(encoding="utf-8")
                except OSError as exc:
                    warn(f"could not read {location.path}: {exc}", self.stderr)
            debug(settings, f"{command} not cached, fetching from upstream", self.stderr)

        fetched = fetch_page(command, settings, fetcher=self._fetcher)
        if fetched is None:
            raise PageNotFound(command, settings.preferred_platform)
        location, text = fetched
        debug(settings, f"fetched {location.url}", self.stderr)
        return text

    def refresh_if_stale(self, settings: Settings) -> None:
        """Refresh the mirror when due; failures leave the existing mirror in place."""

        if not settings.cache_enabled or not is_stale(settings.index_marker):
            return
        debug(settings, "page mirror is stale, updating", self.stderr)
        try:
            update_cache(settings, fetcher=self._fetcher)
        except TldrError as exc:
            warn(f"could not refresh page cache, using existing pages: {exc}", self.stderr)

    def render_file(self, path: Path, settings: Settings) -> int:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            warn(f"could not read {path}: {exc}", self.stderr)
            return 1
        return self.write_page(text, settings)

    def write_page(self, text: str, settings: Settings) -> int:
        styles = StyleResolver(capabilities_for(settings.color, self.stdout), settings.style_overrides)
        self.stdout.write(render_document(text, styles))
        return 0

    def launch_browser(self, settings: Settings) -> int:
        launcher = self._browser_launcher
        if launcher is None:
            from tldr_tools.tui import launch_browser as launcher
        try:
            return launcher(settings)
        except RuntimeError as exc:
            warn(str(exc), self.stderr)
            return 1

    @staticmethod
    def _has_page_request(args) -> bool:
        return (
            bool(args.command)
            or args.render is not None
            or args.list
            or args.list_all
            or args.browse
        )


if __name__ == "__main__":
    cli()
