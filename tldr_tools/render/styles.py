from __future__ import annotations

import sys
from typing import Dict, Mapping, Optional, Protocol, Tuple, Union

Strategy = Tuple[Union[str, int], ...]

# Each base style lists terminfo strategies in order of preference; the first
# one the terminal answers wins. ``setf``/``setb`` use the legacy BGR colour
# numbering, so their indices differ from ``setaf``/``setab``.
BASE_STYLES: Dict[str, Tuple[Strategy, ...]] = {
    "reset": (("sgr0",),),
    "bold": (("bold",),),
    "underline": (("smul",),),
    "italic": (("sitm",),),
    "end-italic": (("ritm",),),
    "default": (("op",),),
    "black": (("setaf", 0), ("setf", 0)),
    "red": (("setaf", 1), ("setf", 4)),
    "green": (("setaf", 2), ("setf", 2)),
    "yellow": (("setaf", 3), ("setf", 6)),
    "blue": (("setaf", 4), ("setf", 1)),
    "magenta": (("setaf", 5), ("setf", 5)),
    "cyan": (("setaf", 6), ("setf", 3)),
    "white": (("setaf", 7), ("setf", 7)),
    "bg-black": (("setab", 0), ("setb", 0)),
    "bg-white": (("setab", 7), ("setb", 7)),
}

SEMANTIC_DEFAULTS: Dict[str, str] = {
    "header": "red",
    "quote": "italic",
    "description": "reset",
    "code": "bold",
    "param-start": "italic",
    "param-end": "end-italic",
}

SEMANTIC_ENV: Dict[str, str] = {
    "header": "TLDR_HEADER",
    "quote": "TLDR_QUOTE",
    "description": "TLDR_DESCRIPTION",
    "code": "TLDR_CODE",
    "param-start": "TLDR_PARAM_START",
    "param-end": "TLDR_PARAM_END",
}


class TerminalCapabilities(Protocol):
    def lookup(self, capname: str, *params: int) -> str:
        """Return the escape sequence for a capability, or "" if unsupported."""


class NullCapabilities:
    """Capability model for output that must stay free of escape sequences."""

    def lookup(self, capname: str, *params: int) -> str:
        return ""


class AnsiCapabilities:
    """Fixed ECMA-48 sequences; used when no terminfo database is consulted."""

    SEQUENCES: Dict[str, str] = {
        "sgr0": "\x1b[0m",
        "bold": "\x1b[1m",
        "smul": "\x1b[4m",
        "sitm": "\x1b[3m",
        "ritm": "\x1b[23m",
        "op": "\x1b[39;49m",
    }

    def lookup(self, capname: str, *params: int) -> str:
        if capname == "setaf" and params:
            return f"\x1b[{30 + params[0]}m"
        if capname == "setab" and params:
            return f"\x1b[{40 + params[0]}m"
        return self.SEQUENCES.get(capname, "")


class TerminfoCapabilities:
    """Query the terminfo database through :mod:`curses`.

    Any failure (no curses module, unknown terminal, missing capability) yields
    an empty string so that rendering continues without styling.
    """

    def __init__(self, term: Optional[str] = None, fd: Optional[int] = None) -> None:
        self._curses = None
        try:
            import curses

            curses.setupterm(term, sys.stdout.fileno() if fd is None else fd)
        except Exception:  # curses.error, ImportError or a stream without fileno
            return
        self._curses = curses

    def lookup(self, capname: str, *params: int) -> str:
        if self._curses is None:
            return ""
        try:
            sequence = self._curses.tigetstr(capname)
            if not sequence:
                return ""
            if params:
                sequence = self._curses.tparm(sequence, *params)
        except self._curses.error:
            return ""
        return sequence.decode("latin-1")


class StyleResolver:
    """Translate logical style names into escape sequences."""

    def __init__(
        self,
        capabilities: TerminalCapabilities,
        overrides: Mapping[str, str] | None = None,
    ) -> None:
        self._capabilities = capabilities
        self._overrides = dict(overrides or {})
        self._cache: Dict[str, str] = {}

    def __call__(self, name: str) -> str:
        return self.escape(name)

    def escape(self, name: str) -> str:
        if name not in self._cache:
            self._cache[name] = self._resolve(name)
        return self._cache[name]

    def _resolve(self, name: str) -> str:
        if name in SEMANTIC_DEFAULTS:
            value = self._overrides.get(SEMANTIC_ENV[name], "").strip()
            targets = value.split() if value else [SEMANTIC_DEFAULTS[name]]
            return "".join(self._base(target) for target in targets)
        return self._base(name)

    def _base(self, name: str) -> str:
        for capname, *params in BASE_STYLES.get(name, ()):
            sequence = self._capabilities.lookup(str(capname), *params)
            if sequence:
                return sequence
        return ""


def capabilities_for(color: str, stream=None) -> TerminalCapabilities:
    """Pick a capability model for ``--color`` and the output stream."""

    target = stream or sys.stdout
    if color == "never":
        return NullCapabilities()
    if color == "always":
        return AnsiCapabilities()
    isatty = getattr(target, "isatty", None)
    if not (isatty and isatty()):
        return NullCapabilities()
    return TerminfoCapabilities(fd=target.fileno())
