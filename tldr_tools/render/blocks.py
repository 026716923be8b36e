from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator, List

from .inline import StyleLookup, transform_inline


class Token(Enum):
    NONE = "none"
    HEADING = "heading"
    QUOTATION = "quotation"
    LIST_ITEM = "list_item"
    CODE = "code"
    TEXT = "text"


def classify(line: str) -> Token:
    """Classify a raw page line by its leading character."""

    if line.startswith("#"):
        return Token.HEADING
    if line.startswith(">"):
        return Token.QUOTATION
    if line.startswith("-"):
        return Token.LIST_ITEM
    if line.startswith("`"):
        return Token.CODE
    return Token.TEXT


class BlockRenderer:
    """Single-pass line renderer remembering only the previous token."""

    def __init__(self, styles: StyleLookup) -> None:
        self.styles = styles
        self.last_token = Token.NONE

    def feed(self, line: str) -> str | None:
        """Render one raw line, or return None when it is suppressed."""

        if not line.strip() and self.last_token is Token.LIST_ITEM:
            return None

        token = classify(line)
        styles = self.styles
        if token is Token.HEADING:
            body = f"{styles('header')}{self._inline(line[2:])}{styles('reset')}"
        elif token is Token.QUOTATION:
            body = f"{styles('quote')}{self._inline(line[2:])}{styles('reset')}"
        elif token is Token.LIST_ITEM:
            body = f"{styles('description')}{self._inline(line)}{styles('reset')}"
        else:
            # Code lines are styled by their inline backtick spans, like plain text.
            body = self._inline(line)
        self.last_token = token
        return body

    def render(self, lines: Iterable[str]) -> Iterator[str]:
        for line in lines:
            rendered = self.feed(line)
            if rendered is not None:
                yield rendered

    def _inline(self, text: str) -> str:
        return transform_inline(text, self.styles)


def split_lines(text: str) -> List[str]:
    """Split on newlines only; other control characters stay inside the line."""

    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def render_lines(text: str, styles: StyleLookup) -> List[str]:
    """Render a page into styled output lines."""

    return list(BlockRenderer(styles).render(split_lines(text)))


def render_document(text: str, styles: StyleLookup) -> str:
    lines = render_lines(text, styles)
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
