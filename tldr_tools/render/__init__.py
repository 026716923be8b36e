from .blocks import BlockRenderer, Token, classify, render_document, render_lines, split_lines
from .inline import transform_inline
from .styles import (
    AnsiCapabilities,
    NullCapabilities,
    StyleResolver,
    TerminfoCapabilities,
    capabilities_for,
)

__all__ = [
    "AnsiCapabilities",
    "BlockRenderer",
    "NullCapabilities",
    "StyleResolver",
    "TerminfoCapabilities",
    "Token",
    "capabilities_for",
    "classify",
    "render_document",
    "render_lines",
    "split_lines",
    "transform_inline",
]
