"""Command-line viewer for tldr pages."""

__version__ = "0.1.0"
