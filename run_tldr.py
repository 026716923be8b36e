"""Wrapper for invoking tldr from a source checkout via python run_tldr.py."""

from __future__ import annotations

import sys

from tldr_tools.cli import main


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
