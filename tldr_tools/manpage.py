from __future__ import annotations

import sys

MAN_PAGE = """TLDR(1)                       User Commands                       TLDR(1)

NAME
    tldr - show simplified, example-driven manual pages

SYNOPSIS
    tldr [options] <command>...
    tldr -l | -a
    tldr -u | -c
    tldr -r FILE

DESCRIPTION
    tldr prints the community-maintained tldr page for a command. Pages are
    read from a local mirror of the tldr-pages corpus, refreshed whenever the
    mirror is older than 14 days. Multi-word commands are joined with dashes
    ("tldr git commit" shows git-commit). With no command the page is read
    from standard input.

    Pages are searched in this order:
        1. the local override directory (CACHE/local/<command>.md);
        2. the preferred platform, then common, then every other platform;
        3. within each platform, each preferred language, then English.
    When caching is disabled, or nothing matches in the mirror, the page is
    fetched directly from the upstream repository.

OPTIONS
    -p, --platform PLATFORM
        Prefer pages for PLATFORM (common, linux, osx, windows, sunos, android).

    -L, --language CODE
        Show pages in language CODE only (no fallback to English).

    -u, --update
        Download the page archive and refresh the mirror now.

    -c, --clear-cache
        Delete the mirror. Local overrides are kept.

    -l, --list
        List pages for the preferred platform and common.

    -a, --list-all
        List pages for every platform.

    -r, --render FILE
        Render a local Markdown file instead of looking up a page.

    -n, --no-cache
        Always fetch pages over the network.

    --color {auto,always,never}
        Control escape sequences (default: auto, styled only on a terminal).

    --browse
        Open the interactive page browser.

    -m, --man
        Show this manual page.

    -v, --version
        Show the version.

ENVIRONMENT
    TLDR_CACHE_HOME     Mirror location (default: $XDG_CACHE_HOME/tldr or ~/.cache/tldr).
    TLDR_NO_CACHE       Disable the mirror when set to a true value.
    TLDR_PLATFORM       Default platform.
    TLDR_LANGUAGE       Default language override.
    LANGUAGE, LANG      Preferred languages when no override is set.
    TLDR_DEBUG          Print diagnostics to standard error.
    TLDR_HEADER, TLDR_QUOTE, TLDR_DESCRIPTION, TLDR_CODE,
    TLDR_PARAM_START, TLDR_PARAM_END
        Style names for each page element, e.g. TLDR_HEADER="magenta bold".
        Available styles: reset bold underline italic end-italic default
        black red green yellow blue magenta cyan white bg-black bg-white.

EXAMPLES
    tldr tar
    tldr -p osx say
    tldr -L fr git commit
    echo "# demo" | tldr

REPORTING BUGS
    Open issues or pull requests in the project repository.
"""


def print_man_page(stream = sys.stdout) -> None:
    stream.write(MAN_PAGE)
    if not MAN_PAGE.endswith("\n"):
        stream.write("\n")
