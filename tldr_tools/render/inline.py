from __future__ import annotations

import re
from typing import Callable

StyleLookup = Callable[[str], str]

CODE_SPAN = re.compile(r"`([^`\n]*)`")


def transform_inline(text: str, styles: StyleLookup) -> str:
    """Replace ``{{param}}`` and single-backtick code spans with styled text.

    Parameter delimiters are substituted one token at a time, so unbalanced
    braces degrade to a lone style change instead of an error. Code spans never
    cross a line break.
    """

    text = text.replace("{{", styles("param-start")).replace("}}", styles("param-end"))
    code_start = styles("code")
    reset = styles("reset")
    return CODE_SPAN.sub(lambda match: f"{code_start}{match.group(1)}{reset}", text)
