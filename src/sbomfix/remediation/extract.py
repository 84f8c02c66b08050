"""Pull an executable script out of free-form model output."""

from __future__ import annotations

_FENCE = "```"
_BASH_FENCE = "```bash"


def extract_script_block(text: str) -> str:
    """Return the body of the first fenced code block, or ``""``.

    A ```` ```bash ```` fence is preferred over a bare fence anywhere in the
    text. An unterminated fence yields ``""``. The body starts past the
    opening fence and its language tag; an info string that fills the rest
    of the opening line is dropped too. The body is stripped.
    """
    start = text.find(_BASH_FENCE)
    if start != -1:
        rest = text[start + len(_BASH_FENCE) :]
    else:
        start = text.find(_FENCE)
        if start == -1:
            return ""
        rest = text[start + len(_FENCE) :]

    end = rest.find(_FENCE)
    if end == -1:
        return ""

    return _drop_info_line(rest[:end]).strip()


def _drop_info_line(body: str) -> str:
    """Drop a non-empty opening line when the block continues below it."""
    first_line, newline, remainder = body.partition("\n")
    if newline and first_line.strip():
        return remainder
    return body
