"""Syntax highlighting for preview content, keyed by the host filetype."""

from __future__ import annotations

import re
from collections.abc import Sequence

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

DEFAULT_STYLE = "monokai"

_FORMATTERS: dict[str, Terminal256Formatter] = {}


def sanitize_terminal_text(text: str) -> str:
    """Escape control bytes so preview text cannot drive the terminal."""
    if _CONTROL_RE.search(text) is None:
        return text
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", text)


def lexer_for_filetype(filetype: str) -> Lexer:
    """Return a lexer for an editor filetype name, plain text when unknown."""
    if filetype:
        try:
            return get_lexer_by_name(filetype, stripnl=False, ensurenl=True)
        except ClassNotFound:
            pass
    return TextLexer(stripnl=False, ensurenl=True)


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    try:
        get_style_by_name(style)
    except ClassNotFound:
        style = DEFAULT_STYLE
    formatter = Terminal256Formatter(style=style)
    _FORMATTERS[style] = formatter
    return formatter


def highlight_lines(lines: Sequence[str], filetype: str, style: str = DEFAULT_STYLE) -> list[str]:
    """Return ``lines`` with ANSI colors, one output line per input line."""
    if not lines:
        return []
    source = "\n".join(sanitize_terminal_text(line) for line in lines) + "\n"
    rendered = highlight(source, lexer_for_filetype(filetype), _formatter_for_style(style))
    out = rendered.split("\n")[: len(lines)]
    out.extend("" for _ in range(len(lines) - len(out)))
    return out
