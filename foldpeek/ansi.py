"""Display-width measurement and ANSI-aware cell slicing.

The preview is sized in screen cells, not characters, so every width used by
the geometry code goes through :func:`display_width`.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Return cell width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return on-screen width of ``text`` rendered from column zero.

    Escape sequences are ignored so highlighted and plain text measure equal.
    """
    plain = ANSI_ESCAPE_RE.sub("", text)
    col = 0
    for ch in plain:
        col += char_display_width(ch, col)
    return col


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def slice_cells(text: str, start_col: int, max_cols: int) -> str:
    """Return ``max_cols`` cells of ``text`` starting at ``start_col``.

    Tabs become spaces. A wide character cut by either edge is replaced by
    spaces so the result never spills into a neighbouring cell. When the slice
    begins after a style sequence, the latest SGR sequence is re-emitted so the
    visible text keeps its styling.
    """
    if max_cols <= 0:
        return ""
    start_col = max(0, start_col)

    out: list[str] = []
    col = 0
    shown = 0
    pending_sgr = ""
    injected = False
    i = 0
    n = len(text)
    while i < n and shown < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                seq = match.group(0)
                if seq.endswith("m"):
                    pending_sgr = seq
                if col >= start_col:
                    out.append(seq)
                    injected = True
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        i += 1
        if col + w <= start_col:
            col += w
            continue
        if not injected and pending_sgr:
            out.append(pending_sgr)
            injected = True
        if ch == "\t" or col < start_col or shown + w > max_cols:
            visible = min(col + w - max(col, start_col), max_cols - shown)
            out.append(" " * visible)
            shown += visible
        else:
            out.append(ch)
            shown += w
        col += w

    return "".join(out)


def pad_cells(text: str, width: int) -> str:
    """Clip or right-pad ``text`` to exactly ``width`` cells."""
    if width <= 0:
        return ""
    clipped = slice_cells(text, 0, width)
    filler = width - display_width(clipped)
    if "\x1b" in clipped:
        clipped += "\033[0m"
    return clipped + " " * filler
