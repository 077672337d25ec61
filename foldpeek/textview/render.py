"""Render a :class:`TextWindow` and its overlays to terminal rows."""

from __future__ import annotations

from ..ansi import display_width, pad_cells, slice_cells
from ..border import border_glyphs
from ..highlight import highlight_lines
from .buffer import Overlay
from .window import TextWindow

FOLD_FILL = "·"
FILLER_LINE = "~"
RESET = "\033[0m"


def fold_text(lines: list[str], start: int, end: int) -> str:
    """Return the one-row summary shown for a closed fold."""
    first = lines[start - 1].strip() if start - 1 < len(lines) else ""
    return f"+--{end - start + 1:>3} lines: {first}"


def _gutter(window: TextWindow, first: int, last: int) -> str:
    parts: list[str] = []
    number_width = window.number_width()
    if number_width:
        parts.append(f"{first:>{number_width - 1}} ")
    if window.fold_column:
        marker = "+" if first != last else " "
        parts.append(marker.ljust(window.fold_column))
    if window.sign_column:
        parts.append(" " * window.sign_column)
    return "".join(parts)


def _base_rows(window: TextWindow) -> list[str]:
    gutter_width = window.gutter_width()
    text_width = max(0, window.width - gutter_width)
    rows: list[str] = []
    for first, last in window.visible_rows():
        if first != last:
            summary = fold_text(window.buffer.lines, first, last)
            fill = max(0, text_width - display_width(summary))
            text = summary + FOLD_FILL * fill
        else:
            text = window.buffer.lines[first - 1]
        rows.append(pad_cells(_gutter(window, first, last) + pad_cells(text, text_width), window.width))
    while len(rows) < window.height:
        rows.append(pad_cells(FILLER_LINE, window.width))
    return rows


def overlay_frame(overlay: Overlay, colorize: bool = False) -> list[str]:
    """Return the overlay's rows including its border, each padded to full width."""
    glyphs = border_glyphs(overlay.spec.border)
    top_left, top, top_right, right, bottom_right, bottom, bottom_left, left = glyphs
    has_top, has_right, has_bottom, has_left = (glyph != "" for glyph in (top, right, bottom, left))

    lines = overlay.surface.lines
    if colorize:
        lines = highlight_lines(lines, overlay.surface.filetype)
    width = overlay.width

    def edge_row(corner_left: str, fill: str, corner_right: str) -> str:
        row = ""
        if has_left:
            row += corner_left or " "
        row += fill * width
        if has_right:
            row += corner_right or " "
        return row

    frame: list[str] = []
    if has_top:
        frame.append(edge_row(top_left, top, top_right))
    for idx in range(overlay.height):
        content = pad_cells(lines[idx] if idx < len(lines) else "", width)
        frame.append((left if has_left else "") + content + (right if has_right else ""))
    if has_bottom:
        frame.append(edge_row(bottom_left, bottom, bottom_right))
    return frame


def overlay_origin(window: TextWindow, overlay: Overlay) -> tuple[int, int] | None:
    """Return the 0-indexed window ``(row, col)`` of the frame's top-left cell.

    ``None`` when the anchored line is scrolled out of view.
    """
    anchor = overlay.spec.anchor
    rows = window.display_rows()
    top = window.row_index(window.top_line, rows)
    anchor_row = window.row_index(anchor.line + 1, rows) - top
    if anchor_row < 0 or anchor_row >= window.height:
        return None
    text = window.buffer.lines[anchor.line] if anchor.line < window.buffer.line_count else ""
    col = window.gutter_width() + display_width(text[: anchor.col]) + anchor.col_offset
    return anchor_row + anchor.row_offset, col


def render_window(window: TextWindow, colorize: bool = False) -> list[str]:
    """Return one string per window row with overlays drawn on top."""
    rows = _base_rows(window)
    for overlay in window.overlays.values():
        origin = overlay_origin(window, overlay)
        if origin is None:
            continue
        origin_row, origin_col = origin
        for offset, frame_row in enumerate(overlay_frame(overlay, colorize)):
            y = origin_row + offset
            if y < 0 or y >= window.height:
                continue
            frame_width = display_width(frame_row)
            left = max(0, origin_col)
            right = min(window.width, origin_col + frame_width)
            if right <= left:
                continue
            segment = slice_cells(frame_row, left - origin_col, right - left)
            if colorize:
                segment += RESET
            base = rows[y]
            rows[y] = slice_cells(base, 0, left) + segment + slice_cells(base, right, window.width - right)
    return rows
