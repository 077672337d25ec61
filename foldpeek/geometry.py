"""Pure size and position math for the fold preview overlay.

Nothing here talks to the host. Callers gather a :class:`ViewportGeometry`
snapshot and the raw folded lines, and get back where the overlay goes and how
large it may be.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .ansi import display_width
from .border import BorderShift

ASCII_WHITESPACE = " \t\n\v\f\r"


@dataclass(frozen=True)
class FoldContent:
    """Folded lines with the first line's indentation removed."""

    lines: tuple[str, ...]
    indent: int
    max_width: int


@dataclass(frozen=True)
class FoldRegion:
    """Closed fold under the cursor: 1-indexed inclusive line range plus its text."""

    start: int
    end: int
    content: FoldContent

    @property
    def line_count(self) -> int:
        return self.end - self.start + 1

    @property
    def indent(self) -> int:
        return self.content.indent

    @property
    def max_width(self) -> int:
        return self.content.max_width


@dataclass(frozen=True)
class ViewportGeometry:
    """Snapshot of the parent window taken on open, scroll, or resize."""

    height: int
    width: int
    gutter_width: int
    cursor_row: int
    indent: int = 0

    @property
    def room_right(self) -> int:
        return room_right(self.width, self.gutter_width, self.indent)

    @property
    def room_below(self) -> int:
        return room_below(self.height, self.cursor_row)


@dataclass(frozen=True)
class Anchor:
    """Overlay position: a buffer cell plus the border compensation offsets."""

    line: int
    col: int
    row_offset: int
    col_offset: int


@dataclass(frozen=True)
class PreviewPlacement:
    anchor: Anchor
    width: int
    height: int


def extract_fold_content(raw_lines: Sequence[str]) -> FoldContent:
    """Strip the first line's leading whitespace width from every folded line.

    Only the first line decides the indent. Later lines are cut by the same
    number of characters whatever they contain.
    """
    if not raw_lines:
        return FoldContent(lines=(), indent=0, max_width=0)
    first = raw_lines[0]
    indent = len(first) - len(first.lstrip(ASCII_WHITESPACE))
    stripped = tuple(line[indent:] if indent > 0 else line for line in raw_lines)
    max_width = max(display_width(line) for line in stripped)
    return FoldContent(lines=stripped, indent=indent, max_width=max_width)


def room_right(viewport_width: int, gutter_width: int, indent: int) -> int:
    """Return cells between the preview's left edge and the window's right edge."""
    return viewport_width - gutter_width - indent


def room_below(viewport_height: int, cursor_screen_row: int) -> int:
    """Return window rows from the cursor row (inclusive) to the bottom edge."""
    return viewport_height - cursor_screen_row + 1


def compute_width(max_display_width: int, available_right: int) -> int:
    if max_display_width + 2 < available_right:
        return max_display_width + 1
    return available_right - 1


def compute_height(fold_line_count: int, available_below: int) -> int:
    if fold_line_count < available_below:
        return fold_line_count
    return available_below


def compute_size(
    max_display_width: int,
    fold_line_count: int,
    available_right: int,
    available_below: int,
) -> tuple[int, int]:
    """Return ``(width, height)`` that fits the content into the available room.

    One column is always reserved for the right border edge, so an
    unconstrained width is the content width plus one.
    """
    return (
        compute_width(max_display_width, available_right),
        compute_height(fold_line_count, available_below),
    )


def compute_anchor(fold_start_line: int, indent: int, shift: BorderShift) -> Anchor:
    """Anchor the overlay on the fold's first line at the stripped indent column.

    ``fold_start_line`` is 1-indexed; the anchor line is 0-indexed like host
    buffer positions. The border shift moves the frame up/left so the content
    cells land exactly on the folded text.
    """
    return Anchor(
        line=fold_start_line - 1,
        col=indent,
        row_offset=shift.top,
        col_offset=shift.left,
    )


def can_place(geometry: ViewportGeometry) -> bool:
    """Return whether the window leaves at least one content cell for a preview."""
    return geometry.room_right > 1 and geometry.room_below > 0


def plan_preview(fold: FoldRegion, geometry: ViewportGeometry, shift: BorderShift) -> PreviewPlacement | None:
    """Return overlay placement for ``fold`` or ``None`` when nothing fits."""
    if not can_place(geometry):
        return None
    width, height = compute_size(fold.max_width, fold.line_count, geometry.room_right, geometry.room_below)
    return PreviewPlacement(
        anchor=compute_anchor(fold.start, fold.indent, shift),
        width=width,
        height=height,
    )
