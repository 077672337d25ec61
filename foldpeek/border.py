"""Border presets and the cell shifts their edges impose on a preview.

A border is either a preset name or eight glyphs in the order
top-left, top, top-right, right, bottom-right, bottom, bottom-left, left.
An empty glyph means that edge takes no screen cell.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .errors import ConfigurationError

BorderSpec = str | tuple[str, ...]

BORDER_GLYPH_COUNT = 8

PRESET_GLYPHS: dict[str, tuple[str, ...]] = {
    "none": ("", "", "", "", "", "", "", ""),
    "single": ("┌", "─", "┐", "│", "┘", "─", "└", "│"),
    "double": ("╔", "═", "╗", "║", "╝", "═", "╚", "║"),
    "rounded": ("╭", "─", "╮", "│", "╯", "─", "╰", "│"),
    "solid": (" ", " ", " ", " ", " ", " ", " ", " "),
    "shadow": ("", "", " ", " ", " ", " ", " ", ""),
}

# Glyph slots holding the top, right, bottom and left edges.
EDGE_SLOTS = (1, 3, 5, 7)


@dataclass(frozen=True)
class BorderShift:
    """Offset (0 or -1) each border edge adds to the preview position."""

    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.top, self.right, self.bottom, self.left)


PRESET_SHIFTS: dict[str, BorderShift] = {
    "none": BorderShift(0, 0, 0, 0),
    "single": BorderShift(-1, -1, -1, -1),
    "double": BorderShift(-1, -1, -1, -1),
    "rounded": BorderShift(-1, -1, -1, -1),
    "solid": BorderShift(-1, -1, -1, -1),
    "shadow": BorderShift(0, -1, -1, 0),
}


def normalize_border(border: object) -> BorderSpec:
    """Validate ``border`` and return it as a preset name or an 8-tuple.

    Raises :class:`ConfigurationError` for anything else.
    """
    if isinstance(border, str):
        if border not in PRESET_SHIFTS:
            presets = ", ".join(sorted(PRESET_SHIFTS))
            raise ConfigurationError(f"Invalid border preset {border!r}; expected one of: {presets}")
        return border
    if isinstance(border, Sequence) and not isinstance(border, (bytes, bytearray)):
        glyphs = tuple(border)
        if len(glyphs) != BORDER_GLYPH_COUNT or not all(isinstance(glyph, str) for glyph in glyphs):
            raise ConfigurationError(
                f"Invalid border {border!r}; expected a sequence of {BORDER_GLYPH_COUNT} glyph strings"
            )
        return glyphs
    raise ConfigurationError(f"Invalid border type or value: {border!r}")


def resolve_border_shift(border: object) -> BorderShift:
    """Return the per-edge shift for a preset name or an 8-glyph sequence."""
    spec = normalize_border(border)
    if isinstance(spec, str):
        return PRESET_SHIFTS[spec]
    top, right, bottom, left = (0 if spec[slot] == "" else -1 for slot in EDGE_SLOTS)
    return BorderShift(top=top, right=right, bottom=bottom, left=left)


def border_glyphs(border: object) -> tuple[str, ...]:
    """Return the eight glyphs used to draw ``border``."""
    spec = normalize_border(border)
    if isinstance(spec, str):
        return PRESET_GLYPHS[spec]
    return spec
