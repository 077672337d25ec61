"""In-memory text buffers and the read-only surfaces shown in overlays."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field

from ..host import OverlaySpec

_buffer_ids = itertools.count(1)


@dataclass
class TextBuffer:
    lines: list[str]
    filetype: str = ""
    name: str = ""
    modifiable: bool = True
    id: int = field(default_factory=lambda: next(_buffer_ids))

    @classmethod
    def from_text(cls, text: str, filetype: str = "", name: str = "") -> TextBuffer:
        return cls(lines=text.splitlines() or [""], filetype=filetype, name=name)

    @property
    def line_count(self) -> int:
        return len(self.lines)


@dataclass
class Fold:
    """Manual fold over 1-indexed inclusive lines."""

    start: int
    end: int
    closed: bool = True

    def contains(self, line: int) -> bool:
        return self.start <= line <= self.end


@dataclass
class Overlay:
    """Floating surface drawn over a window; width/height change while shown."""

    id: int
    surface: TextBuffer
    spec: OverlaySpec
    width: int
    height: int
