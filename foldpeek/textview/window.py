"""A terminal-style editor window implementing :class:`~foldpeek.host.ViewportHost`.

Lines are 1-indexed. A closed fold occupies one display row; nested folds are
allowed and the outermost closed fold decides what is shown. Navigation emits
the same events an editor would, so a preview controller attached to this
window reacts exactly as it would inside a real editor.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from ..bindings import KeymapRegistry
from ..events import DeferredTask, EventHub, EventSubscription, TickScheduler
from ..host import HostEvent, OverlaySpec
from .buffer import Fold, Overlay, TextBuffer

DEFAULT_OPTIONS: dict[str, Any] = {"winminheight": 1, "conceallevel": 0}


class TextWindow:
    def __init__(
        self,
        buffer: TextBuffer,
        *,
        width: int = 80,
        height: int = 24,
        number: bool = True,
        fold_column: int = 0,
        sign_column: int = 0,
        keymap: KeymapRegistry | None = None,
    ) -> None:
        self.buffer = buffer
        self.width = width
        self.height = height
        self.number = number
        self.fold_column = fold_column
        self.sign_column = sign_column
        self.mode = "n"
        self.options: dict[str, Any] = dict(DEFAULT_OPTIONS)
        self.folds: list[Fold] = []
        self.top_line = 1
        self.cursor_col = 0
        self._cursor = 1
        self.events = EventHub()
        self.scheduler = TickScheduler()
        self.surfaces: dict[int, TextBuffer] = {}
        self.overlays: dict[int, Overlay] = {}
        self.messages: list[str] = []
        self._overlay_ids = itertools.count(1)
        self.keymap = keymap if keymap is not None else KeymapRegistry()
        self._register_builtin_keys()

    # -- layout -----------------------------------------------------------

    def number_width(self) -> int:
        if not self.number:
            return 0
        return max(3, len(str(self.buffer.line_count))) + 1

    def display_rows(self) -> list[tuple[int, int]]:
        """Return ``(first, last)`` buffer lines for every display row."""
        rows: list[tuple[int, int]] = []
        line = 1
        while line <= self.buffer.line_count:
            bounds = self.closed_fold_at(line)
            if bounds is None:
                rows.append((line, line))
                line += 1
            else:
                rows.append(bounds)
                line = bounds[1] + 1
        return rows

    def row_index(self, line: int, rows: Sequence[tuple[int, int]] | None = None) -> int:
        """Return the 0-indexed display row holding buffer ``line``."""
        if rows is None:
            rows = self.display_rows()
        for idx, (first, last) in enumerate(rows):
            if first <= line <= last:
                return idx
        return max(0, len(rows) - 1)

    def visible_rows(self) -> list[tuple[int, int]]:
        rows = self.display_rows()
        top = self.row_index(self.top_line, rows)
        return rows[top : top + self.height]

    def _ensure_cursor_visible(self) -> bool:
        rows = self.display_rows()
        if not rows:
            return False
        top = self.row_index(self.top_line, rows)
        cursor = self.row_index(self._cursor, rows)
        if cursor < top:
            top = cursor
        elif cursor >= top + self.height:
            top = cursor - self.height + 1
        new_top = rows[top][0]
        changed = new_top != self.top_line
        self.top_line = new_top
        return changed

    def _emit(self, event: HostEvent) -> int:
        return self.events.emit(event, self.buffer.id)

    # -- navigation -------------------------------------------------------

    def _clamp_col(self, line: int, col: int) -> int:
        text = self.buffer.lines[line - 1]
        return max(0, min(col, len(text) - 1))

    def move_cursor(self, line: int, col: int | None = None) -> bool:
        """Place the cursor; emit ``CURSOR_MOVED`` when the position changes."""
        line = max(1, min(line, self.buffer.line_count))
        col = self._clamp_col(line, self.cursor_col if col is None else col)
        moved = (line, col) != (self._cursor, self.cursor_col)
        self._cursor = line
        self.cursor_col = col
        scrolled = self._ensure_cursor_visible()
        if moved:
            self._emit(HostEvent.CURSOR_MOVED)
        if scrolled:
            self._emit(HostEvent.WIN_SCROLLED)
        return moved

    def move_cursor_by(self, delta: int) -> bool:
        """Move by display rows, landing on the first line of a closed fold."""
        rows = self.display_rows()
        current = self.row_index(self._cursor, rows)
        target = max(0, min(current + delta, len(rows) - 1))
        if target == current:
            return False
        return self.move_cursor(rows[target][0])

    def move_col_by(self, delta: int) -> bool:
        return self.move_cursor(self._cursor, self.cursor_col + delta)

    def scroll(self, delta: int) -> bool:
        """Scroll the view by display rows, dragging the cursor back into view."""
        rows = self.display_rows()
        current = self.row_index(self.top_line, rows)
        top = max(0, min(current + delta, len(rows) - 1))
        if top == current:
            return False
        self.top_line = rows[top][0]
        self._emit(HostEvent.WIN_SCROLLED)
        cursor = self.row_index(self._cursor, rows)
        if cursor < top:
            self.move_cursor(rows[top][0])
        elif cursor >= top + self.height:
            self.move_cursor(rows[top + self.height - 1][0])
        return True

    def resize(self, width: int, height: int) -> None:
        """Change the window size; any size change also counts as a scroll."""
        resized = (width, height) != (self.width, self.height)
        self.width = width
        self.height = height
        scrolled = self._ensure_cursor_visible()
        self._emit(HostEvent.VIM_RESIZED)
        if scrolled or resized:
            self._emit(HostEvent.WIN_SCROLLED)

    def set_mode(self, mode: str) -> bool:
        if mode == self.mode:
            return False
        self.mode = mode
        self._emit(HostEvent.MODE_CHANGED)
        return True

    def leave(self) -> None:
        self._emit(HostEvent.BUF_LEAVE)

    # -- folds ------------------------------------------------------------

    def add_fold(self, start: int, end: int, closed: bool = True) -> Fold:
        """Create a fold; folds must nest or be disjoint."""
        if not 1 <= start <= end <= self.buffer.line_count:
            raise ValueError(f"fold {start}-{end} outside buffer of {self.buffer.line_count} lines")
        for other in self.folds:
            overlaps = start <= other.end and other.start <= end
            nested = (start <= other.start and other.end <= end) or (other.start <= start and end <= other.end)
            if overlaps and not nested:
                raise ValueError(f"fold {start}-{end} crosses fold {other.start}-{other.end}")
        fold = Fold(start=start, end=end, closed=closed)
        self.folds.append(fold)
        self.folds.sort(key=lambda item: (item.start, -item.end))
        self._folds_changed()
        return fold

    def _folds_at(self, line: int) -> list[Fold]:
        """Return folds containing ``line``, outermost first."""
        return [fold for fold in self.folds if fold.contains(line)]

    def closed_fold_at(self, line: int) -> tuple[int, int] | None:
        for fold in self._folds_at(line):
            if fold.closed:
                return fold.start, fold.end
        return None

    def _folds_changed(self) -> None:
        rows = self.display_rows()
        self.top_line = rows[self.row_index(self.top_line, rows)][0]
        if self._ensure_cursor_visible():
            self._emit(HostEvent.WIN_SCROLLED)

    def open_fold(self) -> bool:
        """Open one level: the outermost closed fold under the cursor."""
        for fold in self._folds_at(self._cursor):
            if fold.closed:
                fold.closed = False
                self._folds_changed()
                return True
        return False

    def open_folds_recursive(self) -> bool:
        """Open every fold under the cursor."""
        changed = False
        for fold in self._folds_at(self._cursor):
            if fold.closed:
                fold.closed = False
                changed = True
        if changed:
            self._folds_changed()
        return changed

    def close_fold(self) -> bool:
        """Close the innermost open fold under the cursor."""
        for fold in reversed(self._folds_at(self._cursor)):
            if not fold.closed:
                fold.closed = True
                self._folds_changed()
                return True
        return False

    def set_all_folds(self, closed: bool) -> bool:
        changed = False
        for fold in self.folds:
            if fold.closed != closed:
                fold.closed = closed
                changed = True
        if changed:
            self._folds_changed()
        return changed

    # -- keys -------------------------------------------------------------

    def _register_builtin_keys(self) -> None:
        builtin: dict[str, Callable[[], bool]] = {
            "h": lambda: self.move_col_by(-1),
            "l": lambda: self.move_col_by(1),
            "j": lambda: self.move_cursor_by(1),
            "k": lambda: self.move_cursor_by(-1),
            "<C-e>": lambda: self.scroll(1),
            "<C-y>": lambda: self.scroll(-1),
            "zo": self.open_fold,
            "zO": self.open_folds_recursive,
            "zc": self.close_fold,
            "zR": lambda: self.set_all_folds(False),
            "zM": lambda: self.set_all_folds(True),
        }
        for key, handler in builtin.items():
            self.keymap.register("n", key, handler)

    def press(self, key: str) -> Any:
        return self.keymap.dispatch(self.mode, key)

    def run_pending_ticks(self) -> int:
        """Run one turn of the event loop's deferred work."""
        return self.scheduler.run_pending()

    # -- ViewportHost -----------------------------------------------------

    def current_buffer(self) -> int:
        return self.buffer.id

    def cursor_line(self) -> int:
        return self._cursor

    def get_lines(self, start: int, end: int) -> list[str]:
        return list(self.buffer.lines[start - 1 : end])

    def filetype(self) -> str:
        return self.buffer.filetype

    def window_height(self) -> int:
        return self.height

    def window_width(self) -> int:
        return self.width

    def cursor_screen_row(self) -> int:
        rows = self.display_rows()
        return self.row_index(self._cursor, rows) - self.row_index(self.top_line, rows) + 1

    def gutter_width(self) -> int:
        return self.number_width() + self.fold_column + self.sign_column

    def get_option(self, name: str) -> Any:
        return self.options.get(name)

    def set_option(self, name: str, value: Any) -> None:
        self.options[name] = value

    def create_content_surface(self, lines: Sequence[str], filetype: str) -> TextBuffer:
        surface = TextBuffer(lines=list(lines), filetype=filetype, modifiable=False)
        self.surfaces[surface.id] = surface
        return surface

    def destroy_content_surface(self, surface: TextBuffer) -> None:
        self.surfaces.pop(surface.id, None)

    def open_overlay(self, surface: TextBuffer, spec: OverlaySpec) -> Overlay:
        overlay = Overlay(
            id=next(self._overlay_ids),
            surface=surface,
            spec=spec,
            width=spec.width,
            height=spec.height,
        )
        self.overlays[overlay.id] = overlay
        return overlay

    def overlay_is_valid(self, overlay: Overlay) -> bool:
        return overlay.id in self.overlays

    def close_overlay(self, overlay: Overlay) -> None:
        self.overlays.pop(overlay.id, None)

    def set_overlay_width(self, overlay: Overlay, width: int) -> None:
        overlay.width = width

    def set_overlay_height(self, overlay: Overlay, height: int) -> None:
        overlay.height = height

    def expand_fold_at_cursor(self) -> None:
        self.open_folds_recursive()

    def subscribe(
        self,
        events: Iterable[HostEvent],
        callback: Callable[[HostEvent], None],
        *,
        buffer: int,
        once: bool = False,
    ) -> EventSubscription:
        return self.events.subscribe(events, callback, buffer=buffer, once=once)

    def unsubscribe(self, subscription: EventSubscription) -> None:
        self.events.unsubscribe(subscription)

    def defer(self, callback: Callable[[], None]) -> DeferredTask:
        return self.scheduler.defer(callback)

    def notify(self, message: str) -> None:
        self.messages.append(message)
