"""Capabilities foldpeek needs from the editor that hosts the preview."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from .border import BorderSpec
from .geometry import Anchor


class HostEvent(str, Enum):
    CURSOR_MOVED = "CursorMoved"
    MODE_CHANGED = "ModeChanged"
    BUF_LEAVE = "BufLeave"
    WIN_SCROLLED = "WinScrolled"
    VIM_RESIZED = "VimResized"


# Any of these closes an open preview.
DISQUALIFYING_EVENTS: tuple[HostEvent, ...] = (
    HostEvent.CURSOR_MOVED,
    HostEvent.MODE_CHANGED,
    HostEvent.BUF_LEAVE,
)


@dataclass(frozen=True)
class OverlaySpec:
    """How the host should draw a floating preview over the current window."""

    anchor: Anchor
    width: int
    height: int
    border: BorderSpec
    focusable: bool = False
    fold_enabled: bool = False
    sign_column: bool = False
    conceal_level: int = 0


class Subscription(Protocol):
    def active(self) -> bool: ...


class DeferredCall(Protocol):
    def cancel(self) -> None: ...

    def cancelled(self) -> bool: ...


class ViewportHost(Protocol):
    """Editor-side operations used by the preview controller.

    Lines are 1-indexed and inclusive unless a method says otherwise. Handles
    returned for content surfaces and overlays are opaque to foldpeek.
    """

    def current_buffer(self) -> int: ...

    def cursor_line(self) -> int: ...

    def closed_fold_at(self, line: int) -> tuple[int, int] | None: ...

    def get_lines(self, start: int, end: int) -> list[str]: ...

    def filetype(self) -> str: ...

    def window_height(self) -> int: ...

    def window_width(self) -> int: ...

    def cursor_screen_row(self) -> int: ...

    def gutter_width(self) -> int: ...

    def get_option(self, name: str) -> Any: ...

    def set_option(self, name: str, value: Any) -> None: ...

    def create_content_surface(self, lines: Sequence[str], filetype: str) -> Any: ...

    def destroy_content_surface(self, surface: Any) -> None: ...

    def open_overlay(self, surface: Any, spec: OverlaySpec) -> Any: ...

    def overlay_is_valid(self, overlay: Any) -> bool: ...

    def close_overlay(self, overlay: Any) -> None: ...

    def set_overlay_width(self, overlay: Any, width: int) -> None: ...

    def set_overlay_height(self, overlay: Any, height: int) -> None: ...

    def expand_fold_at_cursor(self) -> None: ...

    def subscribe(
        self,
        events: Iterable[HostEvent],
        callback: Callable[[HostEvent], None],
        *,
        buffer: int,
        once: bool = False,
    ) -> Subscription: ...

    def unsubscribe(self, subscription: Subscription) -> None: ...

    def defer(self, callback: Callable[[], None]) -> DeferredCall: ...

    def notify(self, message: str) -> None: ...
