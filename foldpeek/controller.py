"""Lifecycle of the single fold preview.

The controller is either CLOSED or OPEN. Only the OPEN state carries an
:class:`ActivePreview` with the host handles, so "is a preview open" and
"which overlay do I close" can never disagree.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .config import FoldPeekConfig
from .geometry import (
    FoldRegion,
    ViewportGeometry,
    compute_height,
    compute_width,
    extract_fold_content,
    plan_preview,
)
from .host import DISQUALIFYING_EVENTS, DeferredCall, HostEvent, OverlaySpec, Subscription, ViewportHost

logger = logging.getLogger(__name__)

# Host options forced while a preview is open; the saved values come back on close.
OVERRIDDEN_OPTIONS: dict[str, Any] = {"winminheight": 1}


class PreviewState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"


@dataclass
class ActivePreview:
    """Host handles and last-drawn geometry of the open preview."""

    buffer: int
    fold: FoldRegion
    surface: Any
    overlay: Any
    geometry: ViewportGeometry
    width: int
    height: int
    saved_options: dict[str, Any] = field(default_factory=dict)
    subscriptions: list[Subscription] = field(default_factory=list)
    pending_close: DeferredCall | None = None


class PreviewController:
    """Owns the preview handle and every subscription made on its behalf."""

    def __init__(self, host: ViewportHost, config: FoldPeekConfig | None = None) -> None:
        self.host = host
        self.config = config if config is not None else FoldPeekConfig()
        self._active: ActivePreview | None = None

    @property
    def state(self) -> PreviewState:
        return PreviewState.CLOSED if self._active is None else PreviewState.OPEN

    @property
    def cocked(self) -> bool:
        """True when the next qualifying key press should open a preview."""
        return self._active is None

    @property
    def active(self) -> ActivePreview | None:
        return self._active

    def cursor_on_closed_fold(self) -> bool:
        return self.host.closed_fold_at(self.host.cursor_line()) is not None

    def fold_under_cursor(self) -> FoldRegion | None:
        bounds = self.host.closed_fold_at(self.host.cursor_line())
        if bounds is None:
            return None
        start, end = bounds
        content = extract_fold_content(self.host.get_lines(start, end))
        return FoldRegion(start=start, end=end, content=content)

    def viewport_geometry(self, indent: int = 0) -> ViewportGeometry:
        return ViewportGeometry(
            height=self.host.window_height(),
            width=self.host.window_width(),
            gutter_width=self.host.gutter_width(),
            cursor_row=self.host.cursor_screen_row(),
            indent=indent,
        )

    def open(self) -> bool:
        """Show the fold under the cursor; return whether a preview was opened."""
        if self._active is not None:
            return False
        fold = self.fold_under_cursor()
        if fold is None:
            return False
        geometry = self.viewport_geometry(fold.indent)
        placement = plan_preview(fold, geometry, self.config.border_shift)
        if placement is None:
            logger.debug("no room for preview of lines %d-%d", fold.start, fold.end)
            return False

        host = self.host
        saved_options = {name: host.get_option(name) for name in OVERRIDDEN_OPTIONS}
        surface = None
        try:
            for name, value in OVERRIDDEN_OPTIONS.items():
                host.set_option(name, value)
            surface = host.create_content_surface(fold.content.lines, host.filetype())
            spec = OverlaySpec(
                anchor=placement.anchor,
                width=placement.width,
                height=placement.height,
                border=self.config.border,
                conceal_level=host.get_option("conceallevel") or 0,
            )
            overlay = host.open_overlay(surface, spec)
        except BaseException:
            if surface is not None:
                host.destroy_content_surface(surface)
            for name, value in saved_options.items():
                host.set_option(name, value)
            raise
        buffer = host.current_buffer()
        preview = ActivePreview(
            buffer=buffer,
            fold=fold,
            surface=surface,
            overlay=overlay,
            geometry=geometry,
            width=placement.width,
            height=placement.height,
            saved_options=saved_options,
        )
        self._active = preview
        preview.subscriptions = [
            host.subscribe(DISQUALIFYING_EVENTS, self._on_disqualified, buffer=buffer, once=True),
            host.subscribe((HostEvent.WIN_SCROLLED,), self._on_scrolled, buffer=buffer),
            host.subscribe((HostEvent.VIM_RESIZED,), self._on_resized, buffer=buffer),
        ]
        logger.debug(
            "opened preview of lines %d-%d at %dx%d",
            fold.start,
            fold.end,
            placement.width,
            placement.height,
        )
        return True

    def close(self) -> bool:
        """Tear the preview down now; a no-op when nothing is open."""
        preview = self._active
        if preview is None:
            return False
        self._active = None
        if preview.pending_close is not None:
            preview.pending_close.cancel()
        host = self.host
        for subscription in preview.subscriptions:
            host.unsubscribe(subscription)
        preview.subscriptions = []
        if host.overlay_is_valid(preview.overlay):
            host.close_overlay(preview.overlay)
        host.destroy_content_surface(preview.surface)
        for name, value in preview.saved_options.items():
            host.set_option(name, value)
        logger.debug("closed preview of lines %d-%d", preview.fold.start, preview.fold.end)
        return True

    def close_deferred(self) -> bool:
        """Close on the next host tick; return whether a close is pending."""
        preview = self._active
        if preview is None:
            return False
        if preview.pending_close is None or preview.pending_close.cancelled():
            preview.pending_close = self.host.defer(lambda: self._close_if_current(preview))
        return True

    def _close_if_current(self, preview: ActivePreview) -> None:
        if self._active is preview:
            self.close()

    def _on_disqualified(self, event: HostEvent) -> None:
        logger.debug("closing preview on %s", event.value)
        self.close()

    def _on_scrolled(self, event: HostEvent) -> None:
        preview = self._active
        if preview is None:
            return
        geometry = self.viewport_geometry(preview.fold.indent)
        height = max(1, compute_height(preview.fold.line_count, geometry.room_below))
        preview.geometry = geometry
        if height != preview.height:
            self.host.set_overlay_height(preview.overlay, height)
            preview.height = height

    def _on_resized(self, event: HostEvent) -> None:
        preview = self._active
        if preview is None:
            return
        geometry = self.viewport_geometry(preview.fold.indent)
        width = max(1, compute_width(preview.fold.max_width, geometry.room_right))
        preview.geometry = geometry
        if width != preview.width:
            self.host.set_overlay_width(preview.overlay, width)
            preview.width = width
