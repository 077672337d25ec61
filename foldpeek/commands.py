"""Commands that key bindings wrap around their original behaviour.

Each command takes ``original``, the binding it replaces, and falls back to it
when there is nothing to preview. Closing after a fold expansion is deferred
one tick so the host redraws the opened fold before the overlay disappears.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .controller import PreviewController, PreviewState

Fallback = Callable[[], Any]


class PreviewCommands:
    def __init__(self, controller: PreviewController) -> None:
        self.controller = controller

    def _expand_fold(self) -> None:
        self.controller.host.expand_fold_at_cursor()

    def show_or_confirm_and_open(self, original: Fallback | None = None) -> bool:
        """Preview the fold under the cursor, or open it if already previewed."""
        controller = self.controller
        if controller.cursor_on_closed_fold():
            if controller.state is PreviewState.CLOSED:
                return controller.open()
            self._expand_fold()
            controller.close_deferred()
            return True
        if original is not None:
            original()
        return False

    def confirm_and_open(self, original: Fallback) -> bool:
        """Open the fold under the cursor, closing its preview if one is shown."""
        controller = self.controller
        if controller.cursor_on_closed_fold():
            self._expand_fold()
            if controller.state is PreviewState.OPEN:
                controller.close_deferred()
            return True
        original()
        return False

    def dismiss(self, original: Fallback | None = None) -> bool:
        closing = self.controller.close_deferred()
        if original is not None:
            original()
        return closing

    def dismiss_immediate(self, original: Fallback | None = None) -> bool:
        """Close without the one-tick delay; for keys that do not open a fold."""
        closed = self.controller.close()
        if original is not None:
            original()
        return closed
