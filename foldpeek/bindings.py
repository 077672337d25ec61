"""Key-binding amendment: wrap existing keys with preview commands."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from .commands import PreviewCommands

KeyHandler = Callable[[], Any]
KeyWrapper = Callable[[KeyHandler], Any]


class BindingInterceptor(Protocol):
    """Anything that can replace a key with a wrapper receiving the old handler."""

    def amend(self, mode: str, key: str, wrapper: KeyWrapper) -> None: ...


def _noop() -> None:
    return None


class KeymapRegistry:
    """Per-mode key table whose entries can be amended in place."""

    def __init__(self) -> None:
        self._handlers: dict[tuple[str, str], KeyHandler] = {}

    def register(self, mode: str, key: str, handler: KeyHandler) -> KeymapRegistry:
        """Bind ``key`` in ``mode``, replacing any existing handler."""
        self._handlers[(mode, key)] = handler
        return self

    def amend(self, mode: str, key: str, wrapper: KeyWrapper) -> None:
        """Bind ``wrapper`` so it receives the previous handler as its fallback.

        Unbound keys get a no-op fallback.
        """
        original = self._handlers.get((mode, key), _noop)
        self._handlers[(mode, key)] = lambda: wrapper(original)

    def handler(self, mode: str, key: str) -> KeyHandler | None:
        return self._handlers.get((mode, key))

    def keys(self, mode: str) -> list[str]:
        return sorted(key for bound_mode, key in self._handlers if bound_mode == mode)

    def dispatch(self, mode: str, key: str) -> Any:
        """Invoke the handler for ``key``; ``None`` when the key is unbound."""
        handler = self._handlers.get((mode, key))
        if handler is None:
            return None
        return handler()


@dataclass(frozen=True)
class AmendedBinding:
    """Keys in one mode that get wrapped by the named preview command."""

    mode: str
    keys: tuple[str, ...]
    command: str


DEFAULT_BINDINGS: tuple[AmendedBinding, ...] = (
    AmendedBinding("n", ("h",), "show_or_confirm_and_open"),
    AmendedBinding("n", ("l",), "confirm_and_open"),
    AmendedBinding("n", ("zo", "zO", "zR"), "dismiss"),
    AmendedBinding("n", ("zc", "zM"), "dismiss_immediate"),
)


def install_bindings(
    interceptor: BindingInterceptor,
    commands: PreviewCommands,
    bindings: tuple[AmendedBinding, ...] = DEFAULT_BINDINGS,
) -> int:
    """Amend every key in ``bindings``; return how many keys were wrapped."""
    installed = 0
    for binding in bindings:
        command = getattr(commands, binding.command)
        for key in binding.keys:
            interceptor.amend(binding.mode, key, command)
            installed += 1
    return installed
