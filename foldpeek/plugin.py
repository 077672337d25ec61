"""Entry point that wires configuration, controller, commands, and keys."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from .bindings import BindingInterceptor, install_bindings
from .commands import PreviewCommands
from .config import FoldPeekConfig, load_config, resolve_config
from .controller import PreviewController
from .host import ViewportHost

logger = logging.getLogger(__name__)

MISSING_INTERCEPTOR_MESSAGE = "The key binding interceptor is required for preview key mappings to work"


class WarningReporter:
    """Report each distinct warning once, to the log and to the host."""

    def __init__(self) -> None:
        self.reported: set[str] = set()

    def warn(self, message: str, host: ViewportHost | None = None) -> bool:
        if message in self.reported:
            return False
        self.reported.add(message)
        logger.warning("%s", message)
        if host is not None:
            host.notify(f"[foldpeek] {message}")
        return True


DEFAULT_REPORTER = WarningReporter()


@dataclass(frozen=True)
class FoldPeek:
    config: FoldPeekConfig
    controller: PreviewController
    commands: PreviewCommands
    bindings_installed: bool


def setup(
    host: ViewportHost,
    config: Mapping[str, object] | None = None,
    *,
    interceptor: BindingInterceptor | None = None,
    use_config_file: bool = False,
    reporter: WarningReporter | None = None,
) -> FoldPeek:
    """Resolve configuration and return a ready-to-use preview controller.

    A bad configuration raises :class:`~foldpeek.errors.ConfigurationError`
    before anything is installed. A missing interceptor only skips the key
    bindings; the commands stay callable directly.
    """
    file_config = load_config() if use_config_file else None
    resolved = resolve_config(file_config, config)

    controller = PreviewController(host, resolved)
    commands = PreviewCommands(controller)
    bindings_installed = False
    if resolved.default_keybindings:
        if interceptor is None:
            (reporter or DEFAULT_REPORTER).warn(MISSING_INTERCEPTOR_MESSAGE, host)
        else:
            count = install_bindings(interceptor, commands)
            logger.debug("amended %d key bindings", count)
            bindings_installed = True
    return FoldPeek(
        config=resolved,
        controller=controller,
        commands=commands,
        bindings_installed=bindings_installed,
    )
