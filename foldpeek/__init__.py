"""Public package surface for foldpeek.

Exports ``setup`` plus the types an embedding editor needs to implement a
viewport host. Most implementation lives in submodules under ``foldpeek``.
"""

from __future__ import annotations

from .border import BorderShift, resolve_border_shift
from .commands import PreviewCommands
from .config import FoldPeekConfig, resolve_config
from .controller import PreviewController, PreviewState
from .errors import ConfigurationError, FoldPeekError
from .host import HostEvent, OverlaySpec, ViewportHost
from .plugin import FoldPeek, setup

__version__ = "0.1.0"

__all__ = [
    "BorderShift",
    "ConfigurationError",
    "FoldPeek",
    "FoldPeekConfig",
    "FoldPeekError",
    "HostEvent",
    "OverlaySpec",
    "PreviewCommands",
    "PreviewController",
    "PreviewState",
    "ViewportHost",
    "resolve_border_shift",
    "resolve_config",
    "setup",
]
