"""Reference in-process viewport host used by tests and embedders."""

from .buffer import Fold, Overlay, TextBuffer
from .render import render_window
from .window import TextWindow

__all__ = ["Fold", "Overlay", "TextBuffer", "TextWindow", "render_window"]
