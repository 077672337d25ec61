"""Configuration defaults, merging, and validation.

User values may come from a JSON file in the platform config directory and
from the mapping passed to :func:`foldpeek.plugin.setup`. Reading the file is
defensive: a missing or malformed file behaves like an empty one. Validation
is strict: an unusable value raises :class:`ConfigurationError`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .border import BorderShift, BorderSpec, normalize_border, resolve_border_shift
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

APP_NAME = "foldpeek"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_BORDER: tuple[str, ...] = (" ", "", " ", " ", " ", " ", " ", " ")
DEFAULT_CONFIG: dict[str, object] = {
    "border": DEFAULT_BORDER,
    "default_keybindings": True,
}


@dataclass(frozen=True)
class FoldPeekConfig:
    """Resolved configuration. ``border_shift`` is derived from ``border``."""

    border: BorderSpec = DEFAULT_BORDER
    default_keybindings: bool = True
    border_shift: BorderShift = BorderShift(0, -1, -1, -1)


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the user's JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = CONFIG_PATH if path is None else path
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    if not isinstance(data, dict):
        logger.debug("ignoring %s: top-level value is not an object", config_path)
        return {}
    return data


def merge_config(*layers: Mapping[str, object] | None) -> dict[str, object]:
    """Merge layers over :data:`DEFAULT_CONFIG`; later layers win per key."""
    merged = dict(DEFAULT_CONFIG)
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            if key not in DEFAULT_CONFIG:
                logger.debug("ignoring unknown config key %r", key)
                continue
            merged[key] = value
    return merged


def resolve_config(*layers: Mapping[str, object] | None) -> FoldPeekConfig:
    """Merge, validate, and derive the border shift.

    Raises :class:`ConfigurationError` for an invalid border or a
    non-boolean ``default_keybindings``.
    """
    merged = merge_config(*layers)
    border = normalize_border(merged["border"])
    default_keybindings = merged["default_keybindings"]
    if not isinstance(default_keybindings, bool):
        raise ConfigurationError(
            f"Invalid default_keybindings value {default_keybindings!r}; expected true or false"
        )
    return FoldPeekConfig(
        border=border,
        default_keybindings=default_keybindings,
        border_shift=resolve_border_shift(border),
    )
