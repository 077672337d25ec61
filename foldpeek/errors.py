"""Exception types raised across the public API."""

from __future__ import annotations


class FoldPeekError(Exception):
    """Base class for errors reported by foldpeek."""


class ConfigurationError(FoldPeekError, ValueError):
    """Raised at setup time when a configuration value cannot be used."""
