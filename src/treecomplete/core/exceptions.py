"""Custom exceptions for treecomplete."""

from __future__ import annotations

from pathlib import Path


class TreeCompleteError(Exception):
    """Base exception for all treecomplete errors."""


class ValidationError(TreeCompleteError, ValueError):
    """Malformed catalog entity (empty name, bad option spelling, ...)."""


class CatalogCorruptError(TreeCompleteError):
    """A declared catalog file is missing or cannot be parsed."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Corrupt catalog file {self.path}: {reason}")


class ConfigError(TreeCompleteError):
    """Configuration error."""


class NotFoundError(TreeCompleteError):
    """Catalog path not found."""
