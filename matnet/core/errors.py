"""Exception hierarchy for matnet."""

from __future__ import annotations


class MatnetError(Exception):
    """Base class for every error raised by matnet."""


class ShapeMismatchError(MatnetError, ValueError):
    """Raised when two matrices cannot be combined because of their shapes."""


class InvalidArgumentError(MatnetError, ValueError):
    """Raised for empty batches, non-positive dimensions and similar misuse."""


__all__ = ["MatnetError", "ShapeMismatchError", "InvalidArgumentError"]
