"""
Error taxonomy for color conversion and palette construction.

Every error is a ``ValueError`` so callers validating input can keep a single
``except ValueError`` clause.
"""

from __future__ import annotations

from typing import Any, Optional


class ColorError(ValueError):
    """Base class for recoverable color-processing errors."""


class UnsupportedSpaceError(ColorError):
    """Requested color space (or gamut) is not part of the registry."""

    def __init__(self, space: Any, message: Optional[str] = None) -> None:
        self.space = space
        super().__init__(message or f"Unsupported color space: {space!r}")


class NoConversionPathError(ColorError):
    """No route (or no implemented step) between two color spaces."""

    def __init__(self, source: Any, target: Any, message: Optional[str] = None) -> None:
        self.source = source
        self.target = target
        super().__init__(
            message
            or f"No conversion path from {getattr(source, 'value', source)} "
            f"to {getattr(target, 'value', target)}"
        )


class InvalidColorError(ColorError):
    """Color value does not match the layout of its color space."""
