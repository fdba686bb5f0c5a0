"""Exception types raised by the dotforge pipeline."""
from __future__ import annotations


class DotforgeError(ValueError):
    """Base class for all pipeline errors."""


class InvalidConfiguration(DotforgeError):
    """A grid, output size or enumeration value is unusable.

    Raised before any pixel work starts, so no partial buffer is produced.
    """


class DimensionMismatch(DotforgeError):
    """The declared width * height does not match the pixel count."""


class NoSourceImage(DotforgeError):
    """A pipeline was asked to run before a source image was loaded."""


__all__ = [
    "DotforgeError",
    "InvalidConfiguration",
    "DimensionMismatch",
    "NoSourceImage",
]
