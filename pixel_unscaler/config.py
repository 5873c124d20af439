"""Configuration and validation for pixel unscaler."""
from __future__ import annotations

from dataclasses import dataclass


class PixelUnscalerError(Exception):
    """Base exception for pixel unscaler errors."""

    pass


@dataclass
class Config:
    """Configuration for the unscaling pipeline."""

    input_path: str = ""
    output_path: str = ""
    in_place: bool = False

    # Stride detection options
    first_frame_only: bool = False
    ignore_border: bool = False
    workers: int = 1

    timing: bool = False
    debug: bool = False


def validate_image_dimensions(width: int, height: int) -> None:
    """Validate image dimensions are within acceptable bounds.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.

    Raises:
        PixelUnscalerError: If dimensions are invalid.
    """
    if width == 0 or height == 0:
        raise PixelUnscalerError("Image dimensions cannot be zero")
    if width > 10000 or height > 10000:
        raise PixelUnscalerError("Image dimensions too large (max 10000x10000)")
