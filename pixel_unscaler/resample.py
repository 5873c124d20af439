"""Nearest-neighbour downscaling by a detected stride."""
from __future__ import annotations

from PIL import Image

from .config import PixelUnscalerError


def downscale(img: Image.Image, stride: int) -> Image.Image:
    """Shrink an image by an integer factor on both axes.

    Each output pixel takes the colour of the nearest source pixel, so a
    frame made of solid stride x stride blocks is restored exactly.

    Args:
        img: Input image.
        stride: Detected magnification factor.

    Returns:
        Image of size (width // stride, height // stride), same mode.

    Raises:
        PixelUnscalerError: If the stride is below 2 or the result is empty.
    """
    if stride < 2:
        raise PixelUnscalerError(f"Invalid downscale stride: {stride}")

    width, height = img.size
    out_w = width // stride
    out_h = height // stride
    if out_w == 0 or out_h == 0:
        raise PixelUnscalerError(
            f"Stride {stride} too large for {width}x{height} image"
        )

    return img.resize((out_w, out_h), resample=Image.NEAREST)
