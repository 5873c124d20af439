"""Random-access RGBA pixel lookup for stride detection."""
from __future__ import annotations

from typing import Tuple, Union

import numpy as np
from PIL import Image

from .config import PixelUnscalerError

# (r, g, b, a), 8 bits per channel
Color = Tuple[int, int, int, int]


class PixelSource:
    """One frame of RGBA pixels with ``get(x, y)`` lookup.

    Any object exposing ``width``, ``height`` and ``get`` can be handed to
    the scanner; this implementation wraps a decoded image and also exposes
    the pixels packed one ``uint32`` per pixel, which the scanner compares
    whole rows and columns at a time.
    """

    def __init__(self, pixels: np.ndarray) -> None:
        arr = np.ascontiguousarray(pixels, dtype=np.uint8)
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise PixelUnscalerError(
                f"Expected an RGBA array of shape (height, width, 4), got {arr.shape}"
            )
        self.height, self.width = arr.shape[:2]
        self.pixels = arr
        # View, not a copy: equal packed values means equal RGBA
        self.packed: np.ndarray = arr.view(np.uint32)[..., 0]
        self.alpha: np.ndarray = arr[..., 3]

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelSource":
        """Build a source from a Pillow image of any mode."""
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        width, height = img.size
        if width == 0 or height == 0:
            return cls(np.zeros((height, width, 4), dtype=np.uint8))
        return cls(np.array(img, dtype=np.uint8))

    def get(self, x: int, y: int) -> Color:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) outside {self.width}x{self.height} frame"
            )
        r, g, b, a = self.pixels[y, x]
        return int(r), int(g), int(b), int(a)

    def __repr__(self) -> str:
        return f"PixelSource({self.width}x{self.height})"


def as_pixel_source(
    frame: Union[PixelSource, Image.Image, np.ndarray],
) -> PixelSource:
    """Coerce a Pillow image or RGBA array into something the scanner reads.

    Objects that already provide ``width``, ``height`` and ``get`` are
    returned unchanged.
    """
    if isinstance(frame, Image.Image):
        return PixelSource.from_image(frame)
    if isinstance(frame, np.ndarray):
        return PixelSource(frame)
    if all(hasattr(frame, attr) for attr in ("width", "height", "get")):
        return frame
    raise PixelUnscalerError(
        f"Unsupported pixel source type: {type(frame).__name__}"
    )
