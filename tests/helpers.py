"""Synthetic pixel-art builders shared by the tests."""
from __future__ import annotations

import io
from typing import List, Optional, Sequence, Tuple

import numpy as np
from PIL import Image

PALETTE = [
    (255, 0, 0, 255),    # Red
    (0, 255, 0, 255),    # Green
    (0, 0, 255, 255),    # Blue
    (255, 255, 0, 255),  # Yellow
    (0, 255, 255, 255),  # Cyan
]

BORDER_COLOR = (20, 20, 20, 255)


def make_sprite(width: int, height: int, shift: int = 0) -> np.ndarray:
    """Create an RGBA array in which no two neighbouring pixels match.

    Horizontal neighbours differ by 1 and vertical neighbours by 2 in
    palette index, so no run ever spans more than one pixel.
    """
    arr = np.zeros((height, width, 4), dtype=np.uint8)
    for y in range(height):
        for x in range(width):
            arr[y, x] = PALETTE[(x + 2 * y + shift) % len(PALETTE)]
    return arr


def upscale_array(arr: np.ndarray, factor: int) -> np.ndarray:
    """Nearest-neighbour magnify an RGBA array by an integer factor."""
    return np.repeat(np.repeat(arr, factor, axis=0), factor, axis=1)


def add_border(arr: np.ndarray, color=BORDER_COLOR) -> np.ndarray:
    """Surround an RGBA array with a 1-pixel frame."""
    height, width = arr.shape[:2]
    out = np.zeros((height + 2, width + 2, 4), dtype=np.uint8)
    out[:, :] = color
    out[1:-1, 1:-1] = arr
    return out


def to_image(arr: np.ndarray) -> Image.Image:
    return Image.fromarray(arr, "RGBA")


def to_png_bytes(img: Image.Image) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def to_gif_bytes(
    frames: Sequence[Image.Image], durations: Optional[List[int]] = None
) -> bytes:
    """Encode frames as a looping animated GIF."""
    buf = io.BytesIO()
    frames[0].save(
        buf,
        format="GIF",
        save_all=True,
        append_images=list(frames[1:]),
        duration=durations or [100] * len(frames),
        loop=0,
    )
    return buf.getvalue()


def solid_array(
    width: int, height: int, color: Tuple[int, int, int, int] = PALETTE[0]
) -> np.ndarray:
    arr = np.zeros((height, width, 4), dtype=np.uint8)
    arr[:, :] = color
    return arr

