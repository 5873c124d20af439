"""Pytest fixtures for pixel_unscaler tests."""
from __future__ import annotations

from typing import List

import numpy as np
import pytest
from PIL import Image

from helpers import add_border, make_sprite, to_image, to_png_bytes, upscale_array
from pixel_unscaler import Config


@pytest.fixture
def default_config() -> Config:
    """Return a default Config instance."""
    return Config()


@pytest.fixture
def sprite() -> np.ndarray:
    """A 4x3 sprite at native resolution."""
    return make_sprite(4, 3)


@pytest.fixture
def upscaled_image(sprite: np.ndarray) -> Image.Image:
    """The 4x3 sprite magnified 4 times (16x12)."""
    return to_image(upscale_array(sprite, 4))


@pytest.fixture
def upscaled_image_bytes(upscaled_image: Image.Image) -> bytes:
    """Return the upscaled sprite as PNG bytes."""
    return to_png_bytes(upscaled_image)


@pytest.fixture
def bordered_image(sprite: np.ndarray) -> Image.Image:
    """The sprite magnified 3 times inside a 1-pixel border (14x11)."""
    return to_image(add_border(upscale_array(sprite, 3)))


@pytest.fixture
def animation_frames() -> List[Image.Image]:
    """Three distinct frames of a 4x3 sprite magnified 2 times."""
    return [
        to_image(upscale_array(make_sprite(4, 3, shift=shift), 2))
        for shift in range(3)
    ]
