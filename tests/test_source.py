"""Tests for source module."""
from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from pixel_unscaler.config import PixelUnscalerError
from pixel_unscaler.source import PixelSource, as_pixel_source


class TestPixelSource:
    """Tests for PixelSource class."""

    def test_dimensions(self, upscaled_image: Image.Image) -> None:
        """Should expose the frame size."""
        source = PixelSource.from_image(upscaled_image)
        assert source.width == 16
        assert source.height == 12

    def test_get_returns_rgba_tuple(self) -> None:
        """Should return plain int tuples addressed by (x, y)."""
        arr = np.zeros((2, 3, 4), dtype=np.uint8)
        arr[1, 2] = (10, 20, 30, 40)
        source = PixelSource(arr)

        assert source.get(2, 1) == (10, 20, 30, 40)
        assert source.get(0, 0) == (0, 0, 0, 0)
        assert isinstance(source.get(2, 1), tuple)

    def test_out_of_bounds(self) -> None:
        """Should reject coordinates outside the frame."""
        source = PixelSource(np.zeros((2, 2, 4), dtype=np.uint8))
        with pytest.raises(IndexError):
            source.get(2, 0)
        with pytest.raises(IndexError):
            source.get(0, -1)

    def test_converts_non_rgba(self) -> None:
        """Should convert other modes to RGBA."""
        img = Image.new("RGB", (3, 2), (1, 2, 3))
        source = PixelSource.from_image(img)
        assert source.get(1, 1) == (1, 2, 3, 255)

    def test_rejects_wrong_shape(self) -> None:
        """Should reject arrays without four channels."""
        with pytest.raises(PixelUnscalerError, match="RGBA"):
            PixelSource(np.zeros((2, 2, 3), dtype=np.uint8))

    def test_empty_frame(self) -> None:
        """Should accept a 0x0 frame."""
        source = PixelSource(np.zeros((0, 0, 4), dtype=np.uint8))
        assert source.width == 0
        assert source.height == 0


class TestAsPixelSource:
    """Tests for as_pixel_source function."""

    def test_from_image(self, upscaled_image: Image.Image) -> None:
        """Should wrap Pillow images."""
        source = as_pixel_source(upscaled_image)
        assert isinstance(source, PixelSource)

    def test_from_array(self) -> None:
        """Should wrap RGBA arrays."""
        source = as_pixel_source(np.zeros((2, 5, 4), dtype=np.uint8))
        assert (source.width, source.height) == (5, 2)

    def test_passes_through_duck_typed(self) -> None:
        """Should return objects that already look like a source."""

        class Solid:
            width = 2
            height = 2

            def get(self, x, y):
                return (1, 1, 1, 255)

        solid = Solid()
        assert as_pixel_source(solid) is solid

    def test_rejects_unknown(self) -> None:
        """Should reject unsupported types."""
        with pytest.raises(PixelUnscalerError, match="Unsupported"):
            as_pixel_source("not an image")
