"""Pixel Unscaler - Restore upscaled pixel art to its original resolution.

This package detects the integer factor by which pixel art was magnified
with nearest-neighbour scaling and shrinks it back without blurring.

Example:
    from pixel_unscaler import Config, process_image_bytes

    with open("sprite_x4.png", "rb") as f:
        input_bytes = f.read()

    output_bytes = process_image_bytes(input_bytes, Config())

    with open("sprite.png", "wb") as f:
        f.write(output_bytes)

Stride detection works directly on Pillow images as well:

    from pixel_unscaler import UNDETECTED, detect_stride

    stride = detect_stride(img)
    if stride == UNDETECTED:
        print("not nearest-neighbour pixel art")

For debug logging, enable with:

    import logging
    logging.getLogger("pixel_unscaler").setLevel(logging.DEBUG)
    logging.basicConfig(level=logging.DEBUG)
"""
import logging

# Package logger - disabled by default, enable with logging.getLogger("pixel_unscaler").setLevel(logging.DEBUG)
logger = logging.getLogger("pixel_unscaler")
logger.addHandler(logging.NullHandler())
from .aggregate import detect_animation_stride, detect_stride
from .cli import (
    ProcessingResult,
    main,
    process_image,
    process_image_bytes,
    process_image_bytes_with_stride,
)
from .config import Config, PixelUnscalerError
from .reducer import UNDETECTED, reduce_stride
from .resample import downscale
from .scanner import Candidates, Disproved, scan_runs
from .source import PixelSource

__all__ = [
    "Config",
    "PixelUnscalerError",
    "ProcessingResult",
    "main",
    "process_image",
    "process_image_bytes",
    "process_image_bytes_with_stride",
    # Stride detection
    "UNDETECTED",
    "PixelSource",
    "Candidates",
    "Disproved",
    "scan_runs",
    "reduce_stride",
    "detect_stride",
    "detect_animation_stride",
    "downscale",
]

__version__ = "1.0.0"
