"""Decoding and encoding of still images and animations."""
from __future__ import annotations

import io
import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from PIL import Image, ImageSequence, UnidentifiedImageError

from .config import PixelUnscalerError

logger = logging.getLogger("pixel_unscaler")

# Formats that can be written as animations
ANIMATED_OUTPUT_FORMATS = ("GIF",)

_PREFERRED_EXTENSIONS = {
    "PNG": "png",
    "GIF": "gif",
    "WEBP": "webp",
    "JPEG": "jpg",
    "BMP": "bmp",
    "TIFF": "tif",
}


@dataclass
class AnimationFrames:
    """Decoded frames of an image together with their timing metadata."""

    frames: List[Image.Image]
    durations: List[Optional[int]] = field(default_factory=list)
    loop: Optional[int] = None
    format: Optional[str] = None

    @property
    def is_animated(self) -> bool:
        return len(self.frames) > 1

    @property
    def size(self):
        if not self.frames:
            return (0, 0)
        return self.frames[0].size


def load_frames(input_bytes: bytes) -> AnimationFrames:
    """Decode every frame of an image as RGBA.

    Args:
        input_bytes: Encoded image (PNG, APNG, GIF, WebP, ...).

    Returns:
        AnimationFrames with one entry per frame. Still images yield a
        single frame.

    Raises:
        PixelUnscalerError: If the data is not a readable image.
    """
    try:
        img = Image.open(io.BytesIO(input_bytes))
    except UnidentifiedImageError as exc:
        raise PixelUnscalerError(f"Cannot read image: {exc}") from exc

    frames: List[Image.Image] = []
    durations: List[Optional[int]] = []
    for frame in ImageSequence.Iterator(img):
        durations.append(frame.info.get("duration"))
        frames.append(frame.convert("RGBA"))

    loop = img.info.get("loop")
    logger.debug(
        f"Decoded {img.format} image: {len(frames)} frame(s), "
        f"size={img.size}, loop={loop}"
    )
    return AnimationFrames(
        frames=frames, durations=durations, loop=loop, format=img.format
    )


def encode_frames(
    frames: Sequence[Image.Image],
    output_format: str,
    durations: Optional[Sequence[Optional[int]]] = None,
    loop: Optional[int] = None,
) -> bytes:
    """Encode frames as an animation, or as a still image of the first frame.

    Multiple frames are only written as an animation when the output format
    supports it; otherwise only the first frame is kept.

    Args:
        frames: RGBA frames to write.
        output_format: Pillow format name, e.g. ``"PNG"`` or ``"GIF"``.
        durations: Per-frame display time in milliseconds.
        loop: Loop count for animations, 0 meaning forever.

    Returns:
        Encoded image bytes.
    """
    if not frames:
        raise PixelUnscalerError("No frames to encode")

    output_format = output_format.upper()
    out_buf = io.BytesIO()

    if len(frames) > 1 and output_format in ANIMATED_OUTPUT_FORMATS:
        save_kwargs = {
            "save_all": True,
            "append_images": list(frames[1:]),
            "loop": 0 if loop is None else loop,
            "disposal": 2,
        }
        if durations and all(d is not None for d in durations):
            save_kwargs["duration"] = list(durations)
        frames[0].save(out_buf, format=output_format, **save_kwargs)
        return out_buf.getvalue()

    still = frames[0]
    if output_format == "JPEG":
        still = still.convert("RGB")
    still.save(out_buf, format=output_format)
    return out_buf.getvalue()


def format_for_path(path: str) -> Optional[str]:
    """Return the Pillow format name implied by a file extension."""
    _, ext = os.path.splitext(path)
    if not ext:
        return None
    return Image.registered_extensions().get(ext.lower())


def extension_for_format(output_format: str) -> str:
    """Return the usual file extension (without dot) for a format."""
    output_format = output_format.upper()
    if output_format in _PREFERRED_EXTENSIONS:
        return _PREFERRED_EXTENSIONS[output_format]
    for ext, fmt in Image.registered_extensions().items():
        if fmt == output_format:
            return ext.lstrip(".")
    return output_format.lower()
