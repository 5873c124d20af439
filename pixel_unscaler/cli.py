"""Command-line interface for pixel unscaler."""
from __future__ import annotations

import logging
import os
import sys
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence

logger = logging.getLogger("pixel_unscaler")

from .aggregate import detect_animation_stride, detect_stride
from .config import Config, PixelUnscalerError, validate_image_dimensions
from .frames import (
    ANIMATED_OUTPUT_FORMATS,
    encode_frames,
    extension_for_format,
    format_for_path,
    load_frames,
)
from .reducer import UNDETECTED
from .resample import downscale


@dataclass
class ProcessingResult:
    """Result of image processing including the detected stride."""

    output_bytes: bytes
    stride: int
    width: int
    height: int
    frame_count: int
    output_format: str = "PNG"

    @property
    def output_size(self):
        return self.width // self.stride, self.height // self.stride


def process_image_bytes(
    input_bytes: bytes,
    config: Optional[Config] = None,
    output_format: Optional[str] = None,
) -> bytes:
    """Restore upscaled pixel art to its original resolution.

    Args:
        input_bytes: Input image bytes (PNG, GIF, WebP, ...).
        config: Configuration options. Uses defaults if None.
        output_format: Pillow format name to encode with. Defaults to the
            input's format.

    Returns:
        Output image bytes.
    """
    result = process_image_bytes_with_stride(input_bytes, config, output_format)
    return result.output_bytes


def process_image_bytes_with_stride(
    input_bytes: bytes,
    config: Optional[Config] = None,
    output_format: Optional[str] = None,
) -> ProcessingResult:
    """Detect the stride of an image or animation and shrink every frame.

    Animations written to a format that cannot hold them are reduced to
    their first frame, and only that frame is analysed.

    Args:
        input_bytes: Input image bytes.
        config: Configuration options. Uses defaults if None.
        output_format: Pillow format name to encode with. Defaults to the
            input's format, or PNG if that is unknown.

    Returns:
        ProcessingResult with output bytes and the detected stride.

    Raises:
        PixelUnscalerError: If the image is invalid or no stride is found.
    """
    config = config or Config()

    t0 = time.perf_counter()
    animation = load_frames(input_bytes)
    width, height = animation.size
    validate_image_dimensions(width, height)
    output_format = (output_format or animation.format or "PNG").upper()
    logger.debug(f"Output format: {output_format}")
    t1 = time.perf_counter()

    frames = animation.frames
    if animation.is_animated and output_format not in ANIMATED_OUTPUT_FORMATS:
        print(
            f"animated {output_format} images are not supported, "
            "writing still image instead",
            file=sys.stderr,
        )
        frames = frames[:1]

    if len(frames) > 1:
        stride = detect_animation_stride(
            frames,
            ignore_border=config.ignore_border,
            first_frame_only=config.first_frame_only,
            workers=config.workers,
        )
    else:
        stride = detect_stride(frames[0], ignore_border=config.ignore_border)
    logger.debug(f"Detected stride: {stride} ({len(frames)} frame(s) analysed)")
    t2 = time.perf_counter()

    if stride <= UNDETECTED:
        raise PixelUnscalerError("failed to detect pixel art scaling")

    resized = [downscale(frame, stride) for frame in frames]
    t3 = time.perf_counter()

    output_bytes = encode_frames(
        resized,
        output_format,
        durations=animation.durations[: len(resized)],
        loop=animation.loop,
    )
    t4 = time.perf_counter()

    if config.timing:
        print(
            "Timing (s): "
            f"load={t1 - t0:.4f}, "
            f"detect={t2 - t1:.4f}, "
            f"resize={t3 - t2:.4f}, "
            f"encode={t4 - t3:.4f}, "
            f"total={t4 - t0:.4f}"
        )

    return ProcessingResult(
        output_bytes=output_bytes,
        stride=stride,
        width=width,
        height=height,
        frame_count=len(resized),
        output_format=output_format,
    )


def resolve_output_path(config: Config, output_format: str) -> str:
    """Work out where to write the result.

    An explicit output path wins; otherwise the input is overwritten when
    ``in_place`` is set, or ``{name}.scaled.{ext}`` is written next to it.
    """
    if config.output_path:
        return config.output_path
    if config.in_place:
        return config.input_path
    root, _ = os.path.splitext(config.input_path)
    return f"{root}.scaled.{extension_for_format(output_format)}"


def process_image(config: Config) -> None:
    """Process an image file.

    Args:
        config: Configuration with input/output paths.
    """
    with open(config.input_path, "rb") as f:
        img_bytes = f.read()

    output_format = None
    if config.output_path:
        output_format = format_for_path(config.output_path)

    result = process_image_bytes_with_stride(img_bytes, config, output_format)
    out_w, out_h = result.output_size
    print(f"resizing {result.width} x {result.height} -> {out_w} x {out_h}")

    output_path = resolve_output_path(config, result.output_format)
    with open(output_path, "wb") as f:
        f.write(result.output_bytes)

    print(f"written {output_path}")


def parse_args(argv: Sequence[str]) -> Config:
    """Parse command-line arguments.

    Args:
        argv: Command-line arguments (including program name).

    Returns:
        Configured Config instance.

    Raises:
        PixelUnscalerError: If arguments are invalid.
    """
    args = list(argv[1:])
    in_place = False
    first_frame_only = False
    ignore_border = False
    workers = 1
    timing = False
    debug = False
    positional: List[str] = []

    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("-i", "--in-place"):
            in_place = True
            i += 1
        elif arg in ("-f", "--only-analyze-first"):
            first_frame_only = True
            i += 1
        elif arg in ("-b", "--ignore-border"):
            ignore_border = True
            i += 1
        elif arg == "--timing":
            timing = True
            i += 1
        elif arg == "--debug":
            debug = True
            i += 1
        elif arg in ("-j", "--workers"):
            if i + 1 >= len(args):
                raise PixelUnscalerError(_usage_message())
            try:
                workers = int(args[i + 1])
            except ValueError:
                raise PixelUnscalerError(
                    f"Invalid workers value: '{args[i + 1]}'"
                )
            if workers <= 0:
                raise PixelUnscalerError("workers must be a positive integer")
            i += 2
        elif arg.startswith("-") and len(arg) > 1:
            raise PixelUnscalerError(f"Unknown option: {arg}\n{_usage_message()}")
        else:
            positional.append(arg)
            i += 1

    if not positional or len(positional) > 2:
        raise PixelUnscalerError(_usage_message())

    config = Config(
        input_path=positional[0],
        output_path=positional[1] if len(positional) == 2 else "",
        in_place=in_place,
        first_frame_only=first_frame_only,
        ignore_border=ignore_border,
        workers=workers,
        timing=timing,
        debug=debug,
    )

    # Enable debug logging if requested
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(name)s: %(message)s"
        )
        logging.getLogger("pixel_unscaler").setLevel(logging.DEBUG)

    return config


def _usage_message() -> str:
    """Return usage message string."""
    return (
        "Usage: python pixel_unscaler.py input.png [output.png] "
        "[--in-place] [--only-analyze-first] [--ignore-border] "
        "[--workers N] [--timing] [--debug]"
    )


def main(argv: Sequence[str]) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    try:
        config = parse_args(argv)
        process_image(config)
        return 0
    except PixelUnscalerError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except Exception as exc:
        print(f"Processing error: {exc}", file=sys.stderr)
        return 1


def run() -> None:
    """Console script entry point."""
    sys.exit(main(sys.argv))
