"""Stride detection across still images and animation frames."""
from __future__ import annotations

import concurrent.futures as cf
import itertools
from typing import Iterable, List, Optional, Set, Tuple, Union

import numpy as np
from PIL import Image

from .reducer import UNDETECTED, reduce_stride
from .scanner import Disproved, scan_runs
from .source import PixelSource, as_pixel_source

Frame = Union[PixelSource, Image.Image, np.ndarray]


def detect_stride(frame: Frame, ignore_border: bool = False) -> int:
    """Detect the magnification factor of a single still image.

    Args:
        frame: Image to analyse.
        ignore_border: Tolerate a border that is not aligned to the grid.

    Returns:
        The detected stride (>= 2), or ``UNDETECTED`` (1).
    """
    return detect_animation_stride([frame], ignore_border=ignore_border)


def detect_animation_stride(
    frames: Iterable[Frame],
    ignore_border: bool = False,
    first_frame_only: bool = False,
    workers: int = 1,
) -> int:
    """Detect one magnification factor shared by all frames.

    Run lengths of every scanned frame are merged into one candidate set
    before reduction. A single frame containing a lone pixel run decides
    the result, so later frames are not scanned.

    Args:
        frames: Frames in display order.
        ignore_border: Tolerate a border that is not aligned to the grid.
            Also skips the check that the stride divides the frame size.
        first_frame_only: Only scan the first frame. Faster, but a blank
            first frame gives no evidence at all.
        workers: Number of threads scanning frames concurrently.

    Returns:
        The detected stride (>= 2), or ``UNDETECTED`` (1).
    """
    if first_frame_only:
        first = next(iter(frames), None)
        if first is None:
            return UNDETECTED
        frames = [first]

    if workers > 1:
        scanned = _scan_parallel(frames, ignore_border, workers)
    else:
        scanned = _scan_serial(frames, ignore_border)
    if scanned is None:
        return UNDETECTED

    lengths, dimensions = scanned
    if ignore_border:
        dimensions = []
    return reduce_stride(lengths, dimensions)


def _scan_serial(
    frames: Iterable[Frame], ignore_border: bool
) -> Optional[Tuple[Set[int], List[Tuple[int, int]]]]:
    lengths: Set[int] = set()
    dimensions: List[Tuple[int, int]] = []
    for frame in frames:
        source = as_pixel_source(frame)
        if isinstance(scan_runs(source, ignore_border, lengths), Disproved):
            return None
        dimensions.append((source.width, source.height))
    return lengths, dimensions


def _scan_one(frame: Frame, ignore_border: bool):
    source = as_pixel_source(frame)
    return scan_runs(source, ignore_border), (source.width, source.height)


def _scan_parallel(
    frames: Iterable[Frame], ignore_border: bool, workers: int
) -> Optional[Tuple[Set[int], List[Tuple[int, int]]]]:
    """Scan frames on a thread pool, each into its own candidate set.

    The numpy comparisons in the scan release the GIL, so frames overlap.
    At most ``workers`` frames are in flight; once one disproves, nothing
    more is submitted and queued scans are cancelled.
    """
    lengths: Set[int] = set()
    dimensions: List[Tuple[int, int]] = []
    remaining = iter(frames)
    with cf.ThreadPoolExecutor(max_workers=workers) as ex:
        pending = {
            ex.submit(_scan_one, frame, ignore_border)
            for frame in itertools.islice(remaining, workers)
        }
        while pending:
            done, pending = cf.wait(pending, return_when=cf.FIRST_COMPLETED)
            for future in done:
                result, size = future.result()
                if isinstance(result, Disproved):
                    for other in pending:
                        other.cancel()
                    return None
                lengths |= result.lengths
                dimensions.append(size)
            for frame in itertools.islice(remaining, len(done)):
                pending.add(ex.submit(_scan_one, frame, ignore_border))
    return lengths, dimensions
