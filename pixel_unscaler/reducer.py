"""Reduction of candidate run lengths to a single stride."""
from __future__ import annotations

from typing import Iterable, Tuple

# Returned when no magnification could be detected. Callers must treat it as
# failure, never as "image is already at native size".
UNDETECTED = 1


def reduce_stride(
    candidates: Iterable[int],
    dimensions: Iterable[Tuple[int, int]] = (),
) -> int:
    """Pick the stride explaining every observed run length.

    The smallest candidate is taken as the block size and must evenly divide
    every other candidate. This is not a full GCD: inconsistent evidence
    fails instead of falling back to a smaller common divisor.

    Args:
        candidates: Observed run lengths.
        dimensions: Optional (width, height) pairs that must also be
            multiples of the stride.

    Returns:
        The detected stride (>= 2), or ``UNDETECTED``.
    """
    ordered = sorted(set(candidates))
    if not ordered:
        return UNDETECTED

    min_stride = ordered[0]
    others = ordered[1:]
    if min_stride == 0:
        if not others:
            return UNDETECTED
        min_stride, others = others[0], others[1:]

    if min_stride == 1:
        return UNDETECTED

    # Stricter than judging candidates alone: a frame whose runs all agree
    # on a stride is still rejected when its size is not a multiple of it.
    for width, height in dimensions:
        if width % min_stride != 0 or height % min_stride != 0:
            return UNDETECTED

    for other in others:
        if other % min_stride != 0:
            return UNDETECTED

    return min_stride
