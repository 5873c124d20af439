"""Run-length scanning of a single frame.

A frame magnified with nearest-neighbour scaling consists of solid square
blocks, so every horizontal and vertical run of identical pixels has a
length that is a multiple of the block size. The scanner collects those
run lengths as candidates, or reports a disproof as soon as it meets a run
of length one, which no integer magnification can produce.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple, Union

import numpy as np

from .source import Color, PixelSource


@dataclass
class RunState:
    """Colour and length of the run currently open on one scan line."""

    color: Optional[Color] = None
    length: int = 0


@dataclass(frozen=True)
class Disproved:
    """A lone pixel was found: no stride above 1 can explain the frame."""

    x: int
    y: int


@dataclass
class Candidates:
    """Run lengths observed as solid blocks in the scanned frame(s)."""

    lengths: Set[int] = field(default_factory=set)


ScanResult = Union[Disproved, Candidates]

# Pixels compared per numpy pass, bounding temporaries on large frames
_CHUNK_PIXELS = 1 << 20


def _close_run(
    run: RunState,
    end: int,
    line_length: int,
    ignore_border: bool,
    lengths: Set[int],
) -> bool:
    """Record a finished run. Returns False if the run disproves scaling.

    Args:
        run: The run being closed.
        end: Position one past the last pixel of the run.
        line_length: Length of the scan line the run lies on.
        ignore_border: Skip runs touching either end of the line.
        lengths: Candidate set to add the run length to.
    """
    if run.length == 0:
        return True
    if ignore_border:
        start = end - run.length
        if start == 0 or end == line_length:
            return True
    if run.length == 1:
        return False
    # Transparent areas carry no information about the block size
    if run.color[3] > 0:
        lengths.add(run.length)
    return True


def _scan_lines(
    packed: np.ndarray,
    alpha: np.ndarray,
    ignore_border: bool,
    lengths: Set[int],
) -> Optional[Tuple[int, int]]:
    """Collect the runs along every row of a 2-D array of packed pixels.

    Same rules as ``_close_run``, applied to whole blocks of lines at once.
    Pass transposed arrays to scan columns.

    Returns:
        (line, position) of a lone-pixel run, or None.
    """
    n_lines, line_length = packed.shape
    if n_lines == 0 or line_length == 0:
        return None

    step = max(1, _CHUNK_PIXELS // line_length)
    for first in range(0, n_lines, step):
        block = packed[first:first + step]
        is_start = np.ones(block.shape, dtype=bool)
        np.not_equal(block[:, 1:], block[:, :-1], out=is_start[:, 1:])

        # Every line begins with a run start, so runs never span two lines
        starts = np.flatnonzero(is_start)
        run_lengths = np.diff(starts, append=is_start.size)
        lines = starts // line_length
        offsets = starts % line_length

        if ignore_border:
            inner = (offsets != 0) & (offsets + run_lengths != line_length)
            run_lengths = run_lengths[inner]
            lines = lines[inner]
            offsets = offsets[inner]

        lone = np.flatnonzero(run_lengths == 1)
        if lone.size:
            return first + int(lines[lone[0]]), int(offsets[lone[0]])

        opaque = alpha[first:first + step][lines, offsets] > 0
        lengths.update(np.unique(run_lengths[opaque]).tolist())
    return None


def _scan_packed(
    source: PixelSource, ignore_border: bool, lengths: Set[int]
) -> ScanResult:
    hit = _scan_lines(source.packed, source.alpha, ignore_border, lengths)
    if hit is not None:
        y, x = hit
        return Disproved(x, y)

    hit = _scan_lines(source.packed.T, source.alpha.T, ignore_border, lengths)
    if hit is not None:
        x, y = hit
        return Disproved(x, y)

    return Candidates(lengths)


def _scan_pixels(source, ignore_border: bool, lengths: Set[int]) -> ScanResult:
    """Single row-major traversal through ``get(x, y)``.

    A single RunState follows the current row while one RunState per column
    follows the vertical runs across rows.
    """
    width, height = source.width, source.height

    columns: List[RunState] = [RunState() for _ in range(width)]

    for y in range(height):
        row = RunState()
        for x in range(width):
            color = source.get(x, y)

            if color == row.color:
                row.length += 1
            else:
                if not _close_run(row, x, width, ignore_border, lengths):
                    return Disproved(x - 1, y)
                row.color = color
                row.length = 1

            column = columns[x]
            if color == column.color:
                column.length += 1
            else:
                if not _close_run(column, y, height, ignore_border, lengths):
                    return Disproved(x, y - 1)
                column.color = color
                column.length = 1

        if not _close_run(row, width, width, ignore_border, lengths):
            return Disproved(width - 1, y)

    for x, column in enumerate(columns):
        if not _close_run(column, height, height, ignore_border, lengths):
            return Disproved(x, height - 1)

    return Candidates(lengths)


def scan_runs(
    source: PixelSource,
    ignore_border: bool = False,
    candidates: Optional[Set[int]] = None,
) -> ScanResult:
    """Scan one frame for horizontal and vertical uniform-colour runs.

    Sources carrying packed pixels (``PixelSource``) are scanned with numpy
    a block of rows, then a block of columns, at a time. Other sources are
    walked pixel by pixel through ``get(x, y)``. Both give the same result.

    Args:
        source: Frame to scan (``width``, ``height`` and ``get(x, y)``).
        ignore_border: Exempt the first and last run of every row and
            column, to tolerate a decorative border that is not aligned to
            the pixel grid. This is a heuristic; it does not truly separate
            border from content.
        candidates: Set to accumulate run lengths into. Passing the same
            set for several frames merges their evidence.

    Returns:
        ``Disproved`` with the position of a lone pixel run, or
        ``Candidates`` wrapping the (possibly shared) set of run lengths.
    """
    lengths: Set[int] = candidates if candidates is not None else set()
    if hasattr(source, "packed"):
        return _scan_packed(source, ignore_border, lengths)
    return _scan_pixels(source, ignore_border, lengths)
