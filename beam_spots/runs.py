"""Run-length scanning of binary rasters.

A raster sample is foreground when it is less than or equal to
FOREGROUND_LEVEL, which matches the polarity produced by `binarize`
(ink at 0, paper at 255).
"""

import numpy as np

from beam_spots.models.core_models import Orientation, Run, RunTable

FOREGROUND_LEVEL = 127


class LengthFilter:
    """Keep only runs strictly longer than a minimum length."""

    def __init__(self, min_length: int):
        self.min_length = min_length

    def check(self, length: int) -> bool:
        return length > self.min_length


def create_table(
    name: str,
    raster: np.ndarray,
    orientation: Orientation,
    length_filter: LengthFilter | None = None,
) -> RunTable:
    """Build the run table of a raster along the given orientation.

    Args:
        name: Name given to the table.
        raster: 2D uint8 raster, foreground at low values.
        orientation: HORIZONTAL scans rows, VERTICAL scans columns.
        length_filter: Optional filter discarding runs by length.

    Returns:
        RunTable with one (possibly empty) run sequence per scan line,
        each sequence sorted by start position.
    """
    height, width = raster.shape[:2]
    fore = raster <= FOREGROUND_LEVEL
    if orientation is Orientation.VERTICAL:
        fore = fore.T

    line_count = fore.shape[0]
    sequences: list[list[Run]] = [[] for _ in range(line_count)]

    # Pad each line with background so every run has a rising and falling edge
    padded = np.zeros((line_count, fore.shape[1] + 2), dtype=np.int8)
    padded[:, 1:-1] = fore
    edges = np.diff(padded, axis=1)
    start_lines, starts = np.nonzero(edges == 1)
    _, stops = np.nonzero(edges == -1)

    for line, start, stop in zip(start_lines, starts, stops):
        length = int(stop - start)
        if length_filter is not None and not length_filter.check(length):
            continue
        sequences[line].append(Run(line=int(line), start=int(start), length=length))

    return RunTable(
        name=name,
        orientation=orientation,
        width=width,
        height=height,
        sequences=sequences,
    )
