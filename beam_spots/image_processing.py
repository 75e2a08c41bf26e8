"""Raster preparation functions for the spot pipeline.

This module provides the operations applied to the page raster before
and after the morphological closing: removal of stem-like vertical
strokes, median and Gaussian smoothing, erasure of the staff header
areas, and global binarization. Rasters are 2D uint8 arrays with dark
ink (0) on white paper (255).
"""

import logging

import cv2
import numpy as np

from beam_spots.errors import InputError
from beam_spots.models.core_models import Orientation
from beam_spots.models.settings_models import BufferParams
from beam_spots.models.sheet_models import Region
from beam_spots.runs import LengthFilter, create_table

logger = logging.getLogger(__name__)

BACKGROUND = 255
FOREGROUND = 0


def check_raster(raster: np.ndarray | None, what: str = "raster") -> np.ndarray:
    """Make sure a raster is a non-empty 2D uint8 array.

    Raises:
        InputError: If the raster is missing or malformed.
    """
    if raster is None:
        raise InputError(f"No {what} available")
    if not isinstance(raster, np.ndarray) or raster.ndim != 2:
        raise InputError(f"The {what} must be a 2D array")
    if raster.dtype != np.uint8:
        raise InputError(f"The {what} must be 8-bit, got {raster.dtype}")
    if raster.size == 0:
        raise InputError(f"The {what} is empty")
    return raster


def remove_stems(raster: np.ndarray, stem_width: int) -> np.ndarray:
    """Remove horizontal runs no longer than the stem width.

    Stems and other thin vertical strokes produce short horizontal runs;
    dropping them keeps them from inflating beam candidates.

    Args:
        raster: Source raster, ink at low values.
        stem_width: Maximum stem thickness in pixels.

    Returns:
        New binary raster holding only the runs longer than `stem_width`.
    """
    table = create_table(
        "noStem", raster, Orientation.HORIZONTAL, LengthFilter(stem_width)
    )
    return table.to_raster()


def prepare_buffer(
    source: np.ndarray | None, stem_width: int, params: BufferParams
) -> np.ndarray:
    """Prepare the buffer used for beam retrieval.

    Staff lines are expected to be already removed from `source`. Stems are
    removed here, then the result is smoothed by a median filter (isolated
    noise) and a Gaussian filter (stable morphological response).

    Args:
        source: Page raster without staff lines.
        stem_width: Maximum stem thickness in pixels.
        params: Smoothing parameters.

    Returns:
        New gray-level raster; `source` is left untouched.

    Raises:
        InputError: If the source raster is missing or malformed.
    """
    check_raster(source, "source raster")

    buffer = remove_stems(source, stem_width)
    buffer = cv2.medianBlur(buffer, params.median_kernel)
    return cv2.GaussianBlur(buffer, (0, 0), params.gaussian_sigma)


def erase_header_areas(raster: np.ndarray, regions: list[Region], margin: int) -> None:
    """Blank the staff header area of every region, in place.

    For each region, the erased rectangle goes horizontally from the region
    left bound to the header end of its first staff, and vertically from
    the first line of its first staff to the last line of its last staff,
    both measured at the header end and extended by `margin`.

    Args:
        raster: Raster to modify.
        regions: Regions of the page, with their staves.
        margin: Vertical margin in pixels.
    """
    height, width = raster.shape

    for region in regions:
        first_staff = region.first_staff
        last_staff = region.last_staff
        if first_staff is None:
            logger.debug(f"Region #{region.id} has no staff, no header to erase")
            continue

        start = region.left
        stop = first_staff.header_stop
        top = first_staff.first_line.y_at(stop) - margin
        bottom = last_staff.last_line.y_at(stop) + margin

        # Clip to the raster, as a region of interest would be
        x0, x1 = max(start, 0), min(stop, width - 1)
        y0, y1 = max(top, 0), min(bottom, height - 1)
        if x0 > x1 or y0 > y1:
            continue

        raster[y0 : y1 + 1, x0 : x1 + 1] = BACKGROUND


def binarize(raster: np.ndarray, threshold: int) -> np.ndarray:
    """Apply a global threshold to a gray-level raster.

    Samples less than or equal to `threshold` become foreground (0), all
    other samples become background (255).

    Args:
        raster: Gray-level raster.
        threshold: Threshold value (0-255).

    Returns:
        New binary raster of the same shape.
    """
    _, binary = cv2.threshold(raster, threshold, BACKGROUND, cv2.THRESH_BINARY)
    return binary
