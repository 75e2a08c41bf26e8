"""Gray-level morphology on dark-foreground rasters.

Operations are named from the point of view of the dark foreground:
dilating grows ink (a minimum filter on intensities) and eroding shrinks
it (a maximum filter). A closing therefore merges nearby ink into solid
blobs and fills gaps narrower than the structuring element.
"""

import logging

import cv2
import numpy as np

from beam_spots.errors import StructuringElementError
from beam_spots.models.core_models import Point, SEShape, StructuringElement

logger = logging.getLogger(__name__)


def disk_for_beam(beam: float, diameter_ratio: float) -> StructuringElement:
    """Build the closing disk for a given beam thickness.

    The disk diameter is `beam * diameter_ratio` and its radius is
    `(diameter - 1) / 2`.

    Args:
        beam: Typical beam thickness in pixels.
        diameter_ratio: Disk diameter as a ratio of the beam thickness.

    Returns:
        StructuringElement describing the disk.

    Raises:
        StructuringElementError: If the resulting radius is not positive.
    """
    diameter = beam * diameter_ratio
    radius = (diameter - 1) / 2
    if radius <= 0:
        raise StructuringElementError(
            f"Degenerate closing disk: beam {beam:.1f}, diameter {diameter:.1f}, "
            f"radius {radius:.2f}"
        )
    return StructuringElement(shape=SEShape.DISK, radius=radius, offset=Point(x=0, y=0))


class MorphoProcessor:
    """Apply morphological operations with one structuring element.

    All operations work in place on 2D uint8 rasters.
    """

    def __init__(self, se: StructuringElement):
        self.se = se
        self.kernel = se.kernel()

    def dilate(self, raster: np.ndarray) -> None:
        """Grow the dark foreground by the structuring element."""
        cv2.erode(raster, self.kernel, dst=raster, anchor=self.se.anchor)

    def erode(self, raster: np.ndarray) -> None:
        """Shrink the dark foreground by the reflected structuring element."""
        cv2.dilate(raster, self.kernel, dst=raster, anchor=self.se.reflected_anchor)

    def close(self, raster: np.ndarray) -> None:
        """Dilate then erode the dark foreground with the same element."""
        logger.debug(f"Closing raster with disk radius {self.se.radius:.2f}")
        self.dilate(raster)
        self.erode(raster)
