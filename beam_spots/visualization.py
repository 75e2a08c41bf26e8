"""
Visualization functions for the spot pipeline.

This module turns the intermediate rasters and the retrieved spot glyphs
into RGB images that a viewer can display or an observer can store.
"""

from collections.abc import Sequence

import cv2
import numpy as np

from beam_spots.models.core_models import Rectangle
from beam_spots.models.glyph_models import Glyph, Shape

SPOT_COLOR = (255, 0, 0)
BEAM_SPOT_COLOR = (0, 160, 0)


def create_gray_visualization(raster: np.ndarray | None) -> np.ndarray | None:
    """Convert a gray-level raster to RGB format for display.

    Args:
        raster: 2D gray-level raster, or None.

    Returns:
        3-channel RGB version of the raster, or None if input is None.
    """
    if raster is None:
        return None
    return cv2.cvtColor(raster, cv2.COLOR_GRAY2RGB)


def create_spot_visualization(
    raster: np.ndarray | None,
    spots: Sequence[Glyph | Rectangle],
    thickness: int = 1,
) -> np.ndarray | None:
    """Overlay spot bounding boxes on a gray-level raster.

    Spots tagged BEAM_SPOT are drawn in green, the others in red. A small
    cross marks each glyph centroid.

    Args:
        raster: 2D gray-level raster the spots come from, or None.
        spots: Glyphs or rectangles to draw.
        thickness: Line thickness of the boxes.

    Returns:
        RGB overlay image, or None if `raster` is None.
    """
    if raster is None:
        return None

    overlay = cv2.cvtColor(raster, cv2.COLOR_GRAY2RGB)

    for spot in spots:
        if isinstance(spot, Glyph):
            box = spot.bounds
            color = BEAM_SPOT_COLOR if spot.shape is Shape.BEAM_SPOT else SPOT_COLOR
            center = spot.centroid
            cv2.drawMarker(
                overlay, (center.x, center.y), color, cv2.MARKER_CROSS, 5, thickness
            )
        else:
            box = spot
            color = SPOT_COLOR

        cv2.rectangle(
            overlay, (box.x, box.y), (box.right, box.bottom), color, thickness
        )

    return overlay
