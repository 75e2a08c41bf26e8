"""Dispatch of spot glyphs into the regions (systems) that contain them."""

import logging

from beam_spots.models.core_models import Point
from beam_spots.models.glyph_models import Glyph, Shape
from beam_spots.models.sheet_models import Region

logger = logging.getLogger(__name__)


class RegionManager:
    """Spatial lookup over the regions of a page."""

    def __init__(self, regions: list[Region]):
        self.regions = regions

    def regions_of(self, point: Point) -> list[Region]:
        """Return every region whose vertical span contains the point.

        Regions may overlap vertically, so a point near the border of two
        systems can belong to both.
        """
        return [region for region in self.regions if region.contains_y(point.y)]


def dispatch_sheet_spots(
    spots: list[Glyph], regions: list[Region], log_prefix: str = ""
) -> int:
    """Dispatch spots among their containing regions.

    A spot is registered into a candidate region, and tagged BEAM_SPOT, only
    if its centroid abscissa lies within the region's [left, right]. Spots
    outside every region width are dropped.

    Args:
        spots: Spot glyphs to dispatch.
        regions: Regions of the page.
        log_prefix: Prefix for log messages, typically the page id.

    Returns:
        Number of spots registered into at least one region.
    """
    manager = RegionManager(regions)
    count = 0

    for glyph in spots:
        center = glyph.centroid
        created = False

        for region in manager.regions_of(center):
            if region.contains_x(center.x):
                glyph.shape = Shape.BEAM_SPOT
                region.register_glyph(glyph)
                created = True

        if created:
            count += 1

    logger.debug(f"{log_prefix}Spots retrieved: {count}")
    return count
