"""Glyph assembly from lag sections."""

import logging

from beam_spots.models.glyph_models import Glyph, GlyphLayer, GlyphNest, Lag, Section

logger = logging.getLogger(__name__)


def connected_clusters(lag: Lag, sections: list[Section]) -> list[list[Section]]:
    """Group sections into clusters connected through lag junctions.

    Only the provided sections take part; junctions towards other sections
    of the lag are ignored. Clusters come in the order of their first
    section, and sections within a cluster are sorted by id.
    """
    wanted = {section.id: section for section in sections}
    seen: set[int] = set()
    clusters: list[list[Section]] = []

    for section in sections:
        if section.id in seen:
            continue
        seen.add(section.id)
        stack = [section.id]
        cluster: list[int] = []
        while stack:
            index = stack.pop()
            cluster.append(index)
            for other in lag.neighbors(index):
                if other in wanted and other not in seen:
                    seen.add(other)
                    stack.append(other)
        clusters.append([wanted[i] for i in sorted(cluster)])

    return clusters


def retrieve_glyphs(
    nest: GlyphNest, lag: Lag, sections: list[Section], layer: GlyphLayer
) -> list[Glyph]:
    """Build one glyph per connected cluster of sections and register it.

    Args:
        nest: Glyph registry that assigns glyph ids.
        lag: Lag owning the sections.
        sections: Sections to assemble.
        layer: Layer tag given to the glyphs.

    Returns:
        The registered glyphs, in id order.
    """
    glyphs = [
        nest.register(Glyph(layer=layer, sections=cluster))
        for cluster in connected_clusters(lag, sections)
    ]
    logger.debug(f"{len(glyphs)} glyphs built from {len(sections)} sections")
    return glyphs
