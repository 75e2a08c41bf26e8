"""Models for the state consumed and produced by the spot pipeline.

PipelineContext is the page-level state shared with the surrounding
recognition stages; SpotsResult is what one pipeline invocation returns.
"""

import numpy as np
from pydantic import BaseModel, Field

from beam_spots.models.core_models import RunTable
from beam_spots.models.glyph_models import Glyph, GlyphNest, Lag
from beam_spots.models.sheet_models import Region, Scale


class PipelineContext(BaseModel):
    """Page-level state of the spot pipeline.

    Attributes:
        page_id: Identifier of the page, used in logs and artifact names.
        source: Page raster with staff lines removed, or None if unavailable.
        scale: Scale estimates of the page, or None if unavailable.
        regions: Systems of the page.
        nest: Glyph registry of the page.
        note_spots: Run table binarized for notes, set by the whole-page run.
        spot_lag: Lag of the whole-page spot sections.
    """

    page_id: str = Field(..., description="Page identifier")
    source: np.ndarray | None = Field(None, description="No-staff page raster")
    scale: Scale | None = Field(None, description="Page scale")
    regions: list[Region] = Field(default_factory=list, description="Page systems")
    nest: GlyphNest = Field(default_factory=GlyphNest, description="Glyph registry")
    note_spots: RunTable | None = Field(None, description="Note spots run table")
    spot_lag: Lag | None = Field(None, description="Whole-page spot lag")

    class Config:
        arbitrary_types_allowed = True


class SpotsResult(BaseModel):
    """Result of one spot extraction.

    Attributes:
        glyphs: Spot glyphs retrieved, in nest order.
        lag: Lag holding the spot sections, or None if processing failed.
        registered: Number of glyphs registered into at least one region.
        error: Message of the isolated error, None on success.
    """

    glyphs: list[Glyph] = Field(default_factory=list, description="Spot glyphs")
    lag: Lag | None = Field(None, description="Spot sections arena")
    registered: int = Field(0, ge=0, description="Glyphs dispatched to regions")
    error: str | None = Field(None, description="Isolated error message")
