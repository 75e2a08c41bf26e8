"""Models for visualization outputs.

SpotVisualizationSet holds the images an observer collected during one
spot extraction, so that a viewer can display them later.
"""

import numpy as np
from pydantic import BaseModel, Field


class SpotVisualizationSet(BaseModel):
    """Images collected from the spot pipeline.

    Attributes:
        gray_spots: Closed gray-level buffer, before binarization, or None.
        note_spots: Note spots run table rendered as an image, or None.
        spot_overlay: RGB buffer with spot glyph boxes overlaid, or None.
        saved: Images stored by artifact name.
    """

    gray_spots: np.ndarray | None = Field(None, description="Closed gray buffer")
    note_spots: np.ndarray | None = Field(None, description="Note spots image")
    spot_overlay: np.ndarray | None = Field(None, description="Spot boxes overlay")
    saved: dict[str, np.ndarray] = Field(
        default_factory=dict, description="Stored images by artifact name"
    )

    class Config:
        arbitrary_types_allowed = True
