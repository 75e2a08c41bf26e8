"""Page layout models supplied by the staff and system detection stages.

These describe what the spot pipeline consumes from its collaborators:
the scale of the page and the systems (regions) with their staves.
Regions also own the glyphs dispatched to them.
"""

import numpy as np
from pydantic import BaseModel, Field, model_validator

from beam_spots.models.core_models import round_half_up
from beam_spots.models.glyph_models import Glyph


class Scale(BaseModel):
    """Scale estimates of a page, in pixels.

    Attributes:
        interline: Distance between two staff lines.
        main_beam: Typical beam thickness.
        max_stem: Maximum stem thickness.
    """

    interline: int = Field(..., ge=1, description="Staff interline in pixels")
    main_beam: float = Field(..., gt=0, description="Typical beam thickness")
    max_stem: int = Field(..., ge=1, description="Maximum stem thickness")

    def to_pixels(self, fraction: float) -> int:
        """Convert an interline fraction to a number of pixels."""
        return round_half_up(fraction * self.interline)


class StaffLine(BaseModel):
    """Staff line as a polyline of (x, y) points sorted by abscissa."""

    points: list[tuple[float, float]] = Field(..., min_length=1)

    def y_at(self, x: float) -> int:
        """Ordinate of the line at abscissa x, flat beyond its ends."""
        xs = [p[0] for p in self.points]
        ys = [p[1] for p in self.points]
        return round_half_up(float(np.interp(x, xs, ys)))


class Staff(BaseModel):
    """Staff geometry needed by the spot builder.

    Attributes:
        id: Staff number within the page.
        left: Left abscissa of the staff.
        right: Right abscissa of the staff.
        lines: Staff lines, from top to bottom.
        header_stop: Abscissa where the staff header (clef, key, time) ends.
    """

    id: int = Field(..., ge=0)
    left: int = Field(..., ge=0)
    right: int = Field(..., ge=0)
    lines: list[StaffLine] = Field(..., min_length=1)
    header_stop: int = Field(..., ge=0)

    @property
    def first_line(self) -> StaffLine:
        return self.lines[0]

    @property
    def last_line(self) -> StaffLine:
        return self.lines[-1]


class Region(BaseModel):
    """A system: horizontal bounds, vertical span, staves and glyphs.

    The horizontal interval [left, right] and the vertical span
    [top, bottom] are both closed.
    """

    id: int = Field(..., ge=0)
    left: int = Field(..., description="Left bound (inclusive)")
    right: int = Field(..., description="Right bound (inclusive)")
    top: int = Field(..., description="Top of the vertical span (inclusive)")
    bottom: int = Field(..., description="Bottom of the vertical span (inclusive)")
    staves: list[Staff] = Field(default_factory=list)
    glyphs: list[Glyph] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_bounds(self):
        if self.left > self.right:
            raise ValueError(f"left {self.left} is beyond right {self.right}")
        if self.top > self.bottom:
            raise ValueError(f"top {self.top} is below bottom {self.bottom}")
        return self

    @property
    def first_staff(self) -> Staff | None:
        return self.staves[0] if self.staves else None

    @property
    def last_staff(self) -> Staff | None:
        return self.staves[-1] if self.staves else None

    def contains_x(self, x: int) -> bool:
        return self.left <= x <= self.right

    def contains_y(self, y: int) -> bool:
        return self.top <= y <= self.bottom

    def register_glyph(self, glyph: Glyph) -> bool:
        """Add a glyph to the region, once. Return True if newly added."""
        if any(g is glyph for g in self.glyphs):
            return False
        self.glyphs.append(glyph)
        return True
