"""Section, lag and glyph models.

Sections are clusters of runs, owned by one lag (the arena of sections
built from one run table). Glyphs are clusters of sections, registered in
the page glyph nest and, later, into the regions that own them.
"""

from enum import Enum

from pydantic import BaseModel, Field

from beam_spots.models.core_models import (
    Orientation,
    Point,
    Rectangle,
    Run,
    round_half_up,
)


class GlyphLayer(str, Enum):
    """Layer tag separating glyphs produced by different detectors."""

    DEFAULT = "default"
    SPOT = "spot"


class Shape(str, Enum):
    """Shape labels assignable to glyphs."""

    BEAM_SPOT = "beam_spot"


class Section(BaseModel):
    """Cluster of runs connected under a junction policy.

    Run positions are kept as scanned; `offset` accumulates translations so
    that every geometric property is reported in page coordinates.

    Attributes:
        id: Index of the section within its lag.
        orientation: Orientation of the member runs.
        runs: Member runs, ordered by line then start.
        offset: Accumulated translation applied to the section.
    """

    id: int = Field(..., ge=0, description="Index within the owning lag")
    orientation: Orientation = Field(..., description="Runs orientation")
    runs: list[Run] = Field(default_factory=list, description="Member runs")
    offset: Point = Field(default_factory=Point, description="Accumulated translation")

    def _to_xy(self, line: float, position: float) -> tuple[float, float]:
        if self.orientation is Orientation.VERTICAL:
            return line + self.offset.x, position + self.offset.y
        return position + self.offset.x, line + self.offset.y

    @property
    def weight(self) -> int:
        """Number of pixels in the section."""
        return sum(run.length for run in self.runs)

    @property
    def bounds(self) -> Rectangle:
        first_line = min(run.line for run in self.runs)
        last_line = max(run.line for run in self.runs)
        first_pos = min(run.start for run in self.runs)
        last_pos = max(run.stop for run in self.runs)
        x0, y0 = self._to_xy(first_line, first_pos)
        x1, y1 = self._to_xy(last_line, last_pos)
        return Rectangle(
            x=int(x0), y=int(y0), width=int(x1 - x0) + 1, height=int(y1 - y0) + 1
        )

    @property
    def moments(self) -> tuple[float, float, int]:
        """Sums of x and y over all pixels, with the pixel count."""
        sum_line = 0.0
        sum_pos = 0.0
        for run in self.runs:
            sum_line += run.line * run.length
            sum_pos += (run.start + (run.length - 1) / 2.0) * run.length
        weight = self.weight
        x, y = self._to_xy(sum_line / weight, sum_pos / weight)
        return x * weight, y * weight, weight

    @property
    def mass_center(self) -> tuple[float, float]:
        sx, sy, weight = self.moments
        return sx / weight, sy / weight

    @property
    def centroid(self) -> Point:
        x, y = self.mass_center
        return Point(x=round_half_up(x), y=round_half_up(y))

    def translate(self, offset: Point) -> None:
        self.offset = self.offset.translated(offset.x, offset.y)


class Lag(BaseModel):
    """Arena of sections built from one run table.

    Sections are addressed by their index; junctions between sections that
    touch without being merged are kept as index adjacency.
    """

    name: str = Field(..., description="Lag name")
    orientation: Orientation = Field(..., description="Orientation of its runs")
    sections: list[Section] = Field(default_factory=list)
    adjacency: dict[int, set[int]] = Field(default_factory=dict)

    def create_section(self, runs: list[Run]) -> Section:
        section = Section(id=len(self.sections), orientation=self.orientation, runs=runs)
        self.sections.append(section)
        self.adjacency[section.id] = set()
        return section

    def add_junction(self, a: int, b: int) -> None:
        if a == b:
            return
        self.adjacency[a].add(b)
        self.adjacency[b].add(a)

    def neighbors(self, index: int) -> list[int]:
        return sorted(self.adjacency.get(index, ()))

    @property
    def junctions(self) -> list[tuple[int, int]]:
        return sorted(
            (a, b) for a, others in self.adjacency.items() for b in others if a < b
        )


class Glyph(BaseModel):
    """Connected cluster of sections treated as one shape.

    Attributes:
        id: Identifier assigned by the glyph nest (0 until registered).
        layer: Detector layer the glyph belongs to.
        sections: Member sections.
        shape: Assigned shape label, if any.
    """

    id: int = Field(0, ge=0, description="Nest identifier")
    layer: GlyphLayer = Field(GlyphLayer.DEFAULT, description="Glyph layer")
    sections: list[Section] = Field(default_factory=list, description="Member sections")
    shape: Shape | None = Field(None, description="Assigned shape")

    @property
    def weight(self) -> int:
        return sum(section.weight for section in self.sections)

    @property
    def bounds(self) -> Rectangle:
        box = self.sections[0].bounds
        for section in self.sections[1:]:
            box = box.union(section.bounds)
        return box

    @property
    def mass_center(self) -> tuple[float, float]:
        sum_x = sum_y = 0.0
        weight = 0
        for section in self.sections:
            sx, sy, w = section.moments
            sum_x += sx
            sum_y += sy
            weight += w
        return sum_x / weight, sum_y / weight

    @property
    def centroid(self) -> Point:
        x, y = self.mass_center
        return Point(x=round_half_up(x), y=round_half_up(y))

    def translate(self, offset: Point) -> None:
        for section in self.sections:
            section.translate(offset)


class GlyphNest(BaseModel):
    """Page-level registry of glyphs, by layer."""

    layers: dict[GlyphLayer, list[Glyph]] = Field(default_factory=dict)
    last_id: int = Field(0, ge=0, description="Last identifier handed out")

    def register(self, glyph: Glyph) -> Glyph:
        self.last_id += 1
        glyph.id = self.last_id
        self.layers.setdefault(glyph.layer, []).append(glyph)
        return glyph

    def get_glyphs(self, layer: GlyphLayer) -> list[Glyph]:
        return list(self.layers.get(layer, []))
