"""Core geometric models for spot extraction."""

import math
from enum import Enum

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from beam_spots.errors import StructuringElementError


def round_half_up(value: float) -> int:
    """Round a coordinate to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


class Orientation(str, Enum):
    """Scan orientation of a run table.

    HORIZONTAL scan lines are rows (runs extend along x), VERTICAL scan
    lines are columns (runs extend along y).
    """

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class Point(BaseModel):
    """Integer point or offset in page coordinates."""

    x: int = Field(0, description="Abscissa in pixels")
    y: int = Field(0, description="Ordinate in pixels")

    def translated(self, dx: int, dy: int) -> "Point":
        return Point(x=self.x + dx, y=self.y + dy)


class Rectangle(BaseModel):
    """Axis-aligned integer rectangle, (0,0) at the top-left of the page.

    Attributes:
        x: Left edge in pixels.
        y: Top edge in pixels.
        width: Width in pixels (positive).
        height: Height in pixels (positive).
    """

    x: int = Field(..., description="Left edge in pixels")
    y: int = Field(..., description="Top edge in pixels")
    width: int = Field(..., ge=1, description="Width in pixels")
    height: int = Field(..., ge=1, description="Height in pixels")

    @property
    def right(self) -> int:
        """Last abscissa covered by the rectangle (inclusive)."""
        return self.x + self.width - 1

    @property
    def bottom(self) -> int:
        """Last ordinate covered by the rectangle (inclusive)."""
        return self.y + self.height - 1

    def contains(self, point: Point) -> bool:
        return self.x <= point.x <= self.right and self.y <= point.y <= self.bottom

    def intersects(self, other: "Rectangle") -> bool:
        return not (
            other.x > self.right
            or other.right < self.x
            or other.y > self.bottom
            or other.bottom < self.y
        )

    def union(self, other: "Rectangle") -> "Rectangle":
        left = min(self.x, other.x)
        top = min(self.y, other.y)
        right = max(self.right, other.right)
        bottom = max(self.bottom, other.bottom)
        return Rectangle(x=left, y=top, width=right - left + 1, height=bottom - top + 1)

    def translate(self, dx: int, dy: int) -> "Rectangle":
        return self.model_copy(update={"x": self.x + dx, "y": self.y + dy})


class SEShape(str, Enum):
    """Kinds of flat structuring elements."""

    DISK = "disk"


class StructuringElement(BaseModel):
    """Flat structuring element used by morphological operations.

    Immutable once built. The element is a digital disk: a cell at
    (dx, dy) from the center belongs to it iff dx² + dy² <= radius².

    Attributes:
        shape: Kind of element (only DISK is supported).
        radius: Disk radius in pixels, strictly positive.
        offset: Anchor offset relative to the kernel center.
    """

    model_config = ConfigDict(frozen=True)

    shape: SEShape = Field(SEShape.DISK, description="Structuring element shape")
    radius: float = Field(..., gt=0, description="Disk radius in pixels")
    offset: Point = Field(default_factory=Point, description="Anchor offset")

    def __init__(self, **data):
        radius = data.get("radius")
        if isinstance(radius, (int, float)) and radius <= 0:
            raise StructuringElementError(
                f"Structuring element radius must be positive, got {radius}"
            )
        super().__init__(**data)

    @property
    def half_size(self) -> int:
        return int(math.ceil(self.radius))

    @property
    def anchor(self) -> tuple[int, int]:
        """Kernel anchor as an OpenCV (x, y) pair."""
        return (self.half_size + self.offset.x, self.half_size + self.offset.y)

    @property
    def reflected_anchor(self) -> tuple[int, int]:
        """Anchor of the element mirrored through the kernel center."""
        return (self.half_size - self.offset.x, self.half_size - self.offset.y)

    def kernel(self) -> np.ndarray:
        """Build the uint8 disk mask, of side 2*ceil(radius)+1."""
        half = self.half_size
        dy, dx = np.mgrid[-half : half + 1, -half : half + 1]
        return (dx * dx + dy * dy <= self.radius * self.radius).astype(np.uint8)


class Run(BaseModel):
    """Maximal contiguous foreground segment along one scan line.

    Attributes:
        line: Index of the scan line (row for HORIZONTAL, column for VERTICAL).
        start: First position covered along the scan axis.
        length: Number of covered positions (at least 1).
    """

    line: int = Field(..., ge=0, description="Scan-line index")
    start: int = Field(..., ge=0, description="First position along the scan axis")
    length: int = Field(..., ge=1, description="Run length in pixels")

    @property
    def stop(self) -> int:
        """Last position covered by the run (inclusive)."""
        return self.start + self.length - 1

    def overlap(self, other: "Run") -> int:
        """Count of positions shared with another run, 0 if disjoint."""
        return max(0, min(self.stop, other.stop) - max(self.start, other.start) + 1)


class RunTable(BaseModel):
    """Runs of a binary raster, grouped by scan line.

    Attributes:
        name: Descriptive name of the table (e.g. "spot", "noteSpots").
        orientation: Scan orientation used to build the table.
        width: Width of the source raster in pixels.
        height: Height of the source raster in pixels.
        sequences: One list of runs per scan line, sorted by start.
    """

    name: str = Field("", description="Table name")
    orientation: Orientation = Field(..., description="Scan orientation")
    width: int = Field(..., ge=0, description="Raster width")
    height: int = Field(..., ge=0, description="Raster height")
    sequences: list[list[Run]] = Field(
        default_factory=list, description="Runs per scan line"
    )

    @property
    def size(self) -> int:
        """Number of scan lines."""
        return len(self.sequences)

    def run_count(self) -> int:
        return sum(len(seq) for seq in self.sequences)

    def runs(self):
        """Iterate over all runs, line by line."""
        for seq in self.sequences:
            yield from seq

    def to_raster(self) -> np.ndarray:
        """Render the table as a raster: runs at 0 on a 255 background."""
        raster = np.full((self.height, self.width), 255, dtype=np.uint8)
        for run in self.runs():
            if self.orientation is Orientation.HORIZONTAL:
                raster[run.line, run.start : run.stop + 1] = 0
            else:
                raster[run.start : run.stop + 1, run.line] = 0
        return raster
