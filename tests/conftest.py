import numpy as np
import cv2
import pytest

from beam_spots.models import (
    GlyphLayer,
    Glyph,
    Orientation,
    Region,
    Run,
    Scale,
    Section,
    Staff,
    StaffLine,
)

PAGE_SHAPE = (200, 300)


def draw_disks(shape, centers, radius):
    """White raster with black filled disks at the given (x, y) centers."""
    raster = np.full(shape, 255, dtype=np.uint8)
    for cx, cy in centers:
        cv2.circle(raster, (cx, cy), radius, 0, -1)
    return raster


def make_glyph(cx, cy, half=2):
    """Square spot glyph of side 2*half+1, centered on (cx, cy)."""
    runs = [
        Run(line=x, start=cy - half, length=2 * half + 1)
        for x in range(cx - half, cx + half + 1)
    ]
    section = Section(id=0, orientation=Orientation.VERTICAL, runs=runs)
    return Glyph(layer=GlyphLayer.SPOT, sections=[section])


@pytest.fixture
def disk_raster():
    return draw_disks


@pytest.fixture
def spot_glyph():
    return make_glyph


@pytest.fixture
def blank_page():
    # 200×300 white page
    return np.full(PAGE_SHAPE, 255, dtype=np.uint8)


@pytest.fixture
def page_scale():
    return Scale(interline=10, main_beam=12, max_stem=3)


@pytest.fixture
def staff():
    # 5 flat lines from y=60 to y=100, header ending at x=60
    lines = [StaffLine(points=[(10.0, y), (290.0, y)]) for y in (60, 70, 80, 90, 100)]
    return Staff(id=1, left=10, right=290, lines=lines, header_stop=60)


@pytest.fixture
def region(staff):
    return Region(id=1, left=10, right=290, top=0, bottom=199, staves=[staff])
