import pytest
from pydantic import ValidationError

from beam_spots.models import (
    Orientation,
    Point,
    Rectangle,
    Region,
    Run,
    RunTable,
    Scale,
    StaffLine,
)


def test_rectangle_properties():
    box = Rectangle(x=10, y=20, width=5, height=3)
    assert box.right == 14
    assert box.bottom == 22
    assert box.contains(Point(x=14, y=22))
    assert not box.contains(Point(x=15, y=22))


def test_rectangle_union_and_intersects():
    a = Rectangle(x=0, y=0, width=10, height=10)
    b = Rectangle(x=9, y=9, width=5, height=5)
    c = Rectangle(x=10, y=0, width=2, height=2)
    assert a.intersects(b)
    assert not a.intersects(c)
    assert a.union(b) == Rectangle(x=0, y=0, width=14, height=14)


def test_run_stop_and_overlap():
    run = Run(line=0, start=5, length=4)
    assert run.stop == 8
    assert run.overlap(Run(line=1, start=7, length=10)) == 2
    assert run.overlap(Run(line=1, start=9, length=1)) == 0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"line": 0, "start": 0, "length": 0},
        {"line": -1, "start": 0, "length": 1},
        {"line": 0, "start": -2, "length": 1},
    ],
)
def test_run_validation_raises(kwargs):
    with pytest.raises(ValidationError):
        Run(**kwargs)


def test_run_table_counts():
    table = RunTable(
        name="t",
        orientation=Orientation.HORIZONTAL,
        width=4,
        height=2,
        sequences=[[Run(line=0, start=0, length=2)], []],
    )
    assert table.size == 2
    assert table.run_count() == 1
    assert table.to_raster().tolist() == [[0, 0, 255, 255], [255, 255, 255, 255]]


def test_scale_to_pixels():
    scale = Scale(interline=10, main_beam=12, max_stem=3)
    assert scale.to_pixels(2.0) == 20
    assert scale.to_pixels(0.25) == 3


def test_staff_line_y_at():
    line = StaffLine(points=[(0.0, 10.0), (100.0, 20.0)])
    assert line.y_at(50) == 15
    assert line.y_at(-10) == 10
    assert line.y_at(500) == 20


def test_region_bounds_validation():
    with pytest.raises(ValidationError):
        Region(id=0, left=50, right=10, top=0, bottom=10)
    with pytest.raises(ValidationError):
        Region(id=0, left=0, right=10, top=20, bottom=10)


def test_region_without_staves():
    region = Region(id=0, left=0, right=10, top=0, bottom=10)
    assert region.first_staff is None
    assert region.last_staff is None
    assert region.contains_x(10) and not region.contains_x(11)
