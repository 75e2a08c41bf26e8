import numpy as np
import pytest
from pydantic import ValidationError

from beam_spots.errors import StructuringElementError
from beam_spots.models import Point, StructuringElement
from beam_spots.morphology import MorphoProcessor, disk_for_beam


def test_disk_for_beam_radius():
    se = disk_for_beam(10, 0.8)
    assert se.radius == pytest.approx(3.5)
    kernel = se.kernel()
    assert kernel.shape == (9, 9)
    assert kernel[4, 4] == 1
    assert kernel[4, 1] == 1  # dx=3 on the axis
    assert kernel[0, 0] == 0  # corner is outside the disk
    assert se.anchor == (4, 4)


@pytest.mark.parametrize("beam", [1.0, 1.25, 0.5])
def test_disk_for_beam_degenerate(beam):
    with pytest.raises(StructuringElementError):
        disk_for_beam(beam, 0.8)


@pytest.mark.parametrize("radius", [0, -1.5])
def test_structuring_element_rejects_non_positive_radius(radius):
    with pytest.raises(StructuringElementError):
        StructuringElement(radius=radius)
    assert issubclass(StructuringElementError, ValueError)


def test_structuring_element_is_frozen():
    se = StructuringElement(radius=2.0)
    with pytest.raises(ValidationError):
        se.radius = 3.0


def test_close_fills_narrow_gap():
    raster = np.full((30, 40), 255, dtype=np.uint8)
    raster[10:20, 5:15] = 0
    raster[10:20, 18:28] = 0  # 3-pixel gap at columns 15..17
    MorphoProcessor(StructuringElement(radius=2.5)).close(raster)
    assert np.all(raster[12:18, 15:18] == 0)


def test_close_keeps_wide_gap():
    raster = np.full((30, 50), 255, dtype=np.uint8)
    raster[10:20, 5:15] = 0
    raster[10:20, 30:40] = 0
    MorphoProcessor(StructuringElement(radius=2.5)).close(raster)
    assert np.all(raster[:, 16:29] == 255)


def test_close_is_idempotent():
    rng = np.random.default_rng(2)
    raster = rng.integers(0, 256, size=(40, 40), dtype=np.uint8)
    processor = MorphoProcessor(StructuringElement(radius=3.5))
    processor.close(raster)
    once = raster.copy()
    processor.close(raster)
    assert np.array_equal(raster, once)


def test_close_is_monotonic_in_radius():
    rng = np.random.default_rng(3)
    source = rng.integers(0, 256, size=(50, 50), dtype=np.uint8)
    small = source.copy()
    large = source.copy()
    MorphoProcessor(StructuringElement(radius=1.5)).close(small)
    MorphoProcessor(StructuringElement(radius=3.5)).close(large)
    # Larger disk leaves every sample at least as dark
    assert np.all(large <= small)


def test_close_never_lightens_ink():
    raster = np.full((20, 20), 255, dtype=np.uint8)
    raster[5:15, 5:15] = 0
    before = raster.copy()
    MorphoProcessor(StructuringElement(radius=2.0)).close(raster)
    assert np.all(raster <= before)


def test_close_with_offset_anchor_does_not_shift():
    raster = np.full((60, 60), 255, dtype=np.uint8)
    raster[20:40, 20:40] = 0
    before = raster.copy()
    se = StructuringElement(radius=2.0, offset=Point(x=1, y=1))
    assert se.reflected_anchor == (1, 1)
    MorphoProcessor(se).close(raster)
    assert np.array_equal(raster, before)
