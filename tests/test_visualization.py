import numpy as np

from beam_spots.debug import GRAY_SPOT_TAB, VisualizationCollector
from beam_spots.models import Rectangle, Shape
from beam_spots.visualization import (
    BEAM_SPOT_COLOR,
    SPOT_COLOR,
    create_gray_visualization,
    create_spot_visualization,
)


def test_gray_visualization_none():
    assert create_gray_visualization(None) is None


def test_gray_visualization_shape(blank_page):
    rgb = create_gray_visualization(blank_page)
    assert rgb.shape == blank_page.shape + (3,)


def test_spot_visualization_none():
    assert create_spot_visualization(None, []) is None


def test_spot_visualization_colors(blank_page, spot_glyph):
    tagged = spot_glyph(50, 50, half=5)
    tagged.shape = Shape.BEAM_SPOT
    untagged = spot_glyph(150, 50, half=5)
    box = Rectangle(x=200, y=100, width=10, height=10)

    overlay = create_spot_visualization(blank_page, [tagged, untagged, box])
    assert tuple(overlay[45, 45]) == BEAM_SPOT_COLOR
    assert tuple(overlay[45, 145]) == SPOT_COLOR
    assert tuple(overlay[100, 200]) == SPOT_COLOR
    # Source raster stays gray
    assert blank_page.ndim == 2 and np.all(blank_page == 255)


def test_collector_overlay_needs_gray(blank_page, spot_glyph):
    collector = VisualizationCollector()
    collector.show_spots(None, [spot_glyph(50, 50)])
    assert collector.visualizations.spot_overlay is None

    collector.show_image(GRAY_SPOT_TAB, blank_page)
    collector.save_image("p.notespot", blank_page)
    collector.show_spots(None, [spot_glyph(50, 50)])
    assert collector.visualizations.spot_overlay.shape == (200, 300, 3)
    assert collector.visualizations.note_spots.shape == (200, 300, 3)
    assert set(collector.visualizations.saved) == {"p.notespot"}
