import numpy as np

from beam_spots.models import GlyphNest, PipelineContext, SpotsResult, SpotVisualizationSet


def test_pipeline_context_defaults():
    context = PipelineContext(page_id="p")
    assert context.source is None
    assert context.scale is None
    assert context.regions == []
    assert isinstance(context.nest, GlyphNest)
    assert context.note_spots is None
    assert context.spot_lag is None


def test_pipeline_context_arbitrary_types():
    context = PipelineContext(page_id="p", source=np.zeros((2, 3), dtype=np.uint8))
    assert context.source.shape == (2, 3)


def test_spots_result_defaults():
    result = SpotsResult()
    assert result.glyphs == []
    assert result.lag is None
    assert result.registered == 0
    assert result.error is None


def test_visualization_set_defaults():
    v = SpotVisualizationSet()
    assert v.gray_spots is None
    assert v.note_spots is None
    assert v.spot_overlay is None
    assert v.saved == {}
