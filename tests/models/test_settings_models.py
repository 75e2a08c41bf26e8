import pytest
from pydantic import ValidationError

from beam_spots.models import (
    BinarizationParams,
    BufferParams,
    ClosingParams,
    DebugParams,
    ErrorPolicy,
    HeaderParams,
    JunctionParams,
    SpotsParameters,
)


def test_defaults():
    assert ClosingParams().beam_circle_diameter_ratio == pytest.approx(0.8)
    assert BinarizationParams().beam_threshold == 140
    assert BinarizationParams().note_threshold == 170
    assert HeaderParams().staff_vertical_margin == pytest.approx(2.0)
    assert BufferParams().median_kernel == 3
    assert 0.0 < JunctionParams().min_overlap_ratio <= 1.0


def test_debug_flags_default_off():
    flags = DebugParams()
    assert not any(flags.model_dump().values())


@pytest.mark.parametrize("val", [-1, 256])
def test_threshold_invalid(val):
    with pytest.raises(ValidationError):
        BinarizationParams(beam_threshold=val)
    with pytest.raises(ValidationError):
        BinarizationParams(note_threshold=val)


def test_median_kernel_must_be_odd():
    with pytest.raises(ValidationError):
        BufferParams(median_kernel=4)


def test_error_policies_default():
    p = SpotsParameters()
    assert p.sheet_error_policy is ErrorPolicy.ISOLATE
    assert p.cue_error_policy is ErrorPolicy.PROPAGATE


def test_spots_parameters_from_dict():
    p = SpotsParameters.model_validate(
        {
            "closing": {"beam_circle_diameter_ratio": 1.0},
            "debug": {"keep_cue_spots": True},
            "cue_error_policy": "isolate",
        }
    )
    assert p.closing.beam_circle_diameter_ratio == 1.0
    assert p.debug.keep_cue_spots
    assert p.cue_error_policy is ErrorPolicy.ISOLATE
    assert p.binarization.beam_threshold == 140
