"""Parameter models for spot extraction.

This module defines Pydantic models that encapsulate all configurable
parameters of the spot pipeline. The aggregated SpotsParameters value is
passed explicitly to the pipeline entry points; nothing is read from
process-wide state.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class ErrorPolicy(str, Enum):
    """What an entry point does with an error raised by the pipeline.

    ISOLATE logs the error and returns an empty result carrying the message.
    PROPAGATE re-raises it to the caller unchanged.
    """

    ISOLATE = "isolate"
    PROPAGATE = "propagate"


class BufferParams(BaseModel):
    """Smoothing applied while preparing the working buffer.

    Attributes:
        median_kernel: Aperture of the median filter (odd, default 3).
        gaussian_sigma: Standard deviation of the Gaussian filter (default 1.0).
    """

    median_kernel: int = Field(3, ge=1, le=15, description="Median filter aperture")
    gaussian_sigma: float = Field(
        1.0, gt=0.0, le=10.0, description="Gaussian filter sigma"
    )

    @field_validator("median_kernel")
    @classmethod
    def _odd_kernel(cls, value: int) -> int:
        if value % 2 == 0:
            raise ValueError("median kernel must be odd")
        return value


class ClosingParams(BaseModel):
    """Morphological closing parameters.

    Attributes:
        beam_circle_diameter_ratio: Diameter of the closing disk, as a ratio
            of the beam thickness (default 0.8).
    """

    beam_circle_diameter_ratio: float = Field(
        0.8, gt=0.0, le=4.0, description="Closing disk diameter / beam height"
    )


class BinarizationParams(BaseModel):
    """Global binarization thresholds.

    Samples less than or equal to a threshold become foreground.

    Attributes:
        beam_threshold: Threshold for beam spots (default 140).
        note_threshold: Threshold for the note spots side table (default 170).
    """

    beam_threshold: int = Field(
        140, ge=0, le=255, description="Global binarization threshold for beams"
    )
    note_threshold: int = Field(
        170, ge=0, le=255, description="Global binarization threshold for notes"
    )


class HeaderParams(BaseModel):
    """Header erasure parameters.

    Attributes:
        staff_vertical_margin: Margin erased above and below the staff header
            area, as a fraction of the interline (default 2.0).
    """

    staff_vertical_margin: float = Field(
        2.0, ge=0.0, description="Margin above & below header, in interlines"
    )


class JunctionParams(BaseModel):
    """Run junction policy.

    Attributes:
        min_overlap_ratio: Minimum overlap between two adjacent runs, relative
            to the shorter one, for them to share a section (default 0.5).
    """

    min_overlap_ratio: float = Field(
        0.5, gt=0.0, le=1.0, description="Minimum overlap ratio to join runs"
    )


class DebugParams(BaseModel):
    """Switches for optional debug artifacts and displays."""

    keep_beam_spots: bool = Field(False, description="Store sheet beam spot images")
    keep_note_spots: bool = Field(False, description="Store sheet note spot images")
    keep_cue_spots: bool = Field(False, description="Store cue spot images")
    display_gray_spots: bool = Field(False, description="Display the gray spots view")
    display_beam_spots: bool = Field(False, description="Display the beam spots view")
    print_watch: bool = Field(False, description="Log stage durations")


class SpotsParameters(BaseModel):
    """Complete configuration of the spot pipeline.

    Attributes:
        buffer: Working buffer smoothing.
        closing: Morphological closing.
        binarization: Beam and note thresholds.
        header: Header erasure.
        junction: Run junction policy.
        debug: Debug artifacts and displays.
        sheet_error_policy: Error policy of the whole-page entry point.
        cue_error_policy: Error policy of the cue entry point.
    """

    buffer: BufferParams = Field(default_factory=BufferParams)
    closing: ClosingParams = Field(default_factory=ClosingParams)
    binarization: BinarizationParams = Field(default_factory=BinarizationParams)
    header: HeaderParams = Field(default_factory=HeaderParams)
    junction: JunctionParams = Field(default_factory=JunctionParams)
    debug: DebugParams = Field(default_factory=DebugParams)
    sheet_error_policy: ErrorPolicy = Field(
        ErrorPolicy.ISOLATE, description="Whole-page error policy"
    )
    cue_error_policy: ErrorPolicy = Field(
        ErrorPolicy.PROPAGATE, description="Cue snapshot error policy"
    )
