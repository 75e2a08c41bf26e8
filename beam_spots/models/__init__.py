"""Domain models for the beam spots package.

This module provides a centralized location for all data models used
throughout the spot extraction pipeline. It includes:

- Core geometric models (Point, Rectangle, Run, RunTable, StructuringElement)
- Section, lag and glyph models
- Page layout models supplied by upstream stages (Scale, Staff, Region)
- Pipeline context and results
- Configuration parameters for each processing stage
- Visualization data containers

All models are built using Pydantic for data validation, ensuring type
safety and clear interfaces between pipeline components.
"""

# Re-export core models
from beam_spots.models.core_models import (
    Orientation,
    Point,
    Rectangle,
    Run,
    RunTable,
    SEShape,
    StructuringElement,
)

# Re-export glyph models
from beam_spots.models.glyph_models import (
    Glyph,
    GlyphLayer,
    GlyphNest,
    Lag,
    Section,
    Shape,
)

# Re-export sheet models
from beam_spots.models.sheet_models import Region, Scale, Staff, StaffLine

# Re-export pipeline models
from beam_spots.models.pipeline_models import PipelineContext, SpotsResult

# Re-export setting models
from beam_spots.models.settings_models import (
    BinarizationParams,
    BufferParams,
    ClosingParams,
    DebugParams,
    ErrorPolicy,
    HeaderParams,
    JunctionParams,
    SpotsParameters,
)

# Re-export visualization models
from beam_spots.models.visualization_models import SpotVisualizationSet
