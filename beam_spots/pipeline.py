"""
Pipeline processing functions for spot extraction.

This module performs the morphology analysis that retrieves the major spots
composing beams. It can work on a whole page, where spots are dispatched
among their containing systems, or on a snapshot of a cue aggregate, where
spot coordinates are translated back to page coordinates.
"""

import logging
import time
from contextlib import contextmanager

import numpy as np

from beam_spots.debug import GRAY_SPOT_TAB, SpotsObserver
from beam_spots.dispatch import dispatch_sheet_spots
from beam_spots.errors import InputError
from beam_spots.glyphs import retrieve_glyphs
from beam_spots.image_processing import (
    binarize,
    check_raster,
    erase_header_areas,
    prepare_buffer,
)
from beam_spots.models.core_models import Orientation, Point, RunTable
from beam_spots.models.glyph_models import Glyph, GlyphLayer, Lag
from beam_spots.models.pipeline_models import PipelineContext, SpotsResult
from beam_spots.models.settings_models import ErrorPolicy, SpotsParameters
from beam_spots.morphology import MorphoProcessor, disk_for_beam
from beam_spots.runs import create_table
from beam_spots.sections import JunctionRatioPolicy, SectionFactory

logger = logging.getLogger(__name__)

# Orientation chosen for spot runs
SPOT_ORIENTATION = Orientation.VERTICAL

SPOT_LAG = "spotLag"


class StopWatch:
    """Measure the duration of successive pipeline stages."""

    def __init__(self, name: str):
        self.name = name
        self.durations: dict[str, float] = {}

    @contextmanager
    def task(self, label: str):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.durations[label] = time.perf_counter() - t0

    def print(self) -> None:
        total = sum(self.durations.values())
        logger.info(f"{self.name}: {total * 1000:.1f} ms")
        for label, elapsed in self.durations.items():
            logger.info(f"  {label}: {elapsed * 1000:.1f} ms")


def _notify(observers, method: str, *args) -> None:
    # A failing observer loses its own artifact, never the page
    for observer in observers:
        try:
            getattr(observer, method)(*args)
        except Exception as e:
            logger.warning(
                f"Observer {type(observer).__name__}.{method} failed: {str(e)}"
            )


def get_buffer(context: PipelineContext, params: SpotsParameters) -> np.ndarray:
    """Prepare the buffer used for beam retrieval on a whole page.

    Staff lines are already absent from the context source; stems and other
    vertical lines are removed here because they could lead to artificially
    larger beam candidates.

    Args:
        context: Page context holding the no-staff source and the scale.
        params: Pipeline parameters.

    Returns:
        New gray-level buffer that can be overwritten.

    Raises:
        InputError: If the source raster or the scale is unavailable.
    """
    if context.scale is None:
        raise InputError(f"No scale available for page {context.page_id}")
    return prepare_buffer(context.source, context.scale.max_stem, params.buffer)


def save_note_runs(
    context: PipelineContext,
    buffer: np.ndarray,
    params: SpotsParameters,
    observers: list[SpotsObserver],
) -> RunTable:
    """Binarize a copy of the closed buffer for notes and build its runs.

    The caller stores the table into the context for the later notes stage,
    once the spots themselves are built.

    Args:
        context: Page context the buffer comes from.
        buffer: Closed buffer copy, binarized here.
        params: Pipeline parameters.
        observers: Observers notified of the note spots image.

    Returns:
        The note spots run table.
    """
    binary = binarize(buffer, params.binarization.note_threshold)
    runs = create_table("noteSpots", binary, SPOT_ORIENTATION)

    if params.debug.keep_note_spots:
        _notify(observers, "save_image", f"{context.page_id}.notespot", runs.to_raster())

    return runs


def build_spots(
    context: PipelineContext,
    buffer: np.ndarray,
    offset: Point | None,
    beam: float,
    cue_id: str | None,
    params: SpotsParameters,
    observers: list[SpotsObserver] | None = None,
) -> tuple[list[Glyph], Lag]:
    """Build spots out of the provided buffer.

    Args:
        context: Page context (glyph nest, regions, scale).
        buffer: Gray-level buffer; it is modified in place.
        offset: Buffer offset with respect to page coordinates, or None.
        beam: Typical beam height in pixels.
        cue_id: Cue id for a cue buffer, None for a whole page buffer.
        params: Pipeline parameters.
        observers: Optional observers for debug artifacts and displays.

    Returns:
        Tuple of (spot glyphs, lag holding their sections).

    Raises:
        InputError: If the buffer is missing or malformed.
        StructuringElementError: If the beam height gives a degenerate disk.
    """
    observers = observers or []
    check_raster(buffer, "spot buffer")

    spot_lag = Lag(name=SPOT_LAG, orientation=SPOT_ORIENTATION)
    note_spots = None

    # Erase header for non-cue buffers
    if cue_id is None:
        if context.scale is None:
            raise InputError(f"No scale available for page {context.page_id}")
        margin = context.scale.to_pixels(params.header.staff_vertical_margin)
        erase_header_areas(buffer, context.regions, margin)

    se = disk_for_beam(beam, params.closing.beam_circle_diameter_ratio)
    diameter = beam * params.closing.beam_circle_diameter_ratio
    logger.debug(
        f"{context.page_id} Spots retrieval beam: {beam:.1f}, diameter: {diameter:.1f} ..."
    )
    MorphoProcessor(se).close(buffer)

    # For visual check
    if cue_id is None:
        if params.debug.keep_beam_spots:
            _notify(observers, "save_image", f"{context.page_id}.spot", buffer)
        if params.debug.display_gray_spots:
            _notify(observers, "show_image", GRAY_SPOT_TAB, buffer)

        # Save a specific binarized version for the notes stage
        note_spots = save_note_runs(context, buffer.copy(), params, observers)
    elif params.debug.keep_cue_spots:
        _notify(observers, "save_image", f"{context.page_id}.{cue_id}.spot", buffer)

    # Binarize the spots via a global filter (no illumination problem)
    binary = binarize(buffer, params.binarization.beam_threshold)

    # Runs
    spot_table = create_table("spot", binary, SPOT_ORIENTATION)

    # Sections
    factory = SectionFactory(
        spot_lag, JunctionRatioPolicy(params.junction.min_overlap_ratio)
    )
    sections = factory.create_sections(spot_table)

    if offset is not None:
        for section in sections:
            section.translate(offset)

    # Glyphs
    glyphs = retrieve_glyphs(context.nest, spot_lag, sections, GlyphLayer.SPOT)

    # Page state is committed only once every stage succeeded
    if cue_id is None:
        context.spot_lag = spot_lag
        context.note_spots = note_spots

    return glyphs, spot_lag


def _isolate(context: PipelineContext, error: Exception, what: str) -> SpotsResult:
    logger.warning(f"{context.page_id} Error building {what}: {str(error)}", exc_info=error)
    return SpotsResult(error=str(error))


def build_sheet_spots(
    context: PipelineContext,
    params: SpotsParameters | None = None,
    observers: list[SpotsObserver] | None = None,
    error_policy: ErrorPolicy | None = None,
) -> SpotsResult:
    """Retrieve all spots from a page and dispatch them among its systems.

    Args:
        context: Page context.
        params: Pipeline parameters (defaults if None).
        observers: Optional observers for debug artifacts and displays.
        error_policy: Overrides `params.sheet_error_policy` when given.

    Returns:
        SpotsResult with the spot glyphs, their lag and the count of glyphs
        registered into systems. Under the ISOLATE policy an error yields an
        empty result carrying the error message. Regions are only
        touched by the final dispatch, so an isolated error leaves them as
        they were.
    """
    params = params or SpotsParameters()
    observers = observers or []
    policy = error_policy or params.sheet_error_policy
    watch = StopWatch("buildSheetSpots")

    try:
        with watch.task("gaussianBuffer"):
            # We need a copy of the image that we can overwrite
            buffer = get_buffer(context, params)

        with watch.task("buildSpots"):
            spots, lag = build_spots(
                context, buffer, None, context.scale.main_beam, None, params, observers
            )

        with watch.task("dispatchSpots"):
            registered = dispatch_sheet_spots(
                spots, context.regions, f"{context.page_id} "
            )

        if params.debug.display_beam_spots:
            _notify(observers, "show_spots", lag, spots)

        return SpotsResult(glyphs=spots, lag=lag, registered=registered)
    except Exception as e:
        if policy is ErrorPolicy.PROPAGATE:
            raise
        return _isolate(context, e, "spots")
    finally:
        if params.debug.print_watch:
            watch.print()


def build_cue_spots(
    context: PipelineContext,
    buffer: np.ndarray,
    offset: Point,
    beam: float,
    cue_id: str,
    params: SpotsParameters | None = None,
    observers: list[SpotsObserver] | None = None,
    error_policy: ErrorPolicy | None = None,
) -> SpotsResult:
    """Retrieve spots from a cue snapshot.

    No header is erased and no note spots table is stored. Spots are
    translated by `offset` to page coordinates but are not dispatched: the
    caller decides what to do with them.

    Args:
        context: Page context.
        buffer: Snapshot buffer; it is modified in place.
        offset: Snapshot top-left corner in page coordinates.
        beam: Typical cue beam height in pixels.
        cue_id: Identifier of the cue aggregate.
        params: Pipeline parameters (defaults if None).
        observers: Optional observers for debug artifacts.
        error_policy: Overrides `params.cue_error_policy` when given.

    Returns:
        SpotsResult with the spot glyphs and their lag.
    """
    params = params or SpotsParameters()
    policy = error_policy or params.cue_error_policy

    try:
        spots, lag = build_spots(
            context, buffer, offset, beam, cue_id, params, observers
        )
        return SpotsResult(glyphs=spots, lag=lag)
    except Exception as e:
        if policy is ErrorPolicy.PROPAGATE:
            raise
        return _isolate(context, e, f"cue {cue_id} spots")
