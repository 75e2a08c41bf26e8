"""Beam spot extraction for music page recognition.

This package retrieves the "spots" of a scanned music page: compact dark
regions that survive a morphological closing sized from the beam
thickness, and that are candidate beams.

The main processing pipeline consists of:
1. Buffer preparation (stem removal, median and Gaussian smoothing)
2. Erasure of the staff header areas
3. Morphological closing with a disk derived from the beam thickness
4. Global binarization (plus a note-oriented side run table)
5. Run-length scanning
6. Section and glyph building
7. Dispatch of glyphs into the systems that contain them

Example:
    Basic usage through the pipeline API:

    >>> from beam_spots.pipeline import build_sheet_spots
    >>> from beam_spots.models import PipelineContext, Scale, SpotsParameters
    >>>
    >>> context = PipelineContext(page_id="page1", source=no_staff_image,
    ...                           scale=Scale(interline=20, main_beam=10, max_stem=3),
    ...                           regions=systems)
    >>> result = build_sheet_spots(context, SpotsParameters())
"""
