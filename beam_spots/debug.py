"""Observers for optional debug artifacts and displays.

The spot pipeline never depends on a viewer or on the file system. When
observers are supplied, it hands them the intermediate images it produced;
each observer decides what to do with them.
"""

import logging
import os
from pathlib import Path

import cv2
import numpy as np

from beam_spots.models.glyph_models import Glyph, Lag
from beam_spots.models.visualization_models import SpotVisualizationSet
from beam_spots.visualization import (
    create_gray_visualization,
    create_spot_visualization,
)

logger = logging.getLogger(__name__)

GRAY_SPOT_TAB = "gray_spots"


class SpotsObserver:
    """Base observer; every hook does nothing."""

    def save_image(self, name: str, image: np.ndarray) -> None:
        """Store an image under a deterministic artifact name."""

    def show_image(self, tab: str, image: np.ndarray) -> None:
        """Display an image in a named view."""

    def show_spots(self, lag: Lag, glyphs: list[Glyph]) -> None:
        """Display the spot glyphs of a lag."""


class DebugImageWriter(SpotsObserver):
    """Write debug images as PNG files in an output directory.

    Each artifact name maps to a single file, overwritten on each run.
    Write failures are logged and never propagate to the pipeline.

    Attributes:
        output_dir: Directory receiving the images.
        written: Paths of the files written so far, by artifact name.
    """

    def __init__(self, output_dir: str | Path):
        self.output_dir = Path(output_dir)
        self.written: dict[str, Path] = {}

    def get_path(self, name: str) -> Path:
        return self.output_dir / f"{name}.png"

    def save_image(self, name: str, image: np.ndarray) -> None:
        file_path = self.get_path(name)
        temp_path = file_path.with_name(file_path.name + ".tmp")
        try:
            ok, encoded = cv2.imencode(".png", image)
            if not ok:
                logger.warning(f"Could not encode image {name}")
                return

            self.output_dir.mkdir(parents=True, exist_ok=True)

            # Write atomically to prevent partial reads
            with open(temp_path, "wb") as f:
                f.write(encoded.tobytes())
            os.replace(temp_path, file_path)

            self.written[name] = file_path
            logger.info(f"Stored {file_path}")
        except (OSError, cv2.error) as e:
            logger.warning(f"Could not store image {name}: {str(e)}")
            if temp_path.exists():
                temp_path.unlink()


class VisualizationCollector(SpotsObserver):
    """Keep the displayed images in a SpotVisualizationSet.

    Stands in for an interactive viewer: each view is converted to RGB and
    kept until the caller fetches it.
    """

    def __init__(self):
        self.visualizations = SpotVisualizationSet()
        self._gray: np.ndarray | None = None

    def save_image(self, name: str, image: np.ndarray) -> None:
        self.visualizations.saved[name] = image.copy()
        if name.endswith(".notespot"):
            self.visualizations.note_spots = create_gray_visualization(image)

    def show_image(self, tab: str, image: np.ndarray) -> None:
        if tab == GRAY_SPOT_TAB:
            self._gray = image.copy()
            self.visualizations.gray_spots = create_gray_visualization(image)

    def show_spots(self, lag: Lag, glyphs: list[Glyph]) -> None:
        if self._gray is None:
            return
        self.visualizations.spot_overlay = create_spot_visualization(self._gray, glyphs)
