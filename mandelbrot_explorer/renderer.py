"""
Per-frame render pipeline for the Mandelbrot explorer.

The FramePipeline class handles:
- Running the escape-time engine on one viewport snapshot per frame
- Keeping the palette stop table, rebuilt only when the selection changes
- Coloring the counts into a fresh RGBA frame buffer
- Formatting the status text shown over the image

Both compute phases are parallel Numba kernels that return only once every
row is done, so the buffer handed back is complete.
"""

import logging

import numpy as np

from .colormaps import apply_palette, get_palette
from .compute import compute_escape_counts

logger = logging.getLogger(__name__)


class FramePipeline:
    """
    Turns a ViewportState into an RGBA frame.

    Usage:
        pipeline = FramePipeline(800, 600)
        frame = pipeline.render(state)   # (600, 800, 4) uint8

    Attributes:
        width, height: Frame dimensions in pixels
        palette_id: Id of the currently cached stop table
        stops: Cached (k, 4) stop table
    """

    def __init__(self, width, height):
        """
        Initialize the pipeline.

        Args:
            width, height: Frame dimensions in pixels
        """
        if width < 1 or height < 1:
            raise ValueError(f"frame must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        self.palette_id = None
        self.stops = None

    def palette_for(self, palette_id):
        """Return the stop table for palette_id, rebuilding it only on change."""
        if palette_id != self.palette_id:
            self.stops = get_palette(palette_id)
            self.palette_id = palette_id
            logger.debug("Built stop table for palette %d", palette_id)
        return self.stops

    def compute(self, state):
        """Return the (height, width) escape counts for the snapshot."""
        return compute_escape_counts(state, self.width, self.height)

    def render(self, state):
        """
        Render one frame.

        Args:
            state: ViewportState snapshot, read once for the whole frame

        Returns:
            New (height, width, 4) uint8 RGBA array
        """
        counts = self.compute(state)
        stops = self.palette_for(state.palette_id)
        frame = np.empty((self.height, self.width, 4), dtype=np.uint8)
        apply_palette(counts, state.iteration_budget, stops, frame)
        return frame


def format_zoom(zoom):
    if zoom >= 1:
        return str(int(zoom))
    return f"{zoom:.6g}"


def format_status(state, fps):
    """
    Build the overlay text for a frame.

    Args:
        state: ViewportState that was rendered
        fps: Measured frames per second from the display loop

    Returns:
        Multi-line status string
    """
    return (
        f"Max Iterations: {state.iteration_budget}\n"
        f"Zoom: {format_zoom(state.zoom)}x\n"
        f"FPS: {int(round(fps))}"
    )
