"""
Mandelbrot Set Explorer Package

An interactive Mandelbrot set explorer using Pygame for display and
Numba for parallel JIT-compiled computation. The whole image is
recomputed every frame from an immutable viewport snapshot.

Quick Start:
    from mandelbrot_explorer import run
    run()

Or from command line:
    python -m mandelbrot_explorer

Package Structure:
    - viewport.py: Immutable viewport state and pixel-to-plane mapping
    - navigation.py: Navigation commands and pure state transforms
    - compute.py: JIT-compiled escape-time computation
    - colormaps.py: Palette definitions and gradient color mapping
    - renderer.py: Per-frame pipeline and status text
    - settings.py: Startup configuration (settings.json)
    - app.py: Main application and event loop

Controls:
    - W/A/S/D or arrows: Pan
    - Scroll: Zoom in/out at mouse position
    - Left/right click: Double/halve the iteration budget
    - 1-6: Select palette
    - R: Reset to default view
    - P: Save the current frame as PNG
    - End/ESC: Quit
"""

from .viewport import ViewportState, InvalidViewportError, pixel_to_plane
from .navigation import (
    adjust_iteration_budget,
    apply_command,
    pan,
    select_palette,
    zoom_at_point,
)
from .compute import compute_escape_counts
from .colormaps import PALETTE_STOPS, get_palette, list_palette_ids, map_color
from .renderer import FramePipeline, format_status
from .settings import Settings, load_settings


def run(settings=None):
    """Open the explorer window (imports pygame on first use)."""
    from .app import run as run_app
    run_app(settings)


__version__ = "1.0.0"
__all__ = [
    "run",
    "ViewportState",
    "InvalidViewportError",
    "pixel_to_plane",
    "pan",
    "zoom_at_point",
    "adjust_iteration_budget",
    "select_palette",
    "apply_command",
    "compute_escape_counts",
    "PALETTE_STOPS",
    "get_palette",
    "list_palette_ids",
    "map_color",
    "FramePipeline",
    "format_status",
    "Settings",
    "load_settings",
]
