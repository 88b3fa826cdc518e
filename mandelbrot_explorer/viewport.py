"""
Viewport state for the Mandelbrot explorer.

A ViewportState is the complete description of what the next frame shows:
the rectangle of the complex plane mapped onto the pixel grid, the
iteration budget and the selected palette. It is immutable; navigation
produces new states instead of mutating the current one, so the compute
phase of a frame always works on one consistent snapshot.
"""

import math
from dataclasses import dataclass, replace

from .colormaps import is_valid_palette


DEFAULT_BOUNDS = (-2.5, 1.0, -1.0, 1.0)  # min_x, max_x, min_y, max_y
DEFAULT_ITERATION_BUDGET = 128
DEFAULT_PALETTE_ID = 1


class InvalidViewportError(ValueError):
    """Raised when a viewport would break its bound or budget invariants."""


@dataclass(frozen=True)
class ViewportState:
    """
    Region of the complex plane plus rendering quality settings.

    Attributes:
        min_x, max_x: Real axis bounds
        min_y, max_y: Imaginary axis bounds (pixel row 0 maps to min_y)
        zoom: Cumulative zoom multiplier, informational only
        iteration_budget: Maximum iterations per pixel (>= 1)
        palette_id: Selected palette from the palette registry
    """

    min_x: float = DEFAULT_BOUNDS[0]
    max_x: float = DEFAULT_BOUNDS[1]
    min_y: float = DEFAULT_BOUNDS[2]
    max_y: float = DEFAULT_BOUNDS[3]
    zoom: float = 1.0
    iteration_budget: int = DEFAULT_ITERATION_BUDGET
    palette_id: int = DEFAULT_PALETTE_ID

    def __post_init__(self):
        bounds = (self.min_x, self.max_x, self.min_y, self.max_y)
        if not all(math.isfinite(b) for b in bounds):
            raise InvalidViewportError(f"viewport bounds must be finite, got {bounds}")
        if not self.min_x < self.max_x:
            raise InvalidViewportError(
                f"min_x must be below max_x, got {self.min_x} >= {self.max_x}"
            )
        if not self.min_y < self.max_y:
            raise InvalidViewportError(
                f"min_y must be below max_y, got {self.min_y} >= {self.max_y}"
            )
        if int(self.iteration_budget) != self.iteration_budget or self.iteration_budget < 1:
            raise InvalidViewportError(
                f"iteration_budget must be a positive integer, got {self.iteration_budget}"
            )
        if not is_valid_palette(self.palette_id):
            raise InvalidViewportError(f"unknown palette id {self.palette_id!r}")

    @classmethod
    def from_bounds(cls, bounds, **kwargs):
        """Build a state from an (x_min, x_max, y_min, y_max) tuple."""
        min_x, max_x, min_y, max_y = bounds
        return cls(float(min_x), float(max_x), float(min_y), float(max_y), **kwargs)

    @property
    def bounds(self):
        return (self.min_x, self.max_x, self.min_y, self.max_y)

    @property
    def span_x(self):
        return self.max_x - self.min_x

    @property
    def span_y(self):
        return self.max_y - self.min_y

    def with_bounds(self, min_x, max_x, min_y, max_y, **changes):
        """Return a copy with new bounds (and any other field changes)."""
        return replace(self, min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y, **changes)


def remap(index, count, lo, hi):
    """
    Map a pixel index in [0, count - 1] linearly onto [lo, hi].

    Written as a weighted sum so both endpoints are hit exactly:
    index 0 gives lo and index count - 1 gives hi. A single-pixel axis
    maps to lo.
    """
    if count <= 1:
        return lo
    t = index / (count - 1)
    return (1.0 - t) * lo + t * hi


def pixel_to_plane(state, px, py, width, height):
    """
    Convert a pixel position to complex plane coordinates.

    Args:
        state: ViewportState supplying the bounds
        px, py: Pixel column and row (row 0 is min_y)
        width, height: Pixel grid dimensions

    Returns:
        (x0, y0) plane coordinates
    """
    return (
        remap(px, width, state.min_x, state.max_x),
        remap(py, height, state.min_y, state.max_y),
    )
