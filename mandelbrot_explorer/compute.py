"""
Escape-time computation using Numba JIT compilation.

This module contains the performance-critical per-pixel work:
- Mapping pixel positions onto the viewport's rectangle of the plane
- Iterating z -> z² + c until |z| > 2 or the iteration budget runs out

Every pixel depends only on its own plane coordinate and the scalar
viewport snapshot, so rows are distributed across cores with prange and
no synchronization is needed beyond the implicit join when the kernel
returns.

Precision is float64 throughout. Past roughly 1e13x zoom adjacent pixels
collapse onto the same float64 value and the image turns blocky; this is
a known limit, not handled with arbitrary precision arithmetic.
"""

import logging

import numpy as np
from numba import jit, prange

from .colormaps import apply_palette

logger = logging.getLogger(__name__)


ESCAPE_RADIUS_SQ = 4.0  # |z|² threshold (escape radius 2)


@jit(nopython=True, cache=True)
def escape_count(x0, y0, max_iter):
    """
    Count iterations of z² + c for c = x0 + i·y0 before |z| exceeds 2.

    Returns the index of the iteration on which the point escaped, or
    max_iter if it never did.
    """
    x = 0.0
    y = 0.0
    for n in range(max_iter):
        x, y = x * x - y * y + x0, 2.0 * x * y + y0
        if x * x + y * y > ESCAPE_RADIUS_SQ:
            return n
    return max_iter


@jit(nopython=True, parallel=True, cache=True)
def escape_time_kernel(x_min, x_max, y_min, y_max, width, height, max_iter):
    """
    Compute escape counts for every pixel of a width x height grid.

    Pixel (0, 0) maps to (x_min, y_min) and (width-1, height-1) to
    (x_max, y_max). Interior points (budget exhausted) are stored as 0 so
    they render with the palette's first stop.

    Args:
        x_min, x_max: Real axis bounds in the complex plane
        y_min, y_max: Imaginary axis bounds in the complex plane
        width, height: Output grid dimensions in pixels
        max_iter: Iteration budget per pixel

    Returns:
        2D int32 array of shape (height, width)
    """
    result = np.zeros((height, width), dtype=np.int32)

    x_den = np.float64(max(width - 1, 1))
    y_den = np.float64(max(height - 1, 1))

    for py in prange(height):
        ty = py / y_den
        y0 = (1.0 - ty) * np.float64(y_min) + ty * np.float64(y_max)
        for px in range(width):
            tx = px / x_den
            x0 = (1.0 - tx) * np.float64(x_min) + tx * np.float64(x_max)

            n = escape_count(x0, y0, max_iter)
            if n == max_iter:
                n = 0
            result[py, px] = n

    return result


def compute_escape_counts(state, width, height):
    """
    Run the escape-time engine over a viewport snapshot.

    Args:
        state: ViewportState (immutable, read once)
        width, height: Pixel grid dimensions

    Returns:
        2D int32 array of shape (height, width), counts in [0, budget)
    """
    if width < 1 or height < 1:
        raise ValueError(f"grid must be at least 1x1, got {width}x{height}")
    return escape_time_kernel(
        state.min_x, state.max_x, state.min_y, state.max_y,
        int(width), int(height), int(state.iteration_budget)
    )


def warmup_jit(stops):
    """
    Warm up JIT compilation with small dummy arrays.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first frame.

    Args:
        stops: A palette stop table to use for warming up apply_palette
    """
    logger.debug("Compiling escape-time and palette kernels")
    counts = escape_time_kernel(-2.0, 1.0, -1.0, 1.0, 10, 10, 10)
    dummy = np.zeros((10, 10, 4), dtype=np.uint8)
    apply_palette(counts, 10, stops, dummy)
