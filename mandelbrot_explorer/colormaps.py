"""
Palette definitions and color mapping for Mandelbrot visualization.

Each palette is a short ordered list of RGBA control colors ("stops").
Iteration counts are normalized to [0, 1] and colored by linear
interpolation between the two neighbouring stops. Interior points carry
count 0 and therefore always get the first stop.

To add a new palette:
1. Add its stop list to the PALETTE_STOPS dictionary below
2. Give it a display name in PALETTE_NAMES
"""

import numpy as np
from numba import jit, prange


# Stop colors per palette id, as (r, g, b) or (r, g, b, a).
# Ids match the number keys used to select them.
PALETTE_STOPS = {
    1: [
        (0, 0, 0),
        (213, 67, 31),
        (251, 255, 121),
        (62, 223, 89),
        (43, 30, 218),
        (0, 255, 247),
    ],
    2: [
        (0, 7, 100),
        (32, 107, 203),
        (237, 255, 255),
        (255, 170, 0),
        (0, 2, 0),
    ],
    3: [
        (0, 0, 0),
        (35, 232, 156),
        (68, 255, 5),
        (250, 247, 87),
        (250, 185, 87),
        (255, 255, 255),
    ],
    4: [
        (0, 0, 0),
        (2, 52, 82),
        (6, 115, 122),
        (120, 11, 114),
        (120, 6, 36),
        (5, 0, 1),
    ],
    5: [
        (0, 0, 0),
        (164, 25, 224),
        (120, 30, 138),
        (250, 87, 96),
        (250, 87, 96),
        (255, 255, 255),
    ],
    6: [
        (0, 0, 0),
        (104, 61, 212),
        (90, 230, 227),
        (49, 212, 98),
        (246, 255, 0),
        (246, 0, 0),
    ],
}

PALETTE_NAMES = {
    1: 'Fire & Ice',
    2: 'Ultra',
    3: 'Lime',
    4: 'Abyss',
    5: 'Violet',
    6: 'Spectrum',
}


def build_stops(colors):
    """
    Build an immutable stop table from a list of colors.

    Args:
        colors: Sequence of (r, g, b) or (r, g, b, a) tuples, 0-255

    Returns:
        Read-only float64 array of shape (k, 4)

    Raises:
        ValueError if fewer than two stops are given
    """
    if len(colors) < 2:
        raise ValueError(f"a palette needs at least 2 stops, got {len(colors)}")
    stops = np.empty((len(colors), 4), dtype=np.float64)
    for i, color in enumerate(colors):
        if len(color) == 3:
            color = (*color, 255)
        stops[i] = color
    stops.setflags(write=False)
    return stops


def get_palette(palette_id):
    """
    Get the stop table for a palette id.

    Args:
        palette_id: Key from PALETTE_STOPS

    Returns:
        Read-only (k, 4) float64 stop table

    Raises:
        KeyError if palette_id not found
    """
    return build_stops(PALETTE_STOPS[palette_id])


def is_valid_palette(palette_id):
    return palette_id in PALETTE_STOPS


def list_palette_ids():
    """Get list of available palette ids, in selection order."""
    return sorted(PALETTE_STOPS)


@jit(nopython=True, cache=True)
def gradient_color(u, stops):
    """
    Interpolate the gradient at position u in [0, 1].

    The lower stop index is clamped to k - 2 so u == 1 lands exactly on
    the last stop instead of reading one past it.
    """
    k = stops.shape[0]
    s = u * (k - 1)
    i = int(np.floor(s))
    if i < 0:
        i = 0
    elif i > k - 2:
        i = k - 2
    f = s - i
    return (
        stops[i, 0] + (stops[i + 1, 0] - stops[i, 0]) * f,
        stops[i, 1] + (stops[i + 1, 1] - stops[i, 1]) * f,
        stops[i, 2] + (stops[i + 1, 2] - stops[i, 2]) * f,
        stops[i, 3] + (stops[i + 1, 3] - stops[i, 3]) * f,
    )


@jit(nopython=True, cache=True)
def map_color(count, max_iter, stops):
    """
    Map an iteration count to an RGBA color.

    Args:
        count: Iteration count from the escape-time engine
        max_iter: Iteration budget the count was computed with
        stops: (k, 4) stop table

    Returns:
        (r, g, b, a) tuple of ints in 0-255
    """
    if count == max_iter:
        u = 0.0
    else:
        u = count / max_iter
    r, g, b, a = gradient_color(u, stops)
    return int(r), int(g), int(b), int(a)


@jit(nopython=True, parallel=True, cache=True)
def apply_palette(data, max_iter, stops, out):
    """
    Apply a palette to a grid of iteration counts.

    Args:
        data: 2D array of iteration counts from escape_time_kernel
        max_iter: Iteration budget used for the counts
        stops: (k, 4) stop table
        out: Output RGBA image array (height, width, 4) uint8, modified in place
    """
    height, width = data.shape
    for py in prange(height):
        for px in range(width):
            r, g, b, a = map_color(data[py, px], max_iter, stops)
            out[py, px, 0] = np.uint8(r)
            out[py, px, 1] = np.uint8(g)
            out[py, px, 2] = np.uint8(b)
            out[py, px, 3] = np.uint8(a)
