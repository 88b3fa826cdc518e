"""
Navigation commands and the pure transforms that apply them.

Every operation here takes a ViewportState and returns a new one; nothing
is mutated in place. The application collects commands while it pumps
input events and applies them one after another between frames, so the
compute phase never sees a half-updated viewport.

Pixel row 0 maps to min_y, so panning "up" moves the view toward min_y.
"""

import enum
import logging
import math
from dataclasses import dataclass, replace

from .colormaps import is_valid_palette
from .viewport import ViewportState, pixel_to_plane

logger = logging.getLogger(__name__)


PAN_FRACTION = 0.05  # Fraction of the current span moved per pan step
ZOOM_IN_FACTOR = 2.0
ZOOM_OUT_FACTOR = 0.5
MIN_SPAN_ULPS = 16  # Zoom-in stops once a span would shrink below this many float64 steps


class Axis(enum.Enum):
    X = "x"
    Y = "y"


class PanDirection(enum.Enum):
    UP = (Axis.Y, -1)
    DOWN = (Axis.Y, 1)
    LEFT = (Axis.X, -1)
    RIGHT = (Axis.X, 1)

    @property
    def axis(self):
        return self.value[0]

    @property
    def sign(self):
        return self.value[1]


class Direction(enum.Enum):
    INCREASE = "increase"
    DECREASE = "decrease"


# Commands produced by the input layer, one per navigation operation.

@dataclass(frozen=True)
class Pan:
    direction: PanDirection


@dataclass(frozen=True)
class Zoom:
    zoom_in: bool
    cursor: tuple

    @property
    def factor(self):
        return ZOOM_IN_FACTOR if self.zoom_in else ZOOM_OUT_FACTOR


@dataclass(frozen=True)
class AdjustIterations:
    direction: Direction


@dataclass(frozen=True)
class SelectPalette:
    palette_id: int


@dataclass(frozen=True)
class ResetView:
    pass


@dataclass(frozen=True)
class Quit:
    pass


def pan(state, axis, sign):
    """
    Translate the view along one axis by 5% of that axis' span.

    Args:
        state: Current ViewportState
        axis: Axis.X or Axis.Y
        sign: +1 or -1

    Returns:
        New ViewportState with the same spans
    """
    if sign not in (1, -1):
        raise ValueError(f"pan sign must be +1 or -1, got {sign!r}")

    if axis is Axis.X:
        delta = sign * PAN_FRACTION * state.span_x
        return state.with_bounds(state.min_x + delta, state.max_x + delta,
                                 state.min_y, state.max_y)
    elif axis is Axis.Y:
        delta = sign * PAN_FRACTION * state.span_y
        return state.with_bounds(state.min_x, state.max_x,
                                 state.min_y + delta, state.max_y + delta)
    raise ValueError(f"unknown axis {axis!r}")


def _too_narrow(lo, hi):
    step = math.ulp(max(abs(lo), abs(hi), 1.0))
    return not hi - lo > MIN_SPAN_ULPS * step


def zoom_at_point(state, cursor, width, height, factor, anchored=True):
    """
    Zoom the view by `factor` toward the plane point under the cursor.

    The cursor's plane coordinate is taken from the pre-zoom bounds for both
    axes before any new bound is computed. The new span on each axis is the
    old span divided by `factor`, so factor 2 zooms in and 0.5 zooms out.

    Args:
        state: Current ViewportState
        cursor: (px, py) cursor pixel position
        width, height: Pixel grid dimensions
        factor: Zoom factor (> 0)
        anchored: If True the plane point under the cursor stays under the
            cursor. If False the view is recentred on that point, the classic
            centre-on-cursor zoom (half extents laid out around the point).

    Returns:
        New ViewportState with zoom multiplied by `factor`, or `state`
        unchanged when zooming in further would collapse the bounds at
        float64 resolution
    """
    if not factor > 0:
        raise ValueError(f"zoom factor must be positive, got {factor!r}")

    px, py = cursor
    cx, cy = pixel_to_plane(state, px, py, width, height)

    new_span_x = state.span_x / factor
    new_span_y = state.span_y / factor

    if anchored:
        # Keep the cursor at the same fraction of the view on each axis
        tx = px / (width - 1) if width > 1 else 0.0
        ty = py / (height - 1) if height > 1 else 0.0
        min_x = cx - tx * new_span_x
        max_x = cx + (1.0 - tx) * new_span_x
        min_y = cy - ty * new_span_y
        max_y = cy + (1.0 - ty) * new_span_y
    else:
        half_x = state.span_x / (2.0 * factor)
        half_y = state.span_y / (2.0 * factor)
        min_x, max_x = cx - half_x, cx + half_x
        min_y, max_y = cy - half_y, cy + half_y

    if factor > 1 and (_too_narrow(min_x, max_x) or _too_narrow(min_y, max_y)):
        logger.debug("Zoom limit reached at %gx", state.zoom)
        return state

    return state.with_bounds(min_x, max_x, min_y, max_y, zoom=state.zoom * factor)


def adjust_iteration_budget(state, direction, cap=None):
    """
    Double or halve the iteration budget.

    Halving uses floor division and never goes below 1. There is no upper
    bound unless `cap` is given, in which case doubling saturates at it
    (a budget already above the cap is left where it is).
    """
    budget = state.iteration_budget
    if direction is Direction.INCREASE:
        budget *= 2
        if cap is not None:
            budget = min(budget, max(int(cap), state.iteration_budget))
    elif direction is Direction.DECREASE:
        budget //= 2
    else:
        raise ValueError(f"unknown direction {direction!r}")

    budget = max(budget, 1)
    if budget != state.iteration_budget:
        logger.debug("Iteration budget %d -> %d", state.iteration_budget, budget)
    return replace(state, iteration_budget=budget)


def select_palette(state, palette_id):
    """Select a palette; unknown ids leave the state unchanged."""
    if not is_valid_palette(palette_id):
        logger.warning("Ignoring unknown palette id %r", palette_id)
        return state
    return replace(state, palette_id=palette_id)


def reset(state, default=None):
    """Return to the default bounds and zoom, keeping budget and palette."""
    default = default or ViewportState()
    return replace(default, iteration_budget=state.iteration_budget,
                   palette_id=state.palette_id)


def apply_command(state, command, width, height, cap=None, default=None):
    """
    Apply a single navigation command.

    Args:
        state: Current ViewportState
        command: One of the command dataclasses in this module
        width, height: Pixel grid dimensions (needed for cursor zoom)
        cap: Optional upper bound on the iteration budget
        default: ViewportState that ResetView returns to

    Returns:
        New ViewportState (the same one for Quit)
    """
    if isinstance(command, Pan):
        return pan(state, command.direction.axis, command.direction.sign)
    elif isinstance(command, Zoom):
        return zoom_at_point(state, command.cursor, width, height, command.factor)
    elif isinstance(command, AdjustIterations):
        return adjust_iteration_budget(state, command.direction, cap)
    elif isinstance(command, SelectPalette):
        return select_palette(state, command.palette_id)
    elif isinstance(command, ResetView):
        return reset(state, default)
    elif isinstance(command, Quit):
        return state
    raise TypeError(f"unknown navigation command {command!r}")


def apply_commands(state, commands, width, height, cap=None, default=None):
    """Apply queued commands in order and return the resulting state."""
    for command in commands:
        state = apply_command(state, command, width, height, cap, default)
    return state
