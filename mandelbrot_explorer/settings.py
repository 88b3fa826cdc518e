"""
Startup settings for the Mandelbrot explorer.

Defaults live in the Settings dataclass and can be overridden by a JSON
file (settings.json next to this module unless another path is given)
and then by command line flags.
"""

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Optional

from .colormaps import is_valid_palette, list_palette_ids
from .viewport import (
    DEFAULT_BOUNDS,
    DEFAULT_ITERATION_BUDGET,
    DEFAULT_PALETTE_ID,
    ViewportState,
)

logger = logging.getLogger(__name__)


SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')


@dataclass(frozen=True)
class Settings:
    """
    Window and initial view configuration.

    Attributes:
        width, height: Window size in pixels
        bounds: Initial (x_min, x_max, y_min, y_max) view
        iteration_budget: Initial iteration budget
        palette_id: Initial palette
        max_iteration_budget: Upper bound for doubling the budget, or None
            for no bound. Each doubling can double frame time, so a cap
            keeps the explorer responsive.
        fps_limit: Frame rate cap for the display loop
    """

    width: int = 1050
    height: int = 600
    bounds: tuple = DEFAULT_BOUNDS
    iteration_budget: int = DEFAULT_ITERATION_BUDGET
    palette_id: int = DEFAULT_PALETTE_ID
    max_iteration_budget: Optional[int] = None
    fps_limit: int = 60

    def with_overrides(self, **overrides):
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return _validated(replace(self, **changes))

    def initial_state(self):
        """Build the ViewportState the explorer starts from."""
        return ViewportState.from_bounds(
            self.bounds,
            iteration_budget=self.iteration_budget,
            palette_id=self.palette_id,
        )


_INT_KEYS = ('width', 'height', 'iteration_budget', 'palette_id', 'fps_limit')


def _validated(settings):
    for key in _INT_KEYS:
        value = getattr(settings, key)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"setting {key!r} must be an integer, got {value!r}")
    if settings.width < 1 or settings.height < 1:
        raise ValueError(f"window size must be positive, got {settings.width}x{settings.height}")

    if not is_valid_palette(settings.palette_id):
        raise ValueError(
            f"setting 'palette_id' must be one of {list_palette_ids()}, got {settings.palette_id!r}"
        )

    cap = settings.max_iteration_budget
    if cap is not None and (isinstance(cap, bool) or not isinstance(cap, int) or cap < 1):
        raise ValueError(f"setting 'max_iteration_budget' must be a positive integer or null, got {cap!r}")

    bounds = settings.bounds
    if not isinstance(bounds, (list, tuple)) or len(bounds) != 4 or not all(isinstance(b, (int, float)) for b in bounds):
        raise ValueError(f"setting 'bounds' must be 4 numbers, got {bounds!r}")
    return replace(settings, bounds=tuple(float(b) for b in bounds))


def load_settings(path=None):
    """
    Load settings from a JSON file.

    Missing or unreadable files fall back to the defaults with a warning.
    Unknown keys are ignored.

    Args:
        path: JSON file to read (default: the packaged settings.json)

    Returns:
        Settings instance
    """
    path = path or SETTINGS_PATH
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.warning("Could not load %s: %s; using defaults", path, e)
        return Settings()

    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a JSON object", path)
        return Settings()

    known = {f.name for f in fields(Settings)}
    for key in sorted(set(data) - known):
        logger.warning("Ignoring unknown setting %r in %s", key, path)

    values = {k: v for k, v in data.items() if k in known}
    return _validated(replace(Settings(), **values))
