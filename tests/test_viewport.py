import pytest

from mandelbrot_explorer.viewport import (
    InvalidViewportError,
    ViewportState,
    pixel_to_plane,
    remap,
)


def test_default_state():
    state = ViewportState()
    assert state.bounds == (-2.5, 1.0, -1.0, 1.0)
    assert state.zoom == 1.0
    assert state.iteration_budget == 128
    assert state.palette_id == 1


@pytest.mark.parametrize("bounds", [
    (1.0, 1.0, -1.0, 1.0),
    (2.0, 1.0, -1.0, 1.0),
    (-1.0, 1.0, 0.5, 0.5),
    (-1.0, 1.0, 1.0, -1.0),
    (float("nan"), 1.0, -1.0, 1.0),
    (-1.0, float("inf"), -1.0, 1.0),
])
def test_degenerate_bounds_rejected(bounds):
    with pytest.raises(InvalidViewportError):
        ViewportState.from_bounds(bounds)


@pytest.mark.parametrize("budget", [0, -4, 1.5])
def test_bad_budget_rejected(budget):
    with pytest.raises(InvalidViewportError):
        ViewportState(iteration_budget=budget)


@pytest.mark.parametrize("palette_id", [0, 7, "1"])
def test_unknown_palette_rejected(palette_id):
    with pytest.raises(InvalidViewportError):
        ViewportState(palette_id=palette_id)


def test_state_is_immutable():
    state = ViewportState()
    with pytest.raises(AttributeError):
        state.min_x = 0.0


@pytest.mark.parametrize("bounds", [
    (-2.5, 1.0, -1.0, 1.0),
    (-0.7436438870371587, -0.7436438870371585, 0.1318259042053, 0.1318259042054),
    (0.1, 0.3, -1e-7, 3e-7),
])
@pytest.mark.parametrize("size", [(2, 2), (640, 480), (1051, 17)])
def test_pixel_mapping_endpoints_exact(bounds, size):
    width, height = size
    state = ViewportState.from_bounds(bounds)
    assert pixel_to_plane(state, 0, 0, width, height) == (state.min_x, state.min_y)
    assert pixel_to_plane(state, width - 1, height - 1, width, height) == (state.max_x, state.max_y)


def test_pixel_mapping_midpoint():
    state = ViewportState.from_bounds((-2.0, 2.0, -2.0, 2.0))
    x0, y0 = pixel_to_plane(state, 50, 50, 101, 101)
    assert x0 == pytest.approx(0.0, abs=1e-15)
    assert y0 == pytest.approx(0.0, abs=1e-15)


def test_single_pixel_axis_maps_to_min():
    assert remap(0, 1, -3.0, 5.0) == -3.0
