import numpy as np
import pytest

from mandelbrot_explorer.colormaps import (
    PALETTE_NAMES,
    PALETTE_STOPS,
    apply_palette,
    build_stops,
    get_palette,
    gradient_color,
    is_valid_palette,
    list_palette_ids,
    map_color,
)


PALETTE_IDS = list_palette_ids()


def as_ints(stop):
    return tuple(int(c) for c in stop)


def test_six_palettes():
    assert PALETTE_IDS == [1, 2, 3, 4, 5, 6]
    assert set(PALETTE_NAMES) == set(PALETTE_IDS)


@pytest.mark.parametrize("palette_id", PALETTE_IDS)
def test_stop_tables(palette_id):
    stops = get_palette(palette_id)
    assert stops.shape == (len(PALETTE_STOPS[palette_id]), 4)
    assert stops.shape[0] >= 2
    assert np.all(stops[:, 3] == 255)
    assert not stops.flags.writeable


def test_unknown_palette():
    with pytest.raises(KeyError):
        get_palette(99)
    assert not is_valid_palette(99)
    assert is_valid_palette(3)


def test_build_stops_needs_two_colors():
    with pytest.raises(ValueError):
        build_stops([(1, 2, 3)])


def test_build_stops_keeps_alpha():
    stops = build_stops([(0, 0, 0, 0), (255, 255, 255)])
    assert as_ints(stops[0]) == (0, 0, 0, 0)
    assert as_ints(stops[1]) == (255, 255, 255, 255)


@pytest.mark.parametrize("palette_id", PALETTE_IDS)
@pytest.mark.parametrize("budget", [1, 2, 7, 128, 4096])
def test_zero_count_is_first_stop(palette_id, budget):
    stops = get_palette(palette_id)
    assert map_color(0, budget, stops) == as_ints(stops[0])


@pytest.mark.parametrize("palette_id", PALETTE_IDS)
def test_budget_count_is_first_stop(palette_id):
    stops = get_palette(palette_id)
    assert map_color(128, 128, stops) == as_ints(stops[0])


@pytest.mark.parametrize("palette_id", PALETTE_IDS)
def test_gradient_end_is_last_stop(palette_id):
    stops = get_palette(palette_id)
    assert gradient_color(1.0, stops) == tuple(stops[-1])
    assert gradient_color(0.0, stops) == tuple(stops[0])


@pytest.mark.parametrize("palette_id", PALETTE_IDS)
@pytest.mark.parametrize("budget", [2, 3, 10, 1000, 1 << 20])
def test_highest_count_stays_within_palette(palette_id, budget):
    stops = get_palette(palette_id)
    k = stops.shape[0]
    color = map_color(budget - 1, budget, stops)
    i = min(int((budget - 1) / budget * (k - 1)), k - 2)
    lo = np.minimum(stops[i], stops[i + 1])
    hi = np.maximum(stops[i], stops[i + 1])
    assert all(lo[c] - 1 <= color[c] <= hi[c] for c in range(4))


@pytest.mark.parametrize("palette_id", PALETTE_IDS)
def test_highest_count_approaches_last_stop(palette_id):
    stops = get_palette(palette_id)
    budget = 1 << 20
    color = map_color(budget - 1, budget, stops)
    assert all(abs(color[c] - stops[-1][c]) <= 1 for c in range(4))


def test_midpoint_interpolation():
    stops = build_stops([(0, 0, 0, 0), (200, 100, 50, 255)])
    assert gradient_color(0.5, stops) == (100.0, 50.0, 25.0, 127.5)
    assert map_color(1, 2, stops) == (100, 50, 25, 127)


def test_exact_interior_stop():
    # 3 stops, u = 0.5 lands exactly on the middle one
    stops = build_stops([(0, 0, 0), (10, 20, 30), (255, 255, 255)])
    assert map_color(5, 10, stops) == (10, 20, 30, 255)


def test_apply_palette_matches_map_color():
    stops = get_palette(2)
    budget = 16
    counts = np.arange(budget, dtype=np.int32).reshape(4, 4)
    out = np.zeros((4, 4, 4), dtype=np.uint8)
    apply_palette(counts, budget, stops, out)
    for py in range(4):
        for px in range(4):
            assert tuple(out[py, px]) == map_color(int(counts[py, px]), budget, stops)
    assert tuple(out[0, 0]) == as_ints(stops[0])
