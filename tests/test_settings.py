import json
import logging

import pytest

from mandelbrot_explorer.settings import SETTINGS_PATH, Settings, load_settings


def write_json(path, data):
    path.write_text(json.dumps(data))
    return str(path)


def test_packaged_settings_match_defaults():
    assert load_settings(SETTINGS_PATH) == Settings()


def test_defaults():
    settings = Settings()
    assert (settings.width, settings.height) == (1050, 600)
    assert settings.bounds == (-2.5, 1.0, -1.0, 1.0)
    assert settings.iteration_budget == 128
    assert settings.max_iteration_budget is None


def test_overlay_from_file(tmp_path):
    path = write_json(tmp_path / "s.json", {
        "width": 320,
        "bounds": [-1, 1, -1, 1],
        "max_iteration_budget": 4096,
    })
    settings = load_settings(path)
    assert settings.width == 320
    assert settings.height == 600
    assert settings.bounds == (-1.0, 1.0, -1.0, 1.0)
    assert settings.max_iteration_budget == 4096


def test_missing_file_falls_back(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        settings = load_settings(str(tmp_path / "nope.json"))
    assert settings == Settings()
    assert "using defaults" in caplog.text


def test_malformed_file_falls_back(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    assert load_settings(str(path)) == Settings()


def test_unknown_keys_ignored(tmp_path, caplog):
    path = write_json(tmp_path / "s.json", {"colour": "blue", "height": 200})
    with caplog.at_level(logging.WARNING):
        settings = load_settings(path)
    assert settings.height == 200
    assert "colour" in caplog.text


@pytest.mark.parametrize("data", [
    {"width": "wide"},
    {"height": 0},
    {"iteration_budget": 1.5},
    {"bounds": [0, 1, 2]},
    {"max_iteration_budget": 0},
    {"palette_id": 9},
    {"palette_id": 0},
])
def test_wrong_types_raise(tmp_path, data):
    path = write_json(tmp_path / "s.json", data)
    with pytest.raises(ValueError):
        load_settings(path)


def test_with_overrides_skips_none():
    settings = Settings().with_overrides(width=400, height=None, palette_id=4)
    assert settings.width == 400
    assert settings.height == 600
    assert settings.palette_id == 4


def test_initial_state():
    state = Settings(bounds=(-1.0, 0.5, -0.5, 0.5), iteration_budget=64, palette_id=2).initial_state()
    assert state.bounds == (-1.0, 0.5, -0.5, 0.5)
    assert state.iteration_budget == 64
    assert state.palette_id == 2
    assert state.zoom == 1.0


def test_unknown_palette_names_the_key(tmp_path):
    path = write_json(tmp_path / "s.json", {"palette_id": 9})
    with pytest.raises(ValueError, match="palette_id"):
        load_settings(path)
