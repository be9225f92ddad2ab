import json

from settings import load_settings, save_settings


def test_missing_file_gives_defaults(tmp_path):
    settings = load_settings(str(tmp_path / "none.json"))
    assert settings["window_width"] is None
    assert settings["yearly_view"] is False
    assert settings["log_level"] == "INFO"
    assert settings["data_dir"].endswith(".lunar-planner")


def test_round_trip(tmp_path):
    path = str(tmp_path / "settings.json")
    settings = load_settings(path)
    settings.update(window_width=900, window_height=700, yearly_view=True,
                    data_dir=str(tmp_path / "data"), log_level="DEBUG")
    save_settings(settings, path)
    assert load_settings(path) == settings


def test_ill_typed_values_are_ignored(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({
        "window_width": "wide", "window_height": True,
        "yearly_view": 1, "log_level": "chatty", "data_dir": "",
    }), encoding="utf-8")
    settings = load_settings(str(path))
    assert settings["window_width"] is None
    assert settings["window_height"] is None
    assert settings["yearly_view"] is False
    assert settings["log_level"] == "INFO"
    assert settings["data_dir"].endswith(".lunar-planner")


def test_corrupt_file_gives_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{oops", encoding="utf-8")
    assert load_settings(str(path))["log_level"] == "INFO"
