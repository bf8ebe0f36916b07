import json

from pokebattle.system.settings import Settings, SettingsData


def test_defaults_when_missing(tmp_path):
    s = Settings.load(tmp_path / "none.json")
    assert s.data == SettingsData()
    assert s.data.max_turns == 200
    assert s.data.spawn_window == 20
    assert s.data.lenient_types is False


def test_save_then_load(tmp_path):
    path = tmp_path / "s.json"
    s = Settings.load(path)
    s.data.seed = 9
    s.data.narrate = False
    s.save()
    again = Settings.load(path)
    assert again.data.seed == 9
    assert again.data.narrate is False


def test_bad_values_normalized(tmp_path):
    path = tmp_path / "s.json"
    path.write_text(json.dumps({"log_level": "LOUD", "max_turns": -4, "spawn_window": 0,
                                "seed": "abc", "unknown": 1}))
    s = Settings.load(path)
    assert s.data.log_level == "WARN"
    assert s.data.max_turns == 200
    assert s.data.spawn_window == 20
    assert s.data.seed is None


def test_corrupt_file_uses_defaults(tmp_path):
    path = tmp_path / "s.json"
    path.write_text("{not json")
    assert Settings.load(path).data == SettingsData()
