import json

from fswin.config import DEFAULTS, load_config, save_config


def test_defaults_without_file(tmp_path):
    assert load_config(tmp_path / "config.json") == DEFAULTS


def test_stored_values_override_defaults(tmp_path):
    path = tmp_path / "config.json"
    save_config({"max_workers": 2, "unbekannt": True}, path)

    config = load_config(path)
    assert config["max_workers"] == 2
    assert config["powershell_timeout"] == DEFAULTS["powershell_timeout"]
    assert "unbekannt" not in config


def test_corrupt_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{kaputt", encoding="utf-8")
    assert load_config(path) == DEFAULTS


def test_save_config_writes_json(tmp_path):
    path = tmp_path / "sub" / "config.json"
    save_config({"log_level": "DEBUG"}, path)
    assert json.loads(path.read_text(encoding="utf-8")) == {"log_level": "DEBUG"}
