from __future__ import annotations

import json
from pathlib import Path

import pytest

from unityver.core.config_manager import ConfigManager, ConfigValidationError


def test_missing_config_file_is_created_with_defaults(tmp_path: Path) -> None:
    config_file = tmp_path / "nested" / "config.json"
    manager = ConfigManager(config_file)

    config = manager.get_config()

    assert config == {"settings": ConfigManager.DEFAULT_SETTINGS}
    assert json.loads(config_file.read_text(encoding="utf-8")) == config
    assert manager.get_output_format() == "simple"
    assert manager.get_log_level() == "INFO"
    assert manager.get_log_to_file() is False
    assert manager.get_skip_invalid() is True


def test_old_config_gets_missing_settings(tmp_path: Path) -> None:
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"settings": {"output_format": "json"}}), encoding="utf-8")

    manager = ConfigManager(config_file)

    assert manager.get_output_format() == "json"
    assert manager.get_skip_invalid() is True


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        json.dumps([1, 2]),
        json.dumps({"settings": []}),
        json.dumps({"settings": {"output_format": "xml"}}),
        json.dumps({"settings": {"skip_invalid": "yes"}}),
    ],
)
def test_invalid_config_falls_back_to_defaults(tmp_path: Path, content: str) -> None:
    config_file = tmp_path / "config.json"
    config_file.write_text(content, encoding="utf-8")

    manager = ConfigManager(config_file)

    assert manager.get_settings() == ConfigManager.DEFAULT_SETTINGS


def test_set_setting_persists(tmp_path: Path) -> None:
    config_file = tmp_path / "config.json"
    manager = ConfigManager(config_file)

    manager.set_setting("settings.log_level", "debug")
    manager.set_setting("skip_invalid", False)

    reloaded = ConfigManager(config_file)
    assert reloaded.get_log_level() == "DEBUG"
    assert reloaded.get_skip_invalid() is False


@pytest.mark.parametrize(
    ("key", "value"),
    [("unknown_key", 1), ("output_format", "xml"), ("log_to_file", "true"), ("log_level", "LOUD")],
)
def test_set_setting_rejects_invalid_values(tmp_path: Path, key: str, value: object) -> None:
    config_file = tmp_path / "config.json"
    manager = ConfigManager(config_file)

    with pytest.raises(ConfigValidationError):
        manager.set_setting(key, value)

    assert ConfigManager(config_file).get_settings() == ConfigManager.DEFAULT_SETTINGS


def test_reset_to_default(tmp_path: Path) -> None:
    config_file = tmp_path / "config.json"
    manager = ConfigManager(config_file)
    manager.set_setting("output_format", "table")

    assert manager.reset_to_default() == {"settings": ConfigManager.DEFAULT_SETTINGS}
    assert ConfigManager(config_file).get_output_format() == "simple"
    assert not (tmp_path / "config.json.tmp").exists()


def test_save_config_rejects_invalid_config(tmp_path: Path) -> None:
    manager = ConfigManager(tmp_path / "config.json")
    with pytest.raises(ConfigValidationError):
        manager.save_config({"settings": {}})


def test_default_config_file_is_under_user_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))

    manager = ConfigManager()

    assert manager.config_file == tmp_path / ".unityver" / "config.json"
    assert manager.get_output_format() == "simple"
    assert manager.config_file.exists()
