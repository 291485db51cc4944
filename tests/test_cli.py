from __future__ import annotations

import json
from pathlib import Path

import pytest

from unityver.main import main


@pytest.fixture
def config_args(tmp_path: Path) -> list[str]:
    return ["--config", str(tmp_path / "config.json")]


def test_no_command_returns_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1


def test_parse_simple(config_args: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    assert main(config_args + ["parse", "2021.3.0b15"]) == 0
    out = capsys.readouterr().out
    assert "2021.3.0b15:" in out
    assert "channel: beta (b)" in out
    assert "build:   15" in out


def test_parse_json(config_args: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    assert main(config_args + ["--format", "json", "parse", "2022.1.0f1", "2022.2.0"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert [item["channel_name"] for item in data] == ["lts", "stable"]
    assert data[1]["build"] is None


def test_parse_reports_errors(config_args: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    assert main(config_args + ["parse", "2022.1.0", "20221.1.0"]) == 1
    captured = capsys.readouterr()
    assert "2022.1.0:" in captured.out
    assert "major" in captured.err
    assert "major" not in captured.out


def test_parse_json_with_invalid_version_stays_parseable(
    config_args: list[str], capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(config_args + ["--format", "json", "parse", "2022.1.0", "2022"]) == 1
    captured = capsys.readouterr()
    data = json.loads(captured.out)
    assert [item["version"] for item in data] == ["2022.1.0"]
    assert "2022" in captured.err


def test_parse_accepts_trailing_text(config_args: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    assert main(config_args + ["parse", "2022.1.0f1 (LTS)"]) == 0
    out = capsys.readouterr().out
    assert "2022.1.0f1 (LTS):" in out
    assert "channel: lts (f)" in out


def test_compare(config_args: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    assert main(config_args + ["compare", "2022.2.1f1", "2022.2.1"]) == 0
    assert capsys.readouterr().out.strip() == "2022.2.1f1 > 2022.2.1"

    assert main(config_args + ["compare", "2021.1.09f1", "2021.1.9f1"]) == 0
    assert capsys.readouterr().out.strip() == "2021.1.09f1 = 2021.1.9f1"


def test_compare_invalid_version(config_args: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    assert main(config_args + ["compare", "2022", "2022.1.0"]) == 1
    assert "2022" in capsys.readouterr().err


def test_sort(config_args: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    assert main(config_args + ["sort", "2022.2.1a1", "2022.2.1f1", "2022.2.1", "2022.2.1b1"]) == 0
    assert capsys.readouterr().out.split() == ["2022.2.1f1", "2022.2.1", "2022.2.1b1", "2022.2.1a1"]

    assert main(config_args + ["sort", "--ascending", "--channel", "beta", "2021.3.0b15", "2021.3.0b2", "2022.1.0"]) == 0
    assert capsys.readouterr().out.split() == ["2021.3.0b2", "2021.3.0b15"]

    assert main(config_args + ["sort", "2021.1.0", "2022.1.0f1+abc"]) == 0
    assert capsys.readouterr().out.split() == ["2022.1.0f1+abc", "2021.1.0"]


def test_latest(config_args: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    versions = ["2021.3.5f1", "2022.1.0", "2022.2.0b3"]
    assert main(config_args + ["latest", "--channel", "lts"] + versions) == 0
    assert capsys.readouterr().out.strip() == "2021.3.5f1"

    assert main(config_args + ["latest", "--channel", "alpha"] + versions) == 1
    capsys.readouterr()

    assert main(config_args + ["--format", "json", "latest", "--all-channels"] + versions) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["beta"]["version"] == "2022.2.0b3"
    assert data["alpha"] is None


def test_latest_all_channels_table(config_args: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    versions = ["2021.3.5f1", "2022.1.0", "2022.2.0b3"]
    assert main(config_args + ["--format", "table", "latest", "--all-channels"] + versions) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("版本")
    assert [line.split()[0] for line in lines[1:]] == ["2021.3.5f1", "2022.1.0", "2022.2.0b3"]


def test_group(config_args: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    assert main(config_args + ["--format", "json", "group", "2021.3.1f1", "2022.1.0"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data == [
        {"major_version": 2022, "has_lts": False, "versions": ["2022.1.0"]},
        {"major_version": 2021, "has_lts": True, "versions": ["2021.3.1f1"]},
    ]


def test_config_set_and_show(config_args: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    assert main(config_args + ["config", "--set", "output_format=json"]) == 0
    capsys.readouterr()

    assert main(config_args + ["config"]) == 0
    assert json.loads(capsys.readouterr().out)["settings"]["output_format"] == "json"

    assert main(config_args + ["sort", "2022.1.0", "2023.1.0"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert [item["version"] for item in data] == ["2023.1.0", "2022.1.0"]


def test_config_set_invalid(config_args: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    assert main(config_args + ["config", "--set", "output_format=xml"]) == 1
    assert main(config_args + ["config", "--set", "no_equals_sign"]) == 1


def test_config_reset(config_args: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    assert main(config_args + ["config", "--set", "skip_invalid=false"]) == 0
    assert main(config_args + ["config", "--reset"]) == 0
    capsys.readouterr()
    assert main(config_args + ["config"]) == 0
    assert json.loads(capsys.readouterr().out)["settings"]["skip_invalid"] is True
