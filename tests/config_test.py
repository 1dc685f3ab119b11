from pathlib import Path

import pytest
import typer

from session_logger.config.config_validator import validate_logger_config
from session_logger.config.read_config import read_config, settings_from_config


def test_validate_logger_config() -> None:
    """
    Test configuration validation.

    Verifies that well-typed configs pass and wrong types, unknown keys
    and empty names are reported.
    """
    assert validate_logger_config(None) == []
    assert validate_logger_config({}) == []
    assert validate_logger_config(
        {"name": "Bot", "debug": True, "directory": "logs", "force_ansi": False}
    ) == []

    assert validate_logger_config(["name"]) == ["Config must be a dictionary"]
    assert validate_logger_config({"debug": "yes"}) == [
        "'debug' must be of type bool, got str"
    ]
    assert validate_logger_config({"colour": True}) == ["Unknown key 'colour'"]
    assert validate_logger_config({"name": "  "}) == ["'name' must not be empty"]


def test_read_config(tmp_path: Path) -> None:
    config_file = tmp_path / "logger-config.yml"
    config_file.write_text("name: Bot\ndebug: true\ndirectory: var/logs\n", encoding="utf-8")

    assert read_config(config_file) == {"name": "Bot", "debug": True, "directory": "var/logs"}


def test_read_config_empty_file(tmp_path: Path) -> None:
    config_file = tmp_path / "logger-config.yml"
    config_file.write_text("", encoding="utf-8")

    assert read_config(config_file) == {}


def test_read_config_missing_file(tmp_path: Path) -> None:
    missing = tmp_path / "logger-config.yml"

    with pytest.raises(typer.Exit):
        read_config(missing)

    assert read_config(missing, missing_ok=True) == {}


@pytest.mark.parametrize(
    "content",
    [
        "name: [unclosed\n",  # invalid YAML
        "debug: maybe\n",  # wrong type
    ],
)
def test_read_config_rejects_bad_files(tmp_path: Path, content: str) -> None:
    config_file = tmp_path / "logger-config.yml"
    config_file.write_text(content, encoding="utf-8")

    with pytest.raises(typer.Exit):
        read_config(config_file)


def test_settings_from_config_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert settings_from_config({}) == {
        "name": "Logger",
        "debug_enabled": False,
        "log_directory": tmp_path / "logs",
        "force_styled_output": False,
    }


def test_settings_from_config_resolves_relative_directory(tmp_path: Path) -> None:
    settings = settings_from_config(
        {"name": "Bot", "debug": True, "directory": "var/logs", "force_ansi": True},
        base_dir=tmp_path,
    )

    assert settings == {
        "name": "Bot",
        "debug_enabled": True,
        "log_directory": tmp_path / "var" / "logs",
        "force_styled_output": True,
    }


def test_settings_from_config_keeps_absolute_directory(tmp_path: Path) -> None:
    absolute = tmp_path / "abs"

    settings = settings_from_config({"directory": str(absolute)}, base_dir=Path("elsewhere"))

    assert settings["log_directory"] == absolute
