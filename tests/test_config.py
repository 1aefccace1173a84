from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from core.config import AppSettings, get_user_config_dir


def test_defaults():
    settings = AppSettings()

    assert settings.log_level == "INFO"
    assert settings.log_format == "console"
    assert settings.report_formats == ["json", "csv", "html", "pdf"]
    assert settings.allow_handler_override is False
    assert settings.reports_dir == Path("reports")
    assert settings.templates_dir is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("SOLID_KIT_REPORT_FORMATS", "JSON, csv")
    monkeypatch.setenv("SOLID_KIT_ALLOW_HANDLER_OVERRIDE", "true")
    monkeypatch.setenv("SOLID_KIT_LOG_LEVEL", "debug")
    monkeypatch.setenv("SOLID_KIT_CSV_DELIMITER", ";")

    settings = AppSettings()

    assert settings.report_formats == ["json", "csv"]
    assert settings.allow_handler_override is True
    assert settings.log_level == "DEBUG"
    assert settings.csv_delimiter == ";"


def test_dotenv_in_working_directory(tmp_path):
    (tmp_path / ".env").write_text("SOLID_KIT_LOG_FORMAT=json\n", encoding="utf-8")

    assert AppSettings().log_format == "json"


@pytest.mark.parametrize(
    "field, value",
    [("log_level", "loud"), ("log_format", "xml"), ("csv_delimiter", "||"), ("report_formats", [])],
)
def test_invalid_values(field, value):
    with pytest.raises(ValidationError):
        AppSettings(**{field: value})


def test_user_config_dir_honours_xdg(monkeypatch, tmp_path):
    monkeypatch.setattr("sys.platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert get_user_config_dir() == tmp_path / "solid-kit"
