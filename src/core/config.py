"""Core configuration.

Why here:
- Centralises environment variables (pydantic-settings) without polluting the CLI.
- Wiring, logging and adapters read the same typed settings object.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "solid-kit"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "solid-kit"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "solid-kit"
    return Path.home() / ".config" / "solid-kit"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typed, validated values at the edge (env vars) and no parsing in services.
    - One configuration contract shared by CLI, wiring and adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="SOLID_KIT_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    log_level: str = Field(
        default="INFO",
        description="Minimum level for structured logs.",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Renderer for structured logs.",
    )
    activity_logger_name: str = Field(
        default="solid_kit.activity",
        min_length=1,
        description="Logger name used for registration activity records.",
    )

    report_formats: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["json", "csv", "html", "pdf"],
        min_length=1,
        description="Report keys registered at startup.",
    )
    allow_handler_override: bool = Field(
        default=False,
        description="Let a later registration replace an existing report key.",
    )
    reports_dir: Path = Field(
        default=Path("reports"),
        description="Default directory for report files written by the CLI.",
    )
    templates_dir: Path | None = Field(
        default=None,
        description="Directory holding `report.html`; defaults to the bundled templates.",
    )
    csv_delimiter: str = Field(
        default=",",
        min_length=1,
        max_length=1,
        description="Field delimiter for CSV reports.",
    )

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @field_validator("report_formats", mode="before")
    @classmethod
    def _split_formats(cls, value: object) -> object:
        if isinstance(value, str):
            return [part.strip().lower() for part in value.split(",") if part.strip()]
        return value
