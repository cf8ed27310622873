"""Configuration management using pydantic-settings."""

import logging
import tomllib
from datetime import timedelta
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.errors import ConfigInvalid

logger = logging.getLogger(__name__)

DEFAULT_WARN_AFTER_DAYS = 50
DEFAULT_DELETE_AFTER_DAYS = 60
CONFIG_PATH = Path("~/.config/trash-expiry/config.toml").expanduser()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TRASH_EXPIRY_", extra="ignore")

    warn_after_days: int = Field(default=DEFAULT_WARN_AFTER_DAYS, ge=0)
    delete_after_days: int = Field(default=DEFAULT_DELETE_AFTER_DAYS, ge=0)

    @property
    def warn_after(self) -> timedelta:
        return timedelta(days=self.warn_after_days)

    @property
    def delete_after(self) -> timedelta:
        return timedelta(days=self.delete_after_days)


def _read_config(path: Path) -> tuple[dict[str, Any], list[ConfigInvalid]]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f), []
    except (OSError, tomllib.TOMLDecodeError) as e:
        return {}, [ConfigInvalid(path, f"cannot load config, using defaults: {e}")]


def load_settings(
    config_path: Path | None = None,
) -> tuple[Settings, list[ConfigInvalid]]:
    """Load settings from TOML file, falling back to defaults.

    A value that fails validation is replaced by its default; every
    replacement is returned as a ConfigInvalid alongside the settings.
    """
    path = config_path or CONFIG_PATH
    problems: list[ConfigInvalid] = []
    data: dict[str, Any] = {}

    if path.exists():
        data, problems = _read_config(path)

    try:
        settings = Settings(**data)
    except ValidationError as e:
        for error in e.errors():
            key = str(error["loc"][0])
            default = Settings.model_fields[key].default
            problems.append(
                ConfigInvalid(path, f"{key}: {error['msg']}, using {default}")
            )
            data[key] = default
        settings = Settings(**data)

    for problem in problems:
        logger.warning(f"Config: {problem.reason}")
    return settings, problems
