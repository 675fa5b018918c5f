"""Configuration for the jote note store."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from jote.errors import ConfigError

logger = logging.getLogger(__name__)

STORE_DIR = "jote"
CONTROL_DIR = ".git"
NOTE_SUFFIX = ".md"
TEMPLATE = "---\ntitle:\ntags: []\n---\n"

FILE_MODE = 0o600
DIR_MODE = 0o700

DEFAULT_EDITOR = "vim --nofork"
STORE_PATH_ENV = "JOTE_STORE_PATH"
EDITOR_ENV = "EDITOR"
CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    """User settings read from the YAML settings file."""

    model_config = ConfigDict(extra="forbid")

    store_path: Path | None = None
    editor: str | None = None

    @field_validator("editor")
    @classmethod
    def _editor_not_blank(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("must be a non-empty command")
        return value

    @field_validator("store_path")
    @classmethod
    def _expand_store_path(cls, value: Path | None) -> Path | None:
        return value.expanduser() if value is not None else None


def default_store_location() -> Path:
    """Base directory that holds the store when nothing else is configured."""
    return Path.home() / ".local" / "share"


def get_config_path() -> Path:
    """Location of the optional settings file.

    ``$XDG_CONFIG_HOME/jote/config.yaml``, falling back to ``~/.config``.
    """
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / STORE_DIR / CONFIG_FILE


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from YAML; a missing file yields defaults."""
    path = path or get_config_path()
    if not path.is_file():
        logger.debug(f"No settings file at {path}")
        return Settings()

    try:
        with path.open("r", encoding="utf-8") as handle:
            raw: Any = yaml.safe_load(handle) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid settings file '{path}': {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Settings file must be a YAML mapping: {path}")

    try:
        settings = Settings.model_validate(raw)
    except ValidationError as error:
        first = error.errors()[0]
        field_path = ".".join(str(part) for part in first.get("loc", ()))
        detail = first.get("msg", "invalid value")
        raise ConfigError(
            f"Invalid settings file '{path}' field '{field_path}': {detail}"
        ) from None
    logger.debug(f"Loaded settings from {path}")
    return settings


def resolve_store_base(
    cli_value: str | None = None, settings: Settings | None = None
) -> Path:
    """Absolute store base directory: CLI > environment > settings > default."""
    if cli_value:
        return Path(cli_value).expanduser().absolute()
    env_value = os.environ.get(STORE_PATH_ENV)
    if env_value:
        return Path(env_value).expanduser().absolute()
    if settings is not None and settings.store_path is not None:
        return settings.store_path.absolute()
    return default_store_location()


def get_store_root(base: Path) -> Path:
    """The store lives in a directory called ``jote`` under ``base``."""
    return base / STORE_DIR


def resolve_editor_command(settings: Settings | None = None) -> list[str]:
    """Editor command as an argument list: $EDITOR > settings > default."""
    command = os.environ.get(EDITOR_ENV) or ""
    if not command.strip() and settings is not None and settings.editor:
        command = settings.editor
    if not command.strip():
        command = DEFAULT_EDITOR
    return command.split()
