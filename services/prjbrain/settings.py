# services/prjbrain/settings.py
from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Optional, Set

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from prjbrain.core.errors import ConfigError
from prjbrain.core.parser import NR_PATTERN, REV_PATTERN

# Points at the project's config file; the file's folder is the scan root.
CONFIG_ENV_VAR = "PRJBRAIN_CONFIG"

_COLUMN_RE = re.compile(r"^[A-Z]{1,3}$")
_CELL_RE = re.compile(r"^[A-Z]{1,3}[1-9][0-9]*$")
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    # Project identity. Left empty -> read from the number log cells below.
    prjnr: str = ""
    prjtitle: str = ""
    prjnr_cell: str = "C1"
    prjtitle_cell: str = "C2"

    # Number log layout (first worksheet only)
    number_log: str = "Nummerliggare.xlsm"
    pn_start_row: int = Field(default=5, ge=1, description="First data row (1-based)")
    title_col: str = "B"
    docnr_col: str = "C"

    # Document number / revision patterns
    nr_pattern: str = NR_PATTERN
    rev_pattern: str = REV_PATTERN

    # Folder scan
    # Empty -> folder of the config file (or cwd without one)
    root_dir: str = ""
    # Comma-separated directory names excluded with their whole subtree
    subdirs_to_skip: str = ".git"

    # Server
    host: str = "localhost"
    port: int = 8000
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        extra="ignore",
    )

    @field_validator("title_col", "docnr_col")
    @classmethod
    def validate_column(cls, v: str) -> str:
        col = (v or "").strip().upper()
        if not _COLUMN_RE.match(col):
            raise ValueError(f"column must be a spreadsheet column letter like 'B', got {v!r}")
        return col

    @field_validator("prjnr_cell", "prjtitle_cell")
    @classmethod
    def validate_cell(cls, v: str) -> str:
        ref = (v or "").strip().upper()
        if not _CELL_RE.match(ref):
            raise ValueError(f"cell must be a reference like 'C1', got {v!r}")
        return ref

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = (v or "").strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {v!r}")
        return level

    @field_validator("prjnr", "prjtitle", "root_dir")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return (v or "").strip()

    def get_skip_dirs(self) -> Set[str]:
        """Parse comma-separated skip list into a set of directory names."""
        if not self.subdirs_to_skip:
            return set()
        return {name.strip() for name in self.subdirs_to_skip.split(",") if name.strip()}


def load_settings(config_file: Optional[str] = None) -> Settings:
    """
    Load settings from the environment and an optional config file.

    The config file uses `.env` syntax (KEY=value per line). When `root_dir`
    is not set, the folder containing the config file is scanned, so a
    project is set up by dropping one config file into its top folder.
    A relative `number_log` is resolved against the root directory.

    Raises:
        ConfigError: missing config file or invalid values
    """
    try:
        if config_file:
            path = Path(config_file).expanduser()
            if not path.is_file():
                raise ConfigError(f"Config file not found: {path}")
            settings = Settings(_env_file=str(path))
            base_dir = path.resolve().parent
        else:
            settings = Settings()
            base_dir = Path.cwd()
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    root = Path(settings.root_dir).expanduser() if settings.root_dir else base_dir
    if not root.is_absolute():
        root = base_dir / root
    root = root.resolve()

    number_log = Path(settings.number_log).expanduser()
    if not number_log.is_absolute():
        number_log = root / number_log

    return settings.model_copy(update={"root_dir": str(root), "number_log": str(number_log)})


_settings_instance = None

def get_settings() -> Settings:
    """Singleton pattern for settings."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = load_settings(os.getenv(CONFIG_ENV_VAR) or None)
    return _settings_instance
