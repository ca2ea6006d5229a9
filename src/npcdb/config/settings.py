"""npcdb configuration settings."""

from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from npcdb.exceptions import ConfigurationError, check_config_keys


class NpcDBSettings(BaseSettings):
    """npcdb configuration settings.

    Settings are loaded with the following precedence (highest to lowest):
    1. Explicit overrides (CLI flags such as ``--db-path``)
    2. Config file values (YAML, TOML, or JSON); later files win
    3. Environment variables prefixed with ``NPCDB_``
       Example: export NPCDB_DATABASE_PATH=/data/npcdb.db
    4. ``.env`` file in the working directory
    5. Default values declared below
    """

    model_config = SettingsConfigDict(
        env_prefix="NPCDB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database settings
    database_path: Path = Field(
        default_factory=lambda: Path.cwd() / "npcdb.db",
        description="Path to the SQLite database file",
    )
    database_timeout: float = Field(
        default=30.0,
        description="SQLite connection timeout in seconds",
        ge=0.1,
    )
    database_foreign_keys: bool = Field(
        default=True,
        description="Enable foreign key constraints",
    )
    database_journal_mode: str = Field(
        default="WAL",
        description="SQLite journal mode (DELETE, TRUNCATE, PERSIST, MEMORY, WAL, OFF)",
        pattern="^(DELETE|TRUNCATE|PERSIST|MEMORY|WAL|OFF)$",
    )
    database_synchronous: str = Field(
        default="NORMAL",
        description="SQLite synchronous mode (OFF, NORMAL, FULL, EXTRA)",
        pattern="^(OFF|NORMAL|FULL|EXTRA)$",
    )
    database_pool_min_size: int = Field(
        default=1,
        description="Connections opened eagerly when the pool starts",
        ge=0,
    )
    database_pool_max_size: int = Field(
        default=10,
        description="Upper bound on simultaneously open connections",
        ge=1,
    )

    # API settings
    api_host: str = Field(default="127.0.0.1", description="API bind address")
    api_port: int = Field(default=8000, description="API port", ge=1, le=65535)
    api_base_url: str = Field(
        default="http://127.0.0.1:8000/api",
        description="Base URL the admin UI uses to reach the REST API",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API from a browser",
    )

    # Debug settings
    debug: bool = Field(default=False, description="Enable debug mode")

    # Logging settings
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(
        default="console",
        description="Log output format (console, json, structured)",
        pattern="^(console|json|structured)$",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    @field_validator("database_path", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        """Expand environment variables and ``~`` and resolve the path."""
        if v is None:
            return None
        if isinstance(v, str):
            return Path(os.path.expandvars(v)).expanduser().resolve()
        if isinstance(v, Path):
            return v.resolve()
        raise ValueError(
            f"Path fields must be a string or Path, got {type(v).__name__}: {v!r}"
        )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        """Normalize log level to uppercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.upper()
        raise ValueError(f"log_level must be a string, got {type(v).__name__}")

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, v: Any) -> str:
        """Normalize log format to lowercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.lower()
        raise ValueError(f"log_format must be a string, got {type(v).__name__}")

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Store the base URL without a trailing slash."""
        return v.rstrip("/")

    @model_validator(mode="after")
    def check_pool_bounds(self) -> NpcDBSettings:
        """Ensure the pool minimum does not exceed its maximum."""
        if self.database_pool_min_size > self.database_pool_max_size:
            raise ValueError(
                "database_pool_min_size cannot exceed database_pool_max_size"
            )
        return self

    @classmethod
    def from_file(cls, config_path: Path | str) -> NpcDBSettings:
        """Load settings from a configuration file.

        Args:
            config_path: Path to configuration file (YAML, TOML, or JSON).

        Returns:
            Settings loaded from the file.

        Raises:
            ConfigurationError: If file format is not supported.
            FileNotFoundError: If config file doesn't exist.
        """
        return cls(**cls._read_file(config_path))

    @staticmethod
    def _read_file(config_path: Path | str) -> dict[str, Any]:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()
        if suffix in {".yml", ".yaml"}:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        elif suffix == ".toml":
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        elif suffix == ".json":
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise ConfigurationError(
                message=f"Unsupported configuration file format: {suffix}",
                hint="Use one of the supported formats: .yml, .yaml, .toml, or .json",
                details={
                    "file": str(config_path),
                    "supported_formats": [".yml", ".yaml", ".toml", ".json"],
                },
            )

        if not isinstance(data, dict):
            raise ConfigurationError(
                message="Configuration file must contain a mapping at the top level",
                details={"file": str(config_path)},
            )
        check_config_keys(data)
        return data

    @classmethod
    def from_multiple_sources(
        cls,
        config_files: list[Path | str] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> NpcDBSettings:
        """Load settings with proper precedence from multiple sources.

        Only keys actually present in a config file are applied, so values
        from the environment survive unless a file sets them explicitly.

        Args:
            config_files: Config files to load (later files override earlier).
            overrides: Explicit values such as CLI arguments; None values are
                ignored.

        Returns:
            Merged settings from all sources.
        """
        data: dict[str, Any] = {}
        for config_file in config_files or []:
            data.update(cls._read_file(config_file))

        if overrides:
            data.update({k: v for k, v in overrides.items() if v is not None})

        return cls(**data)


# Global settings instance
_settings: NpcDBSettings | None = None


def _get_config_paths() -> list[Path]:
    """Return existing config files in priority order (later wins)."""
    potential_paths = [
        Path.home() / ".config" / "npcdb" / "config.yaml",
        Path.home() / ".config" / "npcdb" / "config.toml",
        Path.home() / ".config" / "npcdb" / "config.json",
        Path.cwd() / "npcdb.yaml",
        Path.cwd() / "npcdb.toml",
        Path.cwd() / "npcdb.json",
    ]
    existing: list[Path] = []
    for path in potential_paths:
        try:
            if path.is_file():
                existing.append(path)
        except OSError:
            continue
    return existing


def get_settings() -> NpcDBSettings:
    """Get the global settings instance, loading it on first use."""
    global _settings
    if _settings is None:
        config_paths = _get_config_paths()
        if config_paths:
            _settings = NpcDBSettings.from_multiple_sources(
                config_files=list(config_paths)
            )
        else:
            _settings = NpcDBSettings()
    return _settings


def set_settings(settings: NpcDBSettings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Forget the global settings so the next access reloads them."""
    global _settings
    _settings = None


def get_settings_for_cli(
    config_file: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> NpcDBSettings:
    """Get settings for CLI commands with consistent precedence.

    Args:
        config_file: Optional specific config file to load instead of the
            standard locations.
        overrides: CLI argument overrides (e.g. ``database_path``). Only
            non-None values are applied.

    Returns:
        Settings with all sources merged.

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist.
    """
    if config_file is not None:
        return NpcDBSettings.from_multiple_sources(
            config_files=[config_file], overrides=overrides
        )

    settings = get_settings()
    filtered = {k: v for k, v in (overrides or {}).items() if v is not None}
    if not filtered:
        return settings
    data = settings.model_dump()
    data.update(filtered)
    return NpcDBSettings(**data)
