"""Options shared by several commands."""

from pathlib import Path
from typing import Annotated

import typer

from npcdb.config import NpcDBSettings, get_settings_for_cli

DbPathOption = Annotated[
    Path | None,
    typer.Option("--db-path", "-d", help="Path to the SQLite database file"),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration file (YAML, TOML, or JSON)",
        envvar="NPCDB_CONFIG",
    ),
]


def load_settings(
    config: Path | None = None, db_path: Path | None = None
) -> NpcDBSettings:
    """Resolve settings from a config file plus command line overrides."""
    if config is not None and not config.exists():
        raise FileNotFoundError(f"Config file not found: {config}")
    return get_settings_for_cli(config, {"database_path": db_path})
