"""Main CLI entry point."""

from __future__ import annotations

import os
from typing import Annotated

import typer

from npcdb.cli.commands import (
    admin_command,
    init_command,
    seed_command,
    serve_command,
    status_command,
)

app = typer.Typer(
    name="npcdb",
    help="Movie and character narrative database",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging (INFO level)"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging", envvar="NPCDB_DEBUG"),
    ] = False,
) -> None:
    """Configure global options."""
    if not (debug or verbose):
        return

    os.environ["NPCDB_LOG_LEVEL"] = "DEBUG" if debug else "INFO"
    if debug:
        os.environ["NPCDB_DEBUG"] = "true"

    # Force reconfiguration of logging
    from npcdb.config import configure_logging, get_settings, reset_settings

    reset_settings()
    configure_logging(get_settings())


app.command(name="init")(init_command)
app.command(name="seed")(seed_command)
app.command(name="serve")(serve_command)
app.command(name="admin")(admin_command)
app.command(name="status")(status_command)


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
