"""REST API server command."""

import os
from typing import Annotated

import typer
from rich.console import Console

from npcdb.cli.options import ConfigOption, DbPathOption, load_settings
from npcdb.config import get_logger

logger = get_logger(__name__)
console = Console()


def serve_command(
    host: Annotated[
        str | None, typer.Option("--host", "-h", help="API host address")
    ] = None,
    port: Annotated[
        int | None, typer.Option("--port", "-p", help="API port number")
    ] = None,
    reload: Annotated[
        bool, typer.Option("--reload", "-r", help="Enable auto-reload")
    ] = False,
    db_path: DbPathOption = None,
    config: ConfigOption = None,
) -> None:
    """Start the REST API server."""
    try:
        settings = load_settings(config, db_path)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}", style="bold")
        raise typer.Exit(1) from e

    bind_host = host or settings.api_host
    bind_port = port or settings.api_port

    console.print("[blue]Starting NPC database REST API server...[/blue]")
    console.print(f"[dim]Host: {bind_host}:{bind_port}[/dim]")
    console.print(f"[dim]Database: {settings.database_path}[/dim]")
    console.print(f"[dim]Docs: http://{bind_host}:{bind_port}/api/docs[/dim]")

    import uvicorn

    log_level = "info" if reload else settings.log_level.lower()
    if reload:
        # The reloader imports the app factory in a fresh process
        os.environ["NPCDB_DATABASE_PATH"] = str(settings.database_path)
        uvicorn.run(
            "npcdb.api.app:create_app",
            factory=True,
            host=bind_host,
            port=bind_port,
            reload=True,
            log_level=log_level,
        )
        return

    from npcdb.api.app import create_app

    logger.info("Serving API", host=bind_host, port=bind_port)
    uvicorn.run(
        create_app(settings), host=bind_host, port=bind_port, log_level=log_level
    )
