"""Initialize database command."""

from typing import Annotated

import typer
from rich.console import Console

from npcdb.cli.options import ConfigOption, DbPathOption, load_settings
from npcdb.database import DatabaseSchema, create_database

console = Console()


def init_command(
    db_path: DbPathOption = None,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Force initialization, overwriting existing database",
        ),
    ] = False,
    config: ConfigOption = None,
) -> None:
    """Initialize the npcdb SQLite database.

    This command creates a new SQLite database with the npcdb schema.
    If the database already exists, it will fail unless --force is specified.
    """
    try:
        settings = load_settings(config, db_path)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}", style="bold")
        raise typer.Exit(1) from e

    resolved_path = settings.database_path
    try:
        if DatabaseSchema(resolved_path).validate_schema() and not force:
            console.print(
                f"[red]Error:[/red] Database already initialized at {resolved_path}. "
                "Use --force to overwrite.",
                style="bold",
            )
            raise typer.Exit(1)

        if (
            resolved_path.exists()
            and force
            and not typer.confirm(f"Overwrite existing database at {resolved_path}?")
        ):
            console.print("[yellow]Initialization cancelled.[/yellow]")
            raise typer.Exit(0)

        console.print("[green]Initializing database...[/green]")
        create_database(resolved_path, force=force)
        console.print(
            f"[green]✓[/green] Database initialized successfully at {resolved_path}"
        )

    except (typer.Exit, typer.Abort):
        # Re-raise Typer control flow exceptions
        raise

    except Exception as e:
        console.print(
            f"[red]Error:[/red] Failed to initialize database: {e}",
            style="bold",
        )
        raise typer.Exit(1) from e
