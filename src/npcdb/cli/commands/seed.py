"""Seed the database with the demo dataset."""

import typer
from rich.console import Console
from rich.table import Table

from npcdb.cli.options import ConfigOption, DbPathOption, load_settings
from npcdb.config import get_logger
from npcdb.database import DatabaseConnectionManager, initialize_schema, seed_database

logger = get_logger(__name__)
console = Console()


def seed_command(
    db_path: DbPathOption = None,
    config: ConfigOption = None,
) -> None:
    """Replace the database contents with two demo movies.

    Existing rows are deleted first. The load runs in a single transaction,
    so a failure leaves the database as it was.
    """
    try:
        settings = load_settings(config, db_path)
        initialize_schema(settings.database_path)
        with DatabaseConnectionManager(settings) as manager:
            counts = seed_database(manager)
    except Exception as e:
        logger.error("Seed failed", error=str(e))
        console.print(f"[red]Error:[/red] Seed failed: {e}", style="bold")
        raise typer.Exit(1) from e

    table = Table(title="Seed data inserted")
    table.add_column("Table", style="cyan")
    table.add_column("Rows", justify="right")
    for name, count in counts.items():
        table.add_row(name, str(count))
    console.print(table)
    console.print(f"[green]✓[/green] Seeded {settings.database_path}")
