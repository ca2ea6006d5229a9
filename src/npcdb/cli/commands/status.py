"""Status command."""

import json
from typing import Annotated, Any

import typer
from rich.console import Console

from npcdb import __version__
from npcdb.cli.options import ConfigOption, DbPathOption, load_settings
from npcdb.database import (
    CharacterNoteOperations,
    CharacterOperations,
    DatabaseConnectionManager,
    DatabaseSchema,
    MovieDialogueFileOperations,
    MovieOperations,
    MovieReferenceOperations,
    MovieScriptOperations,
    SceneOperations,
    SubtitleSegmentOperations,
)

console = Console()

_COUNTED = (
    MovieOperations,
    CharacterOperations,
    SceneOperations,
    SubtitleSegmentOperations,
    MovieReferenceOperations,
    CharacterNoteOperations,
    MovieScriptOperations,
    MovieDialogueFileOperations,
)


def status_command(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    db_path: DbPathOption = None,
    config: ConfigOption = None,
) -> None:
    """Show npcdb status and configuration."""
    try:
        settings = load_settings(config, db_path)
        schema = DatabaseSchema(settings.database_path)
        initialized = schema.validate_schema()

        status_info: dict[str, Any] = {
            "version": __version__,
            "database": str(settings.database_path),
            "database_exists": settings.database_path.exists(),
            "initialized": initialized,
            "api_base_url": settings.api_base_url,
        }

        if initialized:
            status_info["schema_version"] = schema.get_current_version()
            with DatabaseConnectionManager(settings) as manager:
                status_info["rows"] = {
                    ops.table: ops(manager).count() for ops in _COUNTED
                }
    except Exception as e:
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}", style="bold")
        raise typer.Exit(1) from e

    if json_output:
        # Output pure JSON without ANSI escape codes
        print(json.dumps(status_info, indent=2, ensure_ascii=False))
        return

    console.print("[bold cyan]npcdb Status[/bold cyan]\n")
    for key, value in status_info.items():
        formatted_key = key.replace("_", " ").title()
        if isinstance(value, dict):
            console.print(f"  {formatted_key}:")
            for table, count in value.items():
                console.print(f"    {table}: {count}")
        else:
            console.print(f"  {formatted_key}: {value}")
