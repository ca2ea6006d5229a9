"""Admin UI command."""

import os
import subprocess
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from npcdb.cli.options import ConfigOption, load_settings

console = Console()

ADMIN_APP = Path(__file__).resolve().parents[2] / "admin" / "app.py"


def admin_command(
    run: Annotated[
        bool, typer.Option("--run", help="Launch Streamlit instead of printing")
    ] = False,
    config: ConfigOption = None,
) -> None:
    """Show (or run) the command that launches the Streamlit admin UI."""
    try:
        settings = load_settings(config)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}", style="bold")
        raise typer.Exit(1) from e

    command = [sys.executable, "-m", "streamlit", "run", str(ADMIN_APP)]
    if not run:
        console.print("[bold cyan]Launch the admin UI with:[/bold cyan]\n")
        console.print(f"  NPCDB_API_BASE_URL={settings.api_base_url} \\")
        console.print(f"    streamlit run {ADMIN_APP}", soft_wrap=True)
        return

    console.print(f"[blue]Launching admin UI against {settings.api_base_url}[/blue]")
    env = {**os.environ, "NPCDB_API_BASE_URL": settings.api_base_url}
    result = subprocess.run(command, check=False, env=env)  # noqa: S603
    raise typer.Exit(result.returncode)
