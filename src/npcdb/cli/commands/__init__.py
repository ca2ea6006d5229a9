"""npcdb CLI commands."""

from __future__ import annotations

from npcdb.cli.commands.admin import admin_command
from npcdb.cli.commands.init import init_command
from npcdb.cli.commands.seed import seed_command
from npcdb.cli.commands.serve import serve_command
from npcdb.cli.commands.status import status_command

__all__ = [
    "admin_command",
    "init_command",
    "seed_command",
    "serve_command",
    "status_command",
]
