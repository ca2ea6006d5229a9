"""npcdb command line interface."""

from npcdb.cli.main import app, main

__all__ = ["app", "main"]
