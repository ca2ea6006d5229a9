"""Main entry point for npcdb CLI when run as a module."""

from npcdb.cli.main import main

if __name__ == "__main__":  # pragma: no cover
    main()
