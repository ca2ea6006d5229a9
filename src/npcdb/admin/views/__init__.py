"""One module per admin section; each exposes ``render(client)``."""
