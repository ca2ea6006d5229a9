"""REST API for the NPC database."""
