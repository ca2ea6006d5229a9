"""Streamlit admin UI for the NPC database API."""
