"""Reusable Streamlit building blocks for the admin UI."""
