"""npcdb: a movie and character narrative database.

npcdb stores movies and the narrative material around them (characters,
scenes, subtitles, references, notes, scripts and dialogue files), serves
it over a JSON REST API and ships a Streamlit admin UI for editing it.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
