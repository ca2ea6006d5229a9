"""Database schema definitions for the NPC narrative database.

This module defines the SQLite schema for movies and the narrative material
attached to them. Movies are the aggregate root; every other table points
back at a movie (directly, or through a character for notes).
"""

import sqlite3
from pathlib import Path

from npcdb.config import get_logger

logger = get_logger(__name__)

# Schema version for migrations
SCHEMA_VERSION = 1

# ISO-8601 UTC with milliseconds, e.g. 2024-05-01T12:00:00.000Z
_NOW = "(strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))"

REFERENCE_TYPES = ("plot_point", "background", "trivia", "marketing")
NOTE_TYPES = ("persona", "relationship", "backstory", "speech_pattern", "other")

_REFERENCE_TYPES_SQL = ", ".join(f"'{t}'" for t in REFERENCE_TYPES)
_NOTE_TYPES_SQL = ", ".join(f"'{t}'" for t in NOTE_TYPES)

SCHEMA_SQL = f"""
-- Schema version tracking
CREATE TABLE IF NOT EXISTS schema_info (
    version INTEGER PRIMARY KEY,
    applied_at TEXT DEFAULT {_NOW},
    description TEXT
);

CREATE TABLE IF NOT EXISTS movies (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    original_title TEXT,
    release_year INTEGER,
    language TEXT,
    runtime_minutes INTEGER,
    genres TEXT,          -- JSON array
    poster_url TEXT,
    synopsis TEXT,
    created_at TEXT NOT NULL DEFAULT {_NOW},
    updated_at TEXT NOT NULL DEFAULT {_NOW}
);

CREATE TABLE IF NOT EXISTS characters (
    id TEXT PRIMARY KEY,
    movie_id TEXT NOT NULL,
    name TEXT NOT NULL,
    aliases TEXT,         -- JSON array
    actor_name TEXT,
    description TEXT,
    traits TEXT,          -- JSON object
    is_primary INTEGER NOT NULL DEFAULT 0,
    created_by TEXT,
    updated_by TEXT,
    created_at TEXT NOT NULL DEFAULT {_NOW},
    updated_at TEXT NOT NULL DEFAULT {_NOW},
    FOREIGN KEY (movie_id) REFERENCES movies(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS scenes (
    id TEXT PRIMARY KEY,
    movie_id TEXT NOT NULL,
    scene_number INTEGER NOT NULL,
    start_ms INTEGER,
    end_ms INTEGER,
    summary TEXT,
    location TEXT,
    chapter TEXT,
    created_at TEXT NOT NULL DEFAULT {_NOW},
    updated_at TEXT NOT NULL DEFAULT {_NOW},
    FOREIGN KEY (movie_id) REFERENCES movies(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS subtitle_segments (
    id TEXT PRIMARY KEY,
    movie_id TEXT NOT NULL,
    scene_id TEXT,
    character_id TEXT,
    start_ms INTEGER NOT NULL,
    end_ms INTEGER NOT NULL,
    speaker TEXT,
    text TEXT NOT NULL,
    confidence REAL,
    source TEXT,
    created_at TEXT NOT NULL DEFAULT {_NOW},
    FOREIGN KEY (movie_id) REFERENCES movies(id) ON DELETE CASCADE,
    FOREIGN KEY (scene_id) REFERENCES scenes(id) ON DELETE SET NULL,
    FOREIGN KEY (character_id) REFERENCES characters(id) ON DELETE SET NULL
);

CREATE TABLE IF NOT EXISTS movie_references (
    id TEXT PRIMARY KEY,
    movie_id TEXT NOT NULL,
    type TEXT NOT NULL CHECK (type IN ({_REFERENCE_TYPES_SQL})),
    title TEXT,
    content TEXT NOT NULL,
    source_url TEXT,
    created_by TEXT,
    created_at TEXT NOT NULL DEFAULT {_NOW},
    FOREIGN KEY (movie_id) REFERENCES movies(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS character_notes (
    id TEXT PRIMARY KEY,
    character_id TEXT NOT NULL,
    note_type TEXT NOT NULL CHECK (note_type IN ({_NOTE_TYPES_SQL})),
    content TEXT NOT NULL,
    source TEXT,
    created_by TEXT,
    created_at TEXT NOT NULL DEFAULT {_NOW},
    FOREIGN KEY (character_id) REFERENCES characters(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS movie_scripts (
    id TEXT PRIMARY KEY,
    movie_id TEXT NOT NULL,
    script_title TEXT,
    plot_text TEXT,
    screenplay_text TEXT NOT NULL,
    created_by TEXT,
    created_at TEXT NOT NULL DEFAULT {_NOW},
    updated_at TEXT NOT NULL DEFAULT {_NOW},
    FOREIGN KEY (movie_id) REFERENCES movies(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS movie_dialogue_files (
    id TEXT PRIMARY KEY,
    movie_id TEXT NOT NULL,
    file_name TEXT,
    dialogue_text TEXT NOT NULL,
    total_lines INTEGER,
    created_by TEXT,
    created_at TEXT NOT NULL DEFAULT {_NOW},
    updated_at TEXT NOT NULL DEFAULT {_NOW},
    FOREIGN KEY (movie_id) REFERENCES movies(id) ON DELETE CASCADE
);

-- Indexes for the collection queries
CREATE INDEX IF NOT EXISTS idx_movies_created ON movies(created_at);
CREATE INDEX IF NOT EXISTS idx_characters_movie ON characters(movie_id);
CREATE INDEX IF NOT EXISTS idx_scenes_movie_number ON scenes(movie_id, scene_number);
CREATE INDEX IF NOT EXISTS idx_subtitles_movie_start
    ON subtitle_segments(movie_id, start_ms);
CREATE INDEX IF NOT EXISTS idx_references_movie ON movie_references(movie_id);
CREATE INDEX IF NOT EXISTS idx_notes_character ON character_notes(character_id);
CREATE INDEX IF NOT EXISTS idx_scripts_movie ON movie_scripts(movie_id);
CREATE INDEX IF NOT EXISTS idx_dialogues_movie ON movie_dialogue_files(movie_id);

-- Triggers to keep updated_at current
CREATE TRIGGER IF NOT EXISTS update_movies_timestamp
    AFTER UPDATE ON movies
    BEGIN
        UPDATE movies SET updated_at = {_NOW} WHERE id = NEW.id;
    END;

CREATE TRIGGER IF NOT EXISTS update_characters_timestamp
    AFTER UPDATE ON characters
    BEGIN
        UPDATE characters SET updated_at = {_NOW} WHERE id = NEW.id;
    END;

CREATE TRIGGER IF NOT EXISTS update_scenes_timestamp
    AFTER UPDATE ON scenes
    BEGIN
        UPDATE scenes SET updated_at = {_NOW} WHERE id = NEW.id;
    END;

CREATE TRIGGER IF NOT EXISTS update_movie_scripts_timestamp
    AFTER UPDATE ON movie_scripts
    BEGIN
        UPDATE movie_scripts SET updated_at = {_NOW} WHERE id = NEW.id;
    END;

CREATE TRIGGER IF NOT EXISTS update_movie_dialogue_files_timestamp
    AFTER UPDATE ON movie_dialogue_files
    BEGIN
        UPDATE movie_dialogue_files SET updated_at = {_NOW} WHERE id = NEW.id;
    END;
"""

REQUIRED_TABLES = [
    "schema_info",
    "movies",
    "characters",
    "scenes",
    "subtitle_segments",
    "movie_references",
    "character_notes",
    "movie_scripts",
    "movie_dialogue_files",
]


class DatabaseSchema:
    """Manages database schema creation and validation."""

    def __init__(self, db_path: str | Path) -> None:
        """Initialize schema manager.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)

    def create_schema(self) -> None:
        """Create the complete database schema."""
        logger.info("Creating database schema", db_path=str(self.db_path))

        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(self.db_path)
        try:
            conn.execute("PRAGMA foreign_keys = ON")
            conn.executescript(SCHEMA_SQL)
            conn.execute(
                "INSERT OR REPLACE INTO schema_info (version, description) "
                "VALUES (?, ?)",
                (SCHEMA_VERSION, f"Initial schema creation v{SCHEMA_VERSION}"),
            )
            conn.commit()
        finally:
            conn.close()

        logger.info("Database schema created successfully")

    def get_current_version(self) -> int:
        """Get the current schema version from the database.

        Returns:
            Current schema version, or 0 if not found
        """
        if not self.db_path.exists():
            return 0
        conn = sqlite3.connect(self.db_path)
        try:
            result = conn.execute("SELECT MAX(version) FROM schema_info").fetchone()
            return result[0] if result[0] is not None else 0
        except sqlite3.OperationalError:
            # Table doesn't exist yet
            return 0
        finally:
            conn.close()

    def validate_schema(self) -> bool:
        """Validate that all required tables exist.

        Returns:
            True if schema is valid
        """
        if not self.db_path.exists():
            return False
        conn = sqlite3.connect(self.db_path)
        try:
            cursor = conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
            existing_tables = {row[0] for row in cursor.fetchall()}
        except sqlite3.Error as e:
            logger.error("Error validating schema", error=str(e))
            return False
        finally:
            conn.close()

        missing_tables = set(REQUIRED_TABLES) - existing_tables
        if missing_tables:
            logger.warning("Missing tables", tables=sorted(missing_tables))
            return False
        return True


def create_database(db_path: str | Path, force: bool = False) -> DatabaseSchema:
    """Create a new database with schema.

    Args:
        db_path: Path to SQLite database file
        force: Remove an existing file before creating the schema

    Returns:
        DatabaseSchema instance
    """
    path = Path(db_path)
    if force and path.exists():
        path.unlink()
        for suffix in ("-wal", "-shm"):
            sidecar = path.with_name(path.name + suffix)
            if sidecar.exists():
                sidecar.unlink()

    schema = DatabaseSchema(path)
    schema.create_schema()
    return schema


def initialize_schema(db_path: str | Path) -> bool:
    """Create the schema if the database does not carry it yet.

    Returns:
        True if the schema was created, False if it already existed
    """
    schema = DatabaseSchema(db_path)
    if schema.validate_schema():
        return False
    schema.create_schema()
    return True
