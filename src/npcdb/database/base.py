"""Shared data access for the entity tables.

Subclasses describe one table (name, writable columns, parent key and
collection ordering) and translate validated payloads into column values.
All statements use named placeholders; identifiers come from the class
definitions only, never from callers.
"""

from __future__ import annotations

import sqlite3
import uuid
from typing import Any, ClassVar

from npcdb.config import get_logger
from npcdb.exceptions import ConstraintViolationError, DatabaseError

from .connection_manager import DatabaseConnectionManager

logger = get_logger(__name__)


class EntityOperations:
    """Parameterized CRUD against a single table."""

    table: ClassVar[str]
    columns: ClassVar[tuple[str, ...]]
    parent_column: ClassVar[str | None] = None
    order_by: ClassVar[str] = "created_at DESC, rowid DESC"

    def __init__(self, manager: DatabaseConnectionManager) -> None:
        """Initialize entity operations.

        Args:
            manager: Connection manager shared by all entity operations
        """
        self.manager = manager

    def _select(self) -> str:
        return f"SELECT * FROM {self.table}"  # noqa: S608

    def _fetch_one(self, query: str, params: dict[str, Any]) -> sqlite3.Row | None:
        conn = self.manager.get_connection()
        try:
            row: sqlite3.Row | None = conn.execute(query, params).fetchone()
            return row
        except sqlite3.Error as e:
            raise DatabaseError(
                message=f"Failed to read from {self.table}",
                details={"error": str(e)},
            ) from e
        finally:
            self.manager.release_connection(conn)

    def _fetch_all(self, query: str, params: dict[str, Any]) -> list[sqlite3.Row]:
        conn = self.manager.get_connection()
        try:
            return list(conn.execute(query, params).fetchall())
        except sqlite3.Error as e:
            raise DatabaseError(
                message=f"Failed to read from {self.table}",
                details={"error": str(e)},
            ) from e
        finally:
            self.manager.release_connection(conn)

    def _write(self, query: str, params: dict[str, Any]) -> int:
        try:
            with self.manager.transaction() as conn:
                return conn.execute(query, params).rowcount
        except sqlite3.IntegrityError as e:
            logger.warning(
                "Constraint violation", table=self.table, error=str(e)
            )
            raise ConstraintViolationError(
                message=f"Constraint violation on {self.table}: {e}",
                hint="Check that referenced records exist and enum values are valid",
                details={"table": self.table},
            ) from e
        except sqlite3.Error as e:
            raise DatabaseError(
                message=f"Failed to write to {self.table}",
                details={"error": str(e)},
            ) from e

    def get(self, entity_id: str) -> sqlite3.Row | None:
        """Point lookup by id."""
        return self._fetch_one(
            f"{self._select()} WHERE id = :id LIMIT 1", {"id": entity_id}
        )

    def exists(self, entity_id: str) -> bool:
        """Return True if a row with this id exists."""
        row = self._fetch_one(
            f"SELECT 1 FROM {self.table} WHERE id = :id LIMIT 1",  # noqa: S608
            {"id": entity_id},
        )
        return row is not None

    def list_for_parent(self, parent_id: str) -> list[sqlite3.Row]:
        """All rows belonging to one parent, in collection order."""
        if self.parent_column is None:
            raise DatabaseError(f"{self.table} has no parent column")
        return self._fetch_all(
            f"{self._select()} WHERE {self.parent_column} = :parent_id "
            f"ORDER BY {self.order_by}",
            {"parent_id": parent_id},
        )

    def insert(self, values: dict[str, Any]) -> str:
        """Insert a row with a fresh id and return the id."""
        entity_id = str(uuid.uuid4())
        self.insert_with_id(entity_id, values)
        return entity_id

    def insert_with_id(self, entity_id: str, values: dict[str, Any]) -> None:
        """Insert a row under a caller-chosen id."""
        names = ["id", *self.columns]
        placeholders = ", ".join(f":{name}" for name in names)
        self._write(
            f"INSERT INTO {self.table} ({', '.join(names)}) "  # noqa: S608
            f"VALUES ({placeholders})",
            {"id": entity_id, **{name: values.get(name) for name in self.columns}},
        )

    def update(self, entity_id: str, values: dict[str, Any]) -> int:
        """Overwrite the writable columns of a row.

        Returns:
            Number of rows changed (0 when the id does not exist)
        """
        assignments = ", ".join(f"{name} = :{name}" for name in self.columns)
        return self._write(
            f"UPDATE {self.table} SET {assignments} WHERE id = :id",  # noqa: S608
            {"id": entity_id, **{name: values.get(name) for name in self.columns}},
        )

    def delete(self, entity_id: str) -> int:
        """Hard delete by id.

        Returns:
            Number of rows removed (0 when the id does not exist)
        """
        return self._write(
            f"DELETE FROM {self.table} WHERE id = :id",  # noqa: S608
            {"id": entity_id},
        )

    def count(self) -> int:
        """Number of rows in the table."""
        row = self._fetch_one(
            f"SELECT COUNT(*) AS total FROM {self.table}", {}  # noqa: S608
        )
        return int(row["total"]) if row else 0
