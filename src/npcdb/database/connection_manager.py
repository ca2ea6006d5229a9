"""Database connection management with a bounded, thread-safe pool.

Every request handler borrows a connection for the duration of one data
access call and returns it afterwards. The pool never hands out more than
``database_pool_max_size`` connections at once; callers wait (up to the
configured timeout) when all of them are busy.
"""

from __future__ import annotations

import sqlite3
import threading
import time
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from queue import Empty, Full, LifoQueue
from typing import Any

from npcdb.config import NpcDBSettings, get_logger
from npcdb.exceptions import DatabaseError

logger = get_logger(__name__)


class ConnectionPool:
    """Thread-safe connection pool for SQLite connections."""

    def __init__(
        self,
        settings: NpcDBSettings,
        db_path: Path | None = None,
        min_size: int = 1,
        max_size: int = 10,
    ):
        """Initialize the connection pool.

        Args:
            settings: Configuration settings
            db_path: Database path (defaults to settings.database_path)
            min_size: Number of connections opened up front
            max_size: Maximum number of connections the pool will open
        """
        self.settings = settings
        self.db_path = db_path or settings.database_path
        self.min_size = min_size
        self.max_size = max_size

        self._pool: LifoQueue[sqlite3.Connection] = LifoQueue(maxsize=max_size)
        self._active_connections = 0
        self._total_connections = 0
        self._lock = threading.RLock()
        self._closed = False

        self._initialize_pool()

    def _initialize_pool(self) -> None:
        """Open the minimum number of connections."""
        with self._lock:
            for _ in range(self.min_size):
                try:
                    conn = self._create_connection()
                except sqlite3.Error as e:
                    logger.error("Failed to create initial connection", error=str(e))
                    break
                self._pool.put(conn)
                self._total_connections += 1

    def _create_connection(self) -> sqlite3.Connection:
        """Create a new database connection with the configured pragmas."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(
            str(self.db_path),
            timeout=self.settings.database_timeout,
            check_same_thread=False,
        )

        conn.execute(f"PRAGMA journal_mode = {self.settings.database_journal_mode}")
        conn.execute(f"PRAGMA synchronous = {self.settings.database_synchronous}")
        conn.execute(
            "PRAGMA foreign_keys = ON"
            if self.settings.database_foreign_keys
            else "PRAGMA foreign_keys = OFF"
        )

        conn.row_factory = sqlite3.Row
        return conn

    def acquire(self, timeout: float | None = None) -> sqlite3.Connection:
        """Acquire a connection from the pool.

        Args:
            timeout: Maximum time to wait for a connection

        Returns:
            Database connection

        Raises:
            DatabaseError: If the pool is closed or no connection frees up in time
        """
        if self._closed:
            raise DatabaseError(
                message="Connection pool is closed",
                hint="The pool may have been shut down",
            )

        timeout = timeout or self.settings.database_timeout
        deadline = time.monotonic() + timeout

        while True:
            with self._lock:
                try:
                    conn = self._pool.get_nowait()
                    if self._is_connection_healthy(conn):
                        self._active_connections += 1
                        return conn
                    self._total_connections -= 1
                    conn.close()
                except Empty:
                    pass

                if self._total_connections < self.max_size:
                    try:
                        conn = self._create_connection()
                    except sqlite3.Error as e:
                        raise DatabaseError(
                            message=f"Failed to create database connection: {e}",
                            hint="Check database path and permissions",
                            details={"db_path": str(self.db_path)},
                        ) from e
                    self._total_connections += 1
                    self._active_connections += 1
                    return conn

            if time.monotonic() > deadline:
                raise DatabaseError(
                    message="Timeout waiting for database connection",
                    hint=f"All {self.max_size} connections are in use",
                    details={
                        "active": self._active_connections,
                        "total": self._total_connections,
                    },
                )

            time.sleep(0.01)

    def release(self, conn: sqlite3.Connection) -> None:
        """Return a connection to the pool.

        Args:
            conn: Connection to release
        """
        with self._lock:
            self._active_connections = max(0, self._active_connections - 1)

            if self._closed or not self._is_connection_healthy(conn):
                conn.close()
                self._total_connections -= 1
                return

            try:
                self._pool.put_nowait(conn)
            except Full:
                conn.close()
                self._total_connections -= 1

    def _is_connection_healthy(self, conn: sqlite3.Connection) -> bool:
        """Check if a connection can still execute statements."""
        try:
            conn.execute("SELECT 1")
            return True
        except sqlite3.Error:
            return False

    def get_stats(self) -> dict[str, Any]:
        """Get pool statistics."""
        with self._lock:
            return {
                "total_connections": self._total_connections,
                "active_connections": self._active_connections,
                "idle_connections": self._pool.qsize(),
                "min_size": self.min_size,
                "max_size": self.max_size,
                "closed": self._closed,
            }

    def close(self) -> None:
        """Close every idle connection and refuse further acquisitions."""
        with self._lock:
            if self._closed:
                return
            self._closed = True

            while True:
                try:
                    conn = self._pool.get_nowait()
                except Empty:
                    break
                conn.close()
                self._total_connections -= 1

            logger.info("Connection pool closed")


class DatabaseConnectionManager:
    """Connection manager with pooling and transaction helpers."""

    def __init__(self, settings: NpcDBSettings, db_path: Path | None = None):
        """Initialize the connection manager.

        Args:
            settings: Configuration settings
            db_path: Database path (defaults to settings.database_path)
        """
        self.settings = settings
        self.db_path = db_path or settings.database_path
        self._pool = ConnectionPool(
            settings=settings,
            db_path=self.db_path,
            min_size=settings.database_pool_min_size,
            max_size=settings.database_pool_max_size,
        )

    def get_connection(self, timeout: float | None = None) -> sqlite3.Connection:
        """Borrow a connection from the pool."""
        return self._pool.acquire(timeout)

    def release_connection(self, conn: sqlite3.Connection) -> None:
        """Give a borrowed connection back to the pool."""
        self._pool.release(conn)

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """Yield a connection inside a transaction.

        Commits when the block exits normally and rolls back every statement
        issued inside the block when it raises.
        """
        conn = self.get_connection()
        try:
            yield conn
            conn.commit()
        except BaseException:
            conn.rollback()
            raise
        finally:
            self.release_connection(conn)

    @contextmanager
    def readonly(self) -> Generator[sqlite3.Connection, None, None]:
        """Yield a connection that rejects writes."""
        conn = self.get_connection()
        try:
            conn.execute("PRAGMA query_only = ON")
            yield conn
        finally:
            conn.execute("PRAGMA query_only = OFF")
            self.release_connection(conn)

    def execute_query(
        self,
        query: str,
        params: dict[str, Any] | None = None,
        fetch_one: bool = False,
    ) -> list[sqlite3.Row] | sqlite3.Row | None:
        """Run a read query with named parameters.

        Args:
            query: SQL text using ``:name`` placeholders
            params: Values for the placeholders
            fetch_one: If True, return only the first row (or None)

        Returns:
            A single row, None, or the list of rows
        """
        with self.readonly() as conn:
            cursor = conn.execute(query, params or {})
            if fetch_one:
                row: sqlite3.Row | None = cursor.fetchone()
                return row
            return list(cursor.fetchall())

    def execute_write(self, query: str, params: dict[str, Any] | None = None) -> int:
        """Run a write statement with named parameters.

        Returns:
            Number of affected rows
        """
        with self.transaction() as conn:
            cursor = conn.execute(query, params or {})
            return cursor.rowcount

    def check_database_exists(self) -> bool:
        """Return True if the database file exists and carries the schema."""
        if not self.db_path.exists():
            return False
        try:
            row = self.execute_query(
                "SELECT name FROM sqlite_master "
                "WHERE type = 'table' AND name = :name",
                {"name": "movies"},
                fetch_one=True,
            )
        except sqlite3.Error:
            return False
        return row is not None

    def get_pool_stats(self) -> dict[str, Any]:
        """Get connection pool statistics."""
        return self._pool.get_stats()

    def close(self) -> None:
        """Close the pool and all idle connections."""
        self._pool.close()

    def __enter__(self) -> DatabaseConnectionManager:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()
