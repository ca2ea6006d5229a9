"""Tests for the pooled connection manager."""

import sqlite3

import pytest

from npcdb.config import NpcDBSettings
from npcdb.database import ConnectionPool, DatabaseConnectionManager
from npcdb.exceptions import DatabaseError

pytestmark = pytest.mark.integration


class TestConnectionPool:
    """Test ConnectionPool."""

    def test_opens_minimum(self, settings):
        """The minimum number of connections is opened up front."""
        pool = ConnectionPool(settings, min_size=2, max_size=4)
        try:
            stats = pool.get_stats()
            assert stats["total_connections"] == 2
            assert stats["idle_connections"] == 2
        finally:
            pool.close()

    def test_acquire_and_release(self, settings):
        """Released connections are reused."""
        pool = ConnectionPool(settings, min_size=1, max_size=2)
        try:
            conn = pool.acquire()
            assert pool.get_stats()["active_connections"] == 1
            pool.release(conn)
            assert pool.acquire() is conn
        finally:
            pool.close()

    def test_pragmas(self, settings):
        """Connections enforce foreign keys and return rows by name."""
        pool = ConnectionPool(settings)
        try:
            conn = pool.acquire()
            assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1
            assert conn.row_factory is sqlite3.Row
            pool.release(conn)
        finally:
            pool.close()

    def test_exhausted_pool_times_out(self, settings):
        """Waiting past the timeout raises DatabaseError."""
        pool = ConnectionPool(settings, min_size=1, max_size=1)
        try:
            held = pool.acquire()
            with pytest.raises(DatabaseError, match="Timeout"):
                pool.acquire(timeout=0.05)
            pool.release(held)
        finally:
            pool.close()

    def test_closed_pool(self, settings):
        """A closed pool refuses to hand out connections."""
        pool = ConnectionPool(settings)
        pool.close()

        with pytest.raises(DatabaseError, match="closed"):
            pool.acquire()


class TestDatabaseConnectionManager:
    """Test DatabaseConnectionManager."""

    def test_transaction_commits(self, manager):
        """Statements in a successful block are committed."""
        with manager.transaction() as conn:
            conn.execute("INSERT INTO movies (id, title) VALUES ('m1', 'x')")

        row = manager.execute_query(
            "SELECT title FROM movies WHERE id = :id", {"id": "m1"}, fetch_one=True
        )
        assert row["title"] == "x"

    def test_transaction_rolls_back(self, manager):
        """Every statement in a failing block is undone."""
        with pytest.raises(RuntimeError), manager.transaction() as conn:
            conn.execute("INSERT INTO movies (id, title) VALUES ('m1', 'x')")
            raise RuntimeError("boom")

        rows = manager.execute_query("SELECT * FROM movies")
        assert rows == []

    def test_readonly_rejects_writes(self, manager):
        """Read-only connections cannot modify data."""
        with pytest.raises(sqlite3.OperationalError), manager.readonly() as conn:
            conn.execute("INSERT INTO movies (id, title) VALUES ('m1', 'x')")

    def test_execute_write(self, manager):
        """Writes report the affected row count."""
        assert (
            manager.execute_write(
                "INSERT INTO movies (id, title) VALUES (:id, :title)",
                {"id": "m1", "title": "x"},
            )
            == 1
        )

    def test_check_database_exists(self, manager, tmp_path):
        """Existence means the file carries the schema."""
        assert manager.check_database_exists() is True

        other = DatabaseConnectionManager(
            NpcDBSettings(database_path=tmp_path / "other.db")
        )
        try:
            assert other.check_database_exists() is False
        finally:
            other.close()

    def test_context_manager_closes(self, settings):
        """Leaving the block closes the pool."""
        with DatabaseConnectionManager(settings) as db_manager:
            pass

        assert db_manager.get_pool_stats()["closed"] is True
