"""Shared FastAPI dependencies."""

from fastapi import Request

from npcdb.api.db_operations import DatabaseOperations


async def get_db_ops(request: Request) -> DatabaseOperations:
    """Get database operations from app state."""
    db_ops: DatabaseOperations = request.app.state.db_ops
    return db_ops
