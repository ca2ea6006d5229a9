"""Character CRUD endpoints."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from npcdb.api.db_operations import DatabaseOperations, EntityKind
from npcdb.api.dependencies import get_db_ops
from npcdb.api.responses import (
    error_response,
    merge_for_update,
    read_json_body,
    send_created,
    send_error,
    send_success,
    with_parent,
)
from npcdb.api.sanitizers import sanitize_character_payload
from npcdb.config import get_logger

logger = get_logger(__name__)
router = APIRouter()

NOT_FOUND = "Character not found"
PARENT_NOT_FOUND = "Movie not found"


@router.get("/movies/{movie_id}/characters")
async def list_characters(
    movie_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """List the characters of a movie."""
    try:
        items = await db_ops.list_children(EntityKind.CHARACTER, movie_id)
        return send_success(items)
    except Exception as e:
        return error_response(e, "Failed to list characters", movie_id=movie_id)


@router.get("/characters/{character_id}")
async def get_character(
    character_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Get a character by ID."""
    try:
        item = await db_ops.get(EntityKind.CHARACTER, character_id)
        if item is None:
            return send_error(NOT_FOUND, 404)
        return send_success(item)
    except Exception as e:
        return error_response(e, "Failed to get character", character_id=character_id)


@router.post("/movies/{movie_id}/characters")
async def create_character(
    movie_id: str,
    request: Request,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Create a character under a movie."""
    try:
        if not await db_ops.exists(EntityKind.MOVIE, movie_id):
            return send_error(PARENT_NOT_FOUND, 404)
        body = with_parent(await read_json_body(request), "movieId", movie_id)
        payload = sanitize_character_payload(body)
        item = await db_ops.create(EntityKind.CHARACTER, payload)
        logger.info("Created character", character_id=item.id, movie_id=movie_id)
        return send_created(item)
    except Exception as e:
        return error_response(e, "Failed to create character", movie_id=movie_id)


@router.put("/characters/{character_id}")
async def update_character(
    character_id: str,
    request: Request,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Update a character; omitted fields keep their stored values."""
    try:
        existing = await db_ops.get(EntityKind.CHARACTER, character_id)
        if existing is None:
            return send_error(NOT_FOUND, 404)
        body = await read_json_body(request)
        payload = sanitize_character_payload(merge_for_update(existing, body))
        item = await db_ops.update(EntityKind.CHARACTER, character_id, payload)
        if item is None:
            return send_error(NOT_FOUND, 404)
        return send_success(item)
    except Exception as e:
        return error_response(
            e, "Failed to update character", character_id=character_id
        )


@router.delete("/characters/{character_id}")
async def delete_character(
    character_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Delete a character."""
    try:
        if not await db_ops.delete(EntityKind.CHARACTER, character_id):
            return send_error(NOT_FOUND, 404)
        logger.info("Deleted character", character_id=character_id)
        return send_success({"id": character_id})
    except Exception as e:
        return error_response(
            e, "Failed to delete character", character_id=character_id
        )
