"""Movie dialogue file CRUD endpoints."""

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
from npcdb.api.sanitizers import sanitize_movie_dialogue_payload
from npcdb.config import get_logger

logger = get_logger(__name__)
router = APIRouter()

NOT_FOUND = "Dialogue file not found"
PARENT_NOT_FOUND = "Movie not found"


@router.get("/movies/{movie_id}/dialogues")
async def list_movie_dialogues(
    movie_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """List the dialogues of a movie."""
    try:
        items = await db_ops.list_children(EntityKind.MOVIE_DIALOGUE, movie_id)
        return send_success(items)
    except Exception as e:
        return error_response(e, "Failed to list dialogues", movie_id=movie_id)


@router.get("/movie-dialogues/{dialogue_id}")
async def get_movie_dialogue(
    dialogue_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Get a dialogue file by ID."""
    try:
        item = await db_ops.get(EntityKind.MOVIE_DIALOGUE, dialogue_id)
        if item is None:
            return send_error(NOT_FOUND, 404)
        return send_success(item)
    except Exception as e:
        return error_response(e, "Failed to get dialogue file", dialogue_id=dialogue_id)


@router.post("/movies/{movie_id}/dialogues")
async def create_movie_dialogue(
    movie_id: str,
    request: Request,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Create a dialogue file under a movie."""
    try:
        if not await db_ops.exists(EntityKind.MOVIE, movie_id):
            return send_error(PARENT_NOT_FOUND, 404)
        body = with_parent(await read_json_body(request), "movieId", movie_id)
        payload = sanitize_movie_dialogue_payload(body)
        item = await db_ops.create(EntityKind.MOVIE_DIALOGUE, payload)
        logger.info("Created dialogue file", dialogue_id=item.id, movie_id=movie_id)
        return send_created(item)
    except Exception as e:
        return error_response(e, "Failed to create dialogue file", movie_id=movie_id)


@router.put("/movie-dialogues/{dialogue_id}")
async def update_movie_dialogue(
    dialogue_id: str,
    request: Request,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Update a dialogue file; omitted fields keep their stored values."""
    try:
        existing = await db_ops.get(EntityKind.MOVIE_DIALOGUE, dialogue_id)
        if existing is None:
            return send_error(NOT_FOUND, 404)
        body = await read_json_body(request)
        payload = sanitize_movie_dialogue_payload(merge_for_update(existing, body))
        item = await db_ops.update(EntityKind.MOVIE_DIALOGUE, dialogue_id, payload)
        if item is None:
            return send_error(NOT_FOUND, 404)
        return send_success(item)
    except Exception as e:
        return error_response(
            e, "Failed to update dialogue file", dialogue_id=dialogue_id
        )


@router.delete("/movie-dialogues/{dialogue_id}")
async def delete_movie_dialogue(
    dialogue_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Delete a dialogue file."""
    try:
        if not await db_ops.delete(EntityKind.MOVIE_DIALOGUE, dialogue_id):
            return send_error(NOT_FOUND, 404)
        logger.info("Deleted dialogue file", dialogue_id=dialogue_id)
        return send_success({"id": dialogue_id})
    except Exception as e:
        return error_response(
            e, "Failed to delete dialogue file", dialogue_id=dialogue_id
        )
