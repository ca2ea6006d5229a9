"""Movie script CRUD endpoints."""

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
from npcdb.api.sanitizers import sanitize_movie_script_payload
from npcdb.config import get_logger

logger = get_logger(__name__)
router = APIRouter()

NOT_FOUND = "Movie script not found"
PARENT_NOT_FOUND = "Movie not found"


@router.get("/movies/{movie_id}/scripts")
async def list_movie_scripts(
    movie_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """List the scripts of a movie."""
    try:
        items = await db_ops.list_children(EntityKind.MOVIE_SCRIPT, movie_id)
        return send_success(items)
    except Exception as e:
        return error_response(e, "Failed to list scripts", movie_id=movie_id)


@router.get("/movie-scripts/{script_id}")
async def get_movie_script(
    script_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Get a movie script by ID."""
    try:
        item = await db_ops.get(EntityKind.MOVIE_SCRIPT, script_id)
        if item is None:
            return send_error(NOT_FOUND, 404)
        return send_success(item)
    except Exception as e:
        return error_response(e, "Failed to get movie script", script_id=script_id)


@router.post("/movies/{movie_id}/scripts")
async def create_movie_script(
    movie_id: str,
    request: Request,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Create a movie script under a movie."""
    try:
        if not await db_ops.exists(EntityKind.MOVIE, movie_id):
            return send_error(PARENT_NOT_FOUND, 404)
        body = with_parent(await read_json_body(request), "movieId", movie_id)
        payload = sanitize_movie_script_payload(body)
        item = await db_ops.create(EntityKind.MOVIE_SCRIPT, payload)
        logger.info("Created movie script", script_id=item.id, movie_id=movie_id)
        return send_created(item)
    except Exception as e:
        return error_response(e, "Failed to create movie script", movie_id=movie_id)


@router.put("/movie-scripts/{script_id}")
async def update_movie_script(
    script_id: str,
    request: Request,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Update a movie script; omitted fields keep their stored values."""
    try:
        existing = await db_ops.get(EntityKind.MOVIE_SCRIPT, script_id)
        if existing is None:
            return send_error(NOT_FOUND, 404)
        body = await read_json_body(request)
        payload = sanitize_movie_script_payload(merge_for_update(existing, body))
        item = await db_ops.update(EntityKind.MOVIE_SCRIPT, script_id, payload)
        if item is None:
            return send_error(NOT_FOUND, 404)
        return send_success(item)
    except Exception as e:
        return error_response(e, "Failed to update movie script", script_id=script_id)


@router.delete("/movie-scripts/{script_id}")
async def delete_movie_script(
    script_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Delete a movie script."""
    try:
        if not await db_ops.delete(EntityKind.MOVIE_SCRIPT, script_id):
            return send_error(NOT_FOUND, 404)
        logger.info("Deleted movie script", script_id=script_id)
        return send_success({"id": script_id})
    except Exception as e:
        return error_response(e, "Failed to delete movie script", script_id=script_id)
