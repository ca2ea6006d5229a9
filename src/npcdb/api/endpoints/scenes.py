"""Scene CRUD endpoints."""

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
from npcdb.api.sanitizers import normalize_scene_aliases, sanitize_scene_payload
from npcdb.config import get_logger

logger = get_logger(__name__)
router = APIRouter()

NOT_FOUND = "Scene not found"
PARENT_NOT_FOUND = "Movie not found"


@router.get("/movies/{movie_id}/scenes")
async def list_scenes(
    movie_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """List the scenes of a movie."""
    try:
        items = await db_ops.list_children(EntityKind.SCENE, movie_id)
        return send_success(items)
    except Exception as e:
        return error_response(e, "Failed to list scenes", movie_id=movie_id)


@router.get("/scenes/{scene_id}")
async def get_scene(
    scene_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Get a scene by ID."""
    try:
        item = await db_ops.get(EntityKind.SCENE, scene_id)
        if item is None:
            return send_error(NOT_FOUND, 404)
        return send_success(item)
    except Exception as e:
        return error_response(e, "Failed to get scene", scene_id=scene_id)


@router.post("/movies/{movie_id}/scenes")
async def create_scene(
    movie_id: str,
    request: Request,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Create a scene under a movie."""
    try:
        if not await db_ops.exists(EntityKind.MOVIE, movie_id):
            return send_error(PARENT_NOT_FOUND, 404)
        body = with_parent(await read_json_body(request), "movieId", movie_id)
        payload = sanitize_scene_payload(body)
        item = await db_ops.create(EntityKind.SCENE, payload)
        logger.info("Created scene", scene_id=item.id, movie_id=movie_id)
        return send_created(item)
    except Exception as e:
        return error_response(e, "Failed to create scene", movie_id=movie_id)


@router.put("/scenes/{scene_id}")
async def update_scene(
    scene_id: str,
    request: Request,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Update a scene; omitted fields keep their stored values."""
    try:
        existing = await db_ops.get(EntityKind.SCENE, scene_id)
        if existing is None:
            return send_error(NOT_FOUND, 404)
        # Legacy spellings must not be shadowed by the stored camelCase values
        body = normalize_scene_aliases(await read_json_body(request))
        payload = sanitize_scene_payload(merge_for_update(existing, body))
        item = await db_ops.update(EntityKind.SCENE, scene_id, payload)
        if item is None:
            return send_error(NOT_FOUND, 404)
        return send_success(item)
    except Exception as e:
        return error_response(e, "Failed to update scene", scene_id=scene_id)


@router.delete("/scenes/{scene_id}")
async def delete_scene(
    scene_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Delete a scene."""
    try:
        if not await db_ops.delete(EntityKind.SCENE, scene_id):
            return send_error(NOT_FOUND, 404)
        logger.info("Deleted scene", scene_id=scene_id)
        return send_success({"id": scene_id})
    except Exception as e:
        return error_response(e, "Failed to delete scene", scene_id=scene_id)
