"""Movie reference CRUD endpoints."""

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
from npcdb.api.sanitizers import sanitize_reference_payload
from npcdb.config import get_logger

logger = get_logger(__name__)
router = APIRouter()

NOT_FOUND = "Reference not found"
PARENT_NOT_FOUND = "Movie not found"


@router.get("/movies/{movie_id}/references")
async def list_references(
    movie_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """List the references of a movie."""
    try:
        items = await db_ops.list_children(EntityKind.REFERENCE, movie_id)
        return send_success(items)
    except Exception as e:
        return error_response(e, "Failed to list references", movie_id=movie_id)


@router.get("/references/{reference_id}")
async def get_reference(
    reference_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Get a reference by ID."""
    try:
        item = await db_ops.get(EntityKind.REFERENCE, reference_id)
        if item is None:
            return send_error(NOT_FOUND, 404)
        return send_success(item)
    except Exception as e:
        return error_response(e, "Failed to get reference", reference_id=reference_id)


@router.post("/movies/{movie_id}/references")
async def create_reference(
    movie_id: str,
    request: Request,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Create a reference under a movie."""
    try:
        if not await db_ops.exists(EntityKind.MOVIE, movie_id):
            return send_error(PARENT_NOT_FOUND, 404)
        body = with_parent(await read_json_body(request), "movieId", movie_id)
        payload = sanitize_reference_payload(body)
        item = await db_ops.create(EntityKind.REFERENCE, payload)
        logger.info("Created reference", reference_id=item.id, movie_id=movie_id)
        return send_created(item)
    except Exception as e:
        return error_response(e, "Failed to create reference", movie_id=movie_id)


@router.put("/references/{reference_id}")
async def update_reference(
    reference_id: str,
    request: Request,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Update a reference; omitted fields keep their stored values."""
    try:
        existing = await db_ops.get(EntityKind.REFERENCE, reference_id)
        if existing is None:
            return send_error(NOT_FOUND, 404)
        body = await read_json_body(request)
        payload = sanitize_reference_payload(merge_for_update(existing, body))
        item = await db_ops.update(EntityKind.REFERENCE, reference_id, payload)
        if item is None:
            return send_error(NOT_FOUND, 404)
        return send_success(item)
    except Exception as e:
        return error_response(
            e, "Failed to update reference", reference_id=reference_id
        )


@router.delete("/references/{reference_id}")
async def delete_reference(
    reference_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Delete a reference."""
    try:
        if not await db_ops.delete(EntityKind.REFERENCE, reference_id):
            return send_error(NOT_FOUND, 404)
        logger.info("Deleted reference", reference_id=reference_id)
        return send_success({"id": reference_id})
    except Exception as e:
        return error_response(
            e, "Failed to delete reference", reference_id=reference_id
        )
