"""Subtitle segment CRUD endpoints."""

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
from npcdb.api.sanitizers import sanitize_subtitle_payload
from npcdb.config import get_logger

logger = get_logger(__name__)
router = APIRouter()

NOT_FOUND = "Subtitle segment not found"
PARENT_NOT_FOUND = "Movie not found"


@router.get("/movies/{movie_id}/subtitle-segments")
async def list_subtitle_segments(
    movie_id: str,
    limit: str | None = None,
    offset: str | None = None,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """List a movie's subtitle segments in playback order, paginated."""
    try:
        page = await db_ops.list_subtitle_segments(movie_id, limit=limit, offset=offset)
        return send_success(page)
    except Exception as e:
        return error_response(e, "Failed to list subtitle segments", movie_id=movie_id)


@router.get("/subtitle-segments/{segment_id}")
async def get_subtitle_segment(
    segment_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Get a subtitle segment by ID."""
    try:
        item = await db_ops.get(EntityKind.SUBTITLE_SEGMENT, segment_id)
        if item is None:
            return send_error(NOT_FOUND, 404)
        return send_success(item)
    except Exception as e:
        return error_response(
            e, "Failed to get subtitle segment", segment_id=segment_id
        )


@router.post("/movies/{movie_id}/subtitle-segments")
async def create_subtitle_segment(
    movie_id: str,
    request: Request,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Create a subtitle segment under a movie."""
    try:
        if not await db_ops.exists(EntityKind.MOVIE, movie_id):
            return send_error(PARENT_NOT_FOUND, 404)
        body = with_parent(await read_json_body(request), "movieId", movie_id)
        payload = sanitize_subtitle_payload(body)
        item = await db_ops.create(EntityKind.SUBTITLE_SEGMENT, payload)
        logger.info("Created subtitle segment", segment_id=item.id, movie_id=movie_id)
        return send_created(item)
    except Exception as e:
        return error_response(e, "Failed to create subtitle segment", movie_id=movie_id)


@router.put("/subtitle-segments/{segment_id}")
async def update_subtitle_segment(
    segment_id: str,
    request: Request,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Update a subtitle segment; omitted fields keep their stored values."""
    try:
        existing = await db_ops.get(EntityKind.SUBTITLE_SEGMENT, segment_id)
        if existing is None:
            return send_error(NOT_FOUND, 404)
        body = await read_json_body(request)
        payload = sanitize_subtitle_payload(merge_for_update(existing, body))
        item = await db_ops.update(EntityKind.SUBTITLE_SEGMENT, segment_id, payload)
        if item is None:
            return send_error(NOT_FOUND, 404)
        return send_success(item)
    except Exception as e:
        return error_response(
            e, "Failed to update subtitle segment", segment_id=segment_id
        )


@router.delete("/subtitle-segments/{segment_id}")
async def delete_subtitle_segment(
    segment_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Delete a subtitle segment."""
    try:
        if not await db_ops.delete(EntityKind.SUBTITLE_SEGMENT, segment_id):
            return send_error(NOT_FOUND, 404)
        logger.info("Deleted subtitle segment", segment_id=segment_id)
        return send_success({"id": segment_id})
    except Exception as e:
        return error_response(
            e, "Failed to delete subtitle segment", segment_id=segment_id
        )
