"""Movie CRUD endpoints."""

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
)
from npcdb.api.sanitizers import sanitize_movie_payload
from npcdb.config import get_logger

logger = get_logger(__name__)
router = APIRouter()

MOVIE_NOT_FOUND = "Movie not found"


@router.get("")
async def list_movies(
    search: str | None = None,
    limit: str | None = None,
    offset: str | None = None,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """List movies, newest first, with optional title search."""
    try:
        page = await db_ops.list_movies(search=search, limit=limit, offset=offset)
        return send_success(page)
    except Exception as e:
        return error_response(e, "Failed to list movies")


@router.get("/{movie_id}")
async def get_movie(
    movie_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Get a movie by ID."""
    try:
        movie = await db_ops.get(EntityKind.MOVIE, movie_id)
        if movie is None:
            return send_error(MOVIE_NOT_FOUND, 404)
        return send_success(movie)
    except Exception as e:
        return error_response(e, "Failed to get movie", movie_id=movie_id)


@router.post("")
async def create_movie(
    request: Request,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Create a movie."""
    try:
        payload = sanitize_movie_payload(await read_json_body(request))
        movie = await db_ops.create(EntityKind.MOVIE, payload)
        logger.info("Created movie", movie_id=movie.id)
        return send_created(movie)
    except Exception as e:
        return error_response(e, "Failed to create movie")


@router.put("/{movie_id}")
async def update_movie(
    movie_id: str,
    request: Request,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Update a movie; omitted fields keep their stored values."""
    try:
        existing = await db_ops.get(EntityKind.MOVIE, movie_id)
        if existing is None:
            return send_error(MOVIE_NOT_FOUND, 404)
        body = await read_json_body(request)
        payload = sanitize_movie_payload(merge_for_update(existing, body))
        movie = await db_ops.update(EntityKind.MOVIE, movie_id, payload)
        if movie is None:
            return send_error(MOVIE_NOT_FOUND, 404)
        return send_success(movie)
    except Exception as e:
        return error_response(e, "Failed to update movie", movie_id=movie_id)


@router.delete("/{movie_id}")
async def delete_movie(
    movie_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Delete a movie and, through the schema, everything attached to it."""
    try:
        if not await db_ops.delete(EntityKind.MOVIE, movie_id):
            return send_error(MOVIE_NOT_FOUND, 404)
        logger.info("Deleted movie", movie_id=movie_id)
        return send_success({"id": movie_id})
    except Exception as e:
        return error_response(e, "Failed to delete movie", movie_id=movie_id)
