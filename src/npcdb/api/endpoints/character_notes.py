"""Character note CRUD endpoints."""

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
from npcdb.api.sanitizers import sanitize_character_note_payload
from npcdb.config import get_logger

logger = get_logger(__name__)
router = APIRouter()

NOT_FOUND = "Character note not found"
PARENT_NOT_FOUND = "Character not found"


@router.get("/characters/{character_id}/notes")
async def list_character_notes(
    character_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """List the notes of a character."""
    try:
        items = await db_ops.list_children(EntityKind.CHARACTER_NOTE, character_id)
        return send_success(items)
    except Exception as e:
        return error_response(e, "Failed to list notes", character_id=character_id)


@router.get("/notes/{note_id}")
async def get_character_note(
    note_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Get a character note by ID."""
    try:
        item = await db_ops.get(EntityKind.CHARACTER_NOTE, note_id)
        if item is None:
            return send_error(NOT_FOUND, 404)
        return send_success(item)
    except Exception as e:
        return error_response(e, "Failed to get character note", note_id=note_id)


@router.post("/characters/{character_id}/notes")
async def create_character_note(
    character_id: str,
    request: Request,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Create a character note under a character."""
    try:
        if not await db_ops.exists(EntityKind.CHARACTER, character_id):
            return send_error(PARENT_NOT_FOUND, 404)
        body = with_parent(await read_json_body(request), "characterId", character_id)
        payload = sanitize_character_note_payload(body)
        item = await db_ops.create(EntityKind.CHARACTER_NOTE, payload)
        logger.info(
            "Created character note", note_id=item.id, character_id=character_id
        )
        return send_created(item)
    except Exception as e:
        return error_response(
            e, "Failed to create character note", character_id=character_id
        )


@router.put("/notes/{note_id}")
async def update_character_note(
    note_id: str,
    request: Request,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Update a character note; omitted fields keep their stored values."""
    try:
        existing = await db_ops.get(EntityKind.CHARACTER_NOTE, note_id)
        if existing is None:
            return send_error(NOT_FOUND, 404)
        body = await read_json_body(request)
        payload = sanitize_character_note_payload(merge_for_update(existing, body))
        item = await db_ops.update(EntityKind.CHARACTER_NOTE, note_id, payload)
        if item is None:
            return send_error(NOT_FOUND, 404)
        return send_success(item)
    except Exception as e:
        return error_response(e, "Failed to update character note", note_id=note_id)


@router.delete("/notes/{note_id}")
async def delete_character_note(
    note_id: str,
    db_ops: DatabaseOperations = Depends(get_db_ops),
) -> JSONResponse:
    """Delete a character note."""
    try:
        if not await db_ops.delete(EntityKind.CHARACTER_NOTE, note_id):
            return send_error(NOT_FOUND, 404)
        logger.info("Deleted character note", note_id=note_id)
        return send_success({"id": note_id})
    except Exception as e:
        return error_response(e, "Failed to delete character note", note_id=note_id)
