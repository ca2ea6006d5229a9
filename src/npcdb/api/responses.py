"""Response envelope helpers.

Every endpoint answers with ``{"success": true, "data": ...}`` or
``{"success": false, "error": ..., "details": ...}``.
"""

from collections.abc import Mapping
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from npcdb.config import get_logger
from npcdb.exceptions import (
    ConstraintViolationError,
    NotFoundError,
    NpcDBError,
    ValidationError,
)

logger = get_logger(__name__)


def send_success(data: Any, status_code: int = 200) -> JSONResponse:
    """Wrap data in a success envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"success": True, "data": jsonable_encoder(data, by_alias=True)},
    )


def send_created(data: Any) -> JSONResponse:
    """Success envelope with 201 Created."""
    return send_success(data, status_code=201)


def send_error(
    message: str, status_code: int = 400, details: Any = None
) -> JSONResponse:
    """Wrap an error message in a failure envelope."""
    content: dict[str, Any] = {"success": False, "error": message}
    if details is not None:
        content["details"] = jsonable_encoder(details)
    return JSONResponse(status_code=status_code, content=content)


def error_response(
    exc: Exception, fallback: str, **context: Any
) -> JSONResponse:
    """Map a pipeline failure onto the error taxonomy.

    Validation and constraint failures are 400, missing records 404, and
    everything else a 500 carrying only the fallback message.
    """
    if isinstance(exc, ValidationError | ConstraintViolationError):
        logger.info("Rejected request", error=exc.message, **context)
        return send_error(exc.message, 400, exc.details or None)
    if isinstance(exc, NotFoundError):
        return send_error(exc.message, 404)
    if isinstance(exc, NpcDBError):
        logger.error(fallback, error=exc.message, details=exc.details, **context)
    else:
        logger.exception(fallback, error=str(exc), **context)
    return send_error(fallback, 500)


async def read_json_body(request: Request) -> Any:
    """Decode the request body as JSON.

    Raises:
        ValidationError: If the body is empty or not valid JSON
    """
    raw = await request.body()
    if not raw.strip():
        raise ValidationError("Request body must be a JSON object")
    try:
        return await request.json()
    except ValueError as e:
        raise ValidationError(
            "Request body is not valid JSON", details={"error": str(e)}
        ) from e


def merge_for_update(existing: BaseModel, body: Any) -> dict[str, Any]:
    """Shallow-merge an update body over the stored entity.

    Fields missing from the body keep their stored values.
    """
    if not isinstance(body, Mapping):
        raise ValidationError("Request body must be a JSON object")
    return {**existing.model_dump(by_alias=True), **body}


def with_parent(body: Any, key: str, parent_id: str) -> dict[str, Any]:
    """Attach the parent id from the URL to a create body."""
    if not isinstance(body, Mapping):
        raise ValidationError("Request body must be a JSON object")
    return {**body, key: parent_id}
