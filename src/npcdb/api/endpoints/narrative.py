"""Narrative stub endpoint."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from npcdb.api.narrative import generate_narrative
from npcdb.api.responses import error_response, read_json_body, send_success
from npcdb.api.sanitizers import sanitize_narrative_payload

router = APIRouter()


@router.post("/narrative")
async def create_narrative(request: Request) -> JSONResponse:
    """Return the templated first-person narrative for a movie character."""
    try:
        narrative_request = sanitize_narrative_payload(await read_json_body(request))
        return send_success(generate_narrative(narrative_request))
    except Exception as e:
        return error_response(e, "Failed to generate narrative")
