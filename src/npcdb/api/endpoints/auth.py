"""Authentication placeholders.

Accounts are not implemented; every route answers 501.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from npcdb.api.responses import send_error

router = APIRouter()


@router.post("/register")
async def register() -> JSONResponse:
    """User registration (not implemented)."""
    return send_error("Auth register endpoint not implemented yet", 501)


@router.post("/login")
async def login() -> JSONResponse:
    """User login (not implemented)."""
    return send_error("Auth login endpoint not implemented yet", 501)


@router.post("/logout")
async def logout() -> JSONResponse:
    """User logout (not implemented)."""
    return send_error("Auth logout endpoint not implemented yet", 501)
