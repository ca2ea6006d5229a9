"""Health check endpoint."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, bool | str]:
    """Health check endpoint."""
    return {"success": True, "message": "ok"}
