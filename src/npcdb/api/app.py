"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from npcdb import __version__
from npcdb.api.db_operations import DatabaseOperations
from npcdb.api.responses import send_error
from npcdb.api.router import api_router
from npcdb.config import NpcDBSettings, get_logger, get_settings

logger = get_logger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: NpcDBSettings = app.state.settings
    logger.info("Starting NPC database API", db_path=str(settings.database_path))

    db_ops = DatabaseOperations(settings)
    await db_ops.initialize()
    app.state.db_ops = db_ops

    yield

    logger.info("Shutting down NPC database API")
    await db_ops.close()


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Unknown routes and methods answer with the API-not-found envelope."""
    if exc.status_code in (404, 405):
        return send_error("API not found", 404)
    return send_error(str(exc.detail), exc.status_code)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request parameters are validation failures."""
    return send_error("Invalid request", 400, details=exc.errors())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for anything an endpoint did not catch."""
    logger.exception(
        "Unhandled API error", path=request.url.path, error=str(exc)
    )
    return send_error("Server internal error", 500)


def create_app(settings: NpcDBSettings | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title="NPC Database API",
        description="Movie and character narrative content API",
        version=__version__,
        lifespan=lifespan,
        docs_url=f"{API_PREFIX}/docs",
        redoc_url=f"{API_PREFIX}/redoc",
        openapi_url=f"{API_PREFIX}/openapi.json",
    )
    app.state.settings = settings

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Include API routers
    app.include_router(api_router, prefix=API_PREFIX)

    return app
