"""Main API router."""

from fastapi import APIRouter

from npcdb.api.endpoints import (
    auth,
    character_notes,
    characters,
    health,
    movie_dialogues,
    movie_scripts,
    movies,
    narrative,
    references,
    scenes,
    subtitle_segments,
)

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(movies.router, prefix="/movies", tags=["movies"])
api_router.include_router(characters.router, tags=["characters"])
api_router.include_router(scenes.router, tags=["scenes"])
api_router.include_router(subtitle_segments.router, tags=["subtitle-segments"])
api_router.include_router(references.router, tags=["references"])
api_router.include_router(character_notes.router, tags=["notes"])
api_router.include_router(movie_scripts.router, tags=["movie-scripts"])
api_router.include_router(movie_dialogues.router, tags=["movie-dialogues"])
api_router.include_router(narrative.router, tags=["narrative"])
api_router.include_router(health.router, tags=["health"])
