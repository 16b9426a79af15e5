# ============================================================================
# FILE: vault/api/router.py
# ============================================================================
from fastapi import APIRouter
from vault.api.endpoints import category, playlist, track, user

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(user.router, prefix="/users", tags=["users"])
api_router.include_router(category.router, prefix="/categories", tags=["categories"])
api_router.include_router(playlist.router, prefix="/playlists", tags=["playlists"])
api_router.include_router(track.router, prefix="/tracks", tags=["tracks"])
