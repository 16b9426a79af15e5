# ============================================================================
# FILE: vault/api/endpoints/track.py
# ============================================================================
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Response, UploadFile, status
from fastapi.responses import FileResponse
from typing import List, Optional
from vault.api.dependencies import ensure_owner, require_current_user
from vault.core.exceptions import UploadRejectedError
from vault.db.session import get_storage
from vault.db.storage import BaseStorage
from vault.schemas.track import Track, TrackCreate, TrackUpdate
from vault.schemas.user import User
from vault.services.audio_service import audio_service
from vault.services.track_service import track_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("", response_model=List[Track])
async def get_my_tracks(
    category_id: Optional[int] = Query(None, alias="categoryId", description="Only tracks in this category"),
    store: BaseStorage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Get the current user's tracks, optionally filtered by category
    The category must belong to the caller
    """
    # categoryId=0 means "no category", same as omitting it
    if not category_id:
        return store.get_tracks(current_user.id)
    
    ensure_owner(store.get_category(category_id), current_user, "category")
    return [t for t in store.get_tracks_by_category(category_id) if t.user_id == current_user.id]

@router.post("/upload", response_model=Track, status_code=status.HTTP_201_CREATED)
async def upload_track(
    audio: UploadFile = File(..., description="Audio recording"),
    name: str = Form(..., min_length=1),
    duration: int = Form(..., ge=0, description="Duration in seconds"),
    category_id: Optional[int] = Form(None, alias="categoryId"),
    store: BaseStorage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Upload a recording (multipart: audio file plus name, duration, categoryId)
    Only audio media types up to MAX_UPLOAD_SIZE are accepted
    """
    track_data = TrackCreate(name=name, duration=duration, category_id=category_id or None)
    try:
        return await track_service.upload_track(store, current_user.id, track_data, audio)
    except UploadRejectedError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

@router.get("/{track_id}", response_model=Track)
async def get_track(
    track_id: int,
    store: BaseStorage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    return ensure_owner(store.get_track(track_id), current_user, "track")

@router.patch("/{track_id}", response_model=Track)
async def update_track(
    track_id: int,
    update_data: TrackUpdate,
    store: BaseStorage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Rename, re-categorize or correct the duration of a track
    Requires ownership
    """
    ensure_owner(store.get_track(track_id), current_user, "track", "update")
    track = store.update_track(track_id, update_data.model_dump(exclude_unset=True))
    logger.info(f"Track updated: {track_id}")
    return track

@router.get("/{track_id}/audio")
async def get_track_audio(
    track_id: int,
    store: BaseStorage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """Stream the stored audio of a track"""
    track = ensure_owner(store.get_track(track_id), current_user, "track")
    if not audio_service.file_exists(track.file_path):
        logger.warning(f"Audio file missing for track {track_id}: {track.file_path}")
        raise HTTPException(status_code=404, detail="Audio file not found")
    return FileResponse(track.file_path, media_type=audio_service.media_type_for(track.file_path))

@router.delete("/{track_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_track(
    track_id: int,
    store: BaseStorage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Delete a track, its playlist links and its audio file
    A file that cannot be removed is logged and otherwise ignored
    """
    track = ensure_owner(store.get_track(track_id), current_user, "track", "delete")
    track_service.delete_track(store, track)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
