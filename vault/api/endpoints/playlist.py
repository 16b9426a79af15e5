# ============================================================================
# FILE: vault/api/endpoints/playlist.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Response, status
from typing import List
from vault.api.dependencies import ensure_owner, require_current_user
from vault.core.exceptions import NotFoundError
from vault.db.session import get_storage
from vault.db.storage import BaseStorage
from vault.schemas.playlist import (
    Playlist,
    PlaylistCreate,
    PlaylistDetail,
    PlaylistTrack,
    PlaylistTrackAdd,
    PlaylistTrackEntry,
    PlaylistTrackMove,
    PlaylistUpdate
)
from vault.schemas.user import User
from vault.services.playlist_service import playlist_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("", response_model=List[Playlist])
async def get_my_playlists(
    store: BaseStorage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """Get all playlists for the current user"""
    return store.get_playlists(current_user.id)

@router.post("", response_model=Playlist, status_code=status.HTTP_201_CREATED)
async def create_playlist(
    playlist_data: PlaylistCreate,
    store: BaseStorage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """Create a new playlist"""
    playlist = store.create_playlist(current_user.id, playlist_data)
    logger.info(f"Playlist created: {playlist.id} for user {current_user.id}")
    return playlist

@router.get("/{playlist_id}", response_model=PlaylistDetail)
async def get_playlist(
    playlist_id: int,
    store: BaseStorage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Get a playlist with its tracks in playlist order
    Requires ownership
    """
    playlist = ensure_owner(store.get_playlist(playlist_id), current_user, "playlist")
    entries = playlist_service.list_ordered(store, playlist_id)
    return PlaylistDetail(
        **playlist.model_dump(),
        tracks=[
            PlaylistTrackEntry(**entry.track.model_dump(), position=entry.position)
            for entry in entries
        ]
    )

@router.patch("/{playlist_id}", response_model=Playlist)
async def update_playlist(
    playlist_id: int,
    update_data: PlaylistUpdate,
    store: BaseStorage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Update playlist details (name, color, icon)
    Requires ownership
    """
    ensure_owner(store.get_playlist(playlist_id), current_user, "playlist", "update")
    playlist = store.update_playlist(playlist_id, update_data.model_dump(exclude_unset=True))
    logger.info(f"Playlist updated: {playlist_id}")
    return playlist

@router.delete("/{playlist_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_playlist(
    playlist_id: int,
    store: BaseStorage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Delete a playlist and its track links
    Requires ownership
    """
    ensure_owner(store.get_playlist(playlist_id), current_user, "playlist", "delete")
    store.delete_playlist(playlist_id)
    logger.info(f"Playlist deleted: {playlist_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{playlist_id}/tracks", response_model=PlaylistTrack, status_code=status.HTTP_201_CREATED)
async def add_track_to_playlist(
    playlist_id: int,
    track_data: PlaylistTrackAdd,
    store: BaseStorage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Append a track to a playlist
    Adding a track twice returns the existing link
    """
    ensure_owner(store.get_playlist(playlist_id), current_user, "playlist", "modify")
    ensure_owner(store.get_track(track_data.track_id), current_user, "track")
    try:
        return playlist_service.add_track(store, playlist_id, track_data.track_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.patch("/{playlist_id}/tracks/{track_id}", response_model=PlaylistTrack)
async def move_track_in_playlist(
    playlist_id: int,
    track_id: int,
    move_data: PlaylistTrackMove,
    store: BaseStorage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Set the position of a track within a playlist
    Other tracks keep their positions
    """
    ensure_owner(store.get_playlist(playlist_id), current_user, "playlist", "modify")
    if not playlist_service.reposition_track(store, playlist_id, track_id, move_data.position):
        raise HTTPException(status_code=404, detail="Track not found in playlist")
    return store.get_playlist_track(playlist_id, track_id)

@router.delete("/{playlist_id}/tracks/{track_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_track_from_playlist(
    playlist_id: int,
    track_id: int,
    store: BaseStorage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """Remove a track from a playlist"""
    ensure_owner(store.get_playlist(playlist_id), current_user, "playlist", "modify")
    if not playlist_service.remove_track(store, playlist_id, track_id):
        raise HTTPException(status_code=404, detail="Track not found in playlist")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
