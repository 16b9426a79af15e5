# ============================================================================
# FILE: vault/services/playlist_service.py
# ============================================================================
from typing import List
from vault.core.exceptions import NotFoundError
from vault.db.storage import BaseStorage, OrderedTrack
from vault.schemas.playlist import PlaylistTrack
import logging

logger = logging.getLogger(__name__)

class PlaylistService:
    """Keeps the per-playlist order of tracks"""
    
    def list_ordered(self, store: BaseStorage, playlist_id: int) -> List[OrderedTrack]:
        """Tracks of a playlist, ascending by position"""
        return store.get_playlist_tracks(playlist_id)
    
    def add_track(self, store: BaseStorage, playlist_id: int, track_id: int) -> PlaylistTrack:
        """
        Append a track to a playlist
        
        Adding a track that is already linked returns the existing link
        without moving it. New links go after the current highest position,
        or at 0 for an empty playlist.
        
        Raises:
            NotFoundError: playlist or track does not exist
        """
        if not store.get_playlist(playlist_id):
            raise NotFoundError(f"Playlist not found: {playlist_id}")
        if not store.get_track(track_id):
            raise NotFoundError(f"Track not found: {track_id}")
        
        existing = store.get_playlist_track(playlist_id, track_id)
        if existing:
            logger.info(f"Track already in playlist {playlist_id}: {track_id}")
            return existing
        
        entries = store.get_playlist_tracks(playlist_id)
        position = max((entry.position for entry in entries), default=-1) + 1
        
        link = store.add_playlist_track(playlist_id, track_id, position)
        logger.info(f"Track added to playlist {playlist_id}: {track_id} at {link.position}")
        return link
    
    def remove_track(self, store: BaseStorage, playlist_id: int, track_id: int) -> bool:
        """Remove a track from a playlist"""
        removed = store.remove_playlist_track(playlist_id, track_id)
        if removed:
            logger.info(f"Track removed from playlist {playlist_id}: {track_id}")
        return removed
    
    def reposition_track(self, store: BaseStorage, playlist_id: int, track_id: int, position: int) -> bool:
        # Other links keep their positions; gaps and collisions are allowed
        moved = store.update_track_position(playlist_id, track_id, position)
        if moved:
            logger.info(f"Track {track_id} in playlist {playlist_id} moved to {position}")
        return moved

# Create singleton instance
playlist_service = PlaylistService()
