# ============================================================================
# FILE: vault/db/memory.py
# ============================================================================
from datetime import datetime
from itertools import count
from typing import Any, Dict, List, Optional
from vault.core.exceptions import DuplicateUsernameError
from vault.db.storage import BaseStorage, OrderedTrack
from vault.schemas.user import User, UserCreate
from vault.schemas.category import Category, CategoryCreate
from vault.schemas.playlist import Playlist, PlaylistCreate, PlaylistTrack
from vault.schemas.track import Track, TrackCreate
import logging

logger = logging.getLogger(__name__)

class MemoryStorage(BaseStorage):
    """Process-local storage: one dict per entity type, nothing survives a restart"""
    
    def __init__(self):
        self.users: Dict[int, User] = {}
        self.categories: Dict[int, Category] = {}
        self.playlists: Dict[int, Playlist] = {}
        self.tracks: Dict[int, Track] = {}
        self.playlist_tracks: Dict[int, PlaylistTrack] = {}
        
        self._user_ids = count(1)
        self._category_ids = count(1)
        self._playlist_ids = count(1)
        self._track_ids = count(1)
        self._playlist_track_ids = count(1)
    
    # User methods
    def get_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)
    
    def get_user_by_username(self, username: str) -> Optional[User]:
        for user in self.users.values():
            if user.username == username:
                return user
        return None
    
    def create_user(self, user_data: UserCreate) -> User:
        if self.get_user_by_username(user_data.username):
            raise DuplicateUsernameError(user_data.username)
        user = User(id=next(self._user_ids), **user_data.model_dump())
        self.users[user.id] = user
        return user
    
    def update_user(self, user_id: int, updates: Dict[str, Any]) -> Optional[User]:
        user = self.users.get(user_id)
        if not user:
            return None
        
        username = updates.get("username")
        if username is not None and username != user.username:
            if self.get_user_by_username(username):
                raise DuplicateUsernameError(username)
        
        updated = user.model_copy(update=_without_id(updates))
        self.users[user_id] = updated
        return updated
    
    # Category methods
    def get_categories(self, user_id: int) -> List[Category]:
        return [c for c in self.categories.values() if c.user_id == user_id]
    
    def get_category(self, category_id: int) -> Optional[Category]:
        return self.categories.get(category_id)
    
    def create_category(self, user_id: int, category_data: CategoryCreate) -> Category:
        category = Category(id=next(self._category_ids), user_id=user_id, **category_data.model_dump())
        self.categories[category.id] = category
        return category
    
    def update_category(self, category_id: int, updates: Dict[str, Any]) -> Optional[Category]:
        category = self.categories.get(category_id)
        if not category:
            return None
        updated = category.model_copy(update=_without_id(updates))
        self.categories[category_id] = updated
        return updated
    
    def delete_category(self, category_id: int) -> bool:
        return self.categories.pop(category_id, None) is not None
    
    # Playlist methods
    def get_playlists(self, user_id: int) -> List[Playlist]:
        return [p for p in self.playlists.values() if p.user_id == user_id]
    
    def get_playlist(self, playlist_id: int) -> Optional[Playlist]:
        return self.playlists.get(playlist_id)
    
    def create_playlist(self, user_id: int, playlist_data: PlaylistCreate) -> Playlist:
        playlist = Playlist(id=next(self._playlist_ids), user_id=user_id, **playlist_data.model_dump())
        self.playlists[playlist.id] = playlist
        return playlist
    
    def update_playlist(self, playlist_id: int, updates: Dict[str, Any]) -> Optional[Playlist]:
        playlist = self.playlists.get(playlist_id)
        if not playlist:
            return None
        updated = playlist.model_copy(update=_without_id(updates))
        self.playlists[playlist_id] = updated
        return updated
    
    def delete_playlist(self, playlist_id: int) -> bool:
        stale = [link.id for link in self.playlist_tracks.values() if link.playlist_id == playlist_id]
        for link_id in stale:
            del self.playlist_tracks[link_id]
        return self.playlists.pop(playlist_id, None) is not None
    
    # Track methods
    def get_tracks(self, user_id: int) -> List[Track]:
        return [t for t in self.tracks.values() if t.user_id == user_id]
    
    def get_track(self, track_id: int) -> Optional[Track]:
        return self.tracks.get(track_id)
    
    def get_tracks_by_category(self, category_id: int) -> List[Track]:
        return [t for t in self.tracks.values() if t.category_id == category_id]
    
    def create_track(self, user_id: int, track_data: TrackCreate, file_path: str) -> Track:
        track = Track(
            id=next(self._track_ids),
            user_id=user_id,
            file_path=file_path,
            created_at=datetime.utcnow(),
            **track_data.model_dump()
        )
        self.tracks[track.id] = track
        return track
    
    def update_track(self, track_id: int, updates: Dict[str, Any]) -> Optional[Track]:
        track = self.tracks.get(track_id)
        if not track:
            return None
        # created_at is fixed at creation
        fields = {k: v for k, v in _without_id(updates).items() if k != "created_at"}
        updated = track.model_copy(update=fields)
        self.tracks[track_id] = updated
        return updated
    
    def delete_track(self, track_id: int) -> bool:
        stale = [link.id for link in self.playlist_tracks.values() if link.track_id == track_id]
        for link_id in stale:
            del self.playlist_tracks[link_id]
        return self.tracks.pop(track_id, None) is not None
    
    # Playlist track methods
    def get_playlist_tracks(self, playlist_id: int) -> List[OrderedTrack]:
        entries = []
        for link in self.playlist_tracks.values():
            if link.playlist_id != playlist_id:
                continue
            track = self.tracks.get(link.track_id)
            if track is None:
                logger.warning(f"Playlist {playlist_id} links missing track {link.track_id}")
                continue
            entries.append(OrderedTrack(track=track, position=link.position))
        # dicts keep insertion order, so equal positions stay in link id order
        return sorted(entries, key=lambda entry: entry.position)
    
    def get_playlist_track(self, playlist_id: int, track_id: int) -> Optional[PlaylistTrack]:
        for link in self.playlist_tracks.values():
            if link.playlist_id == playlist_id and link.track_id == track_id:
                return link
        return None
    
    def add_playlist_track(self, playlist_id: int, track_id: int, position: int) -> PlaylistTrack:
        existing = self.get_playlist_track(playlist_id, track_id)
        if existing:
            return existing
        link = PlaylistTrack(
            id=next(self._playlist_track_ids),
            playlist_id=playlist_id,
            track_id=track_id,
            position=position
        )
        self.playlist_tracks[link.id] = link
        return link
    
    def remove_playlist_track(self, playlist_id: int, track_id: int) -> bool:
        link = self.get_playlist_track(playlist_id, track_id)
        if not link:
            return False
        del self.playlist_tracks[link.id]
        return True
    
    def update_track_position(self, playlist_id: int, track_id: int, position: int) -> bool:
        link = self.get_playlist_track(playlist_id, track_id)
        if not link:
            return False
        self.playlist_tracks[link.id] = link.model_copy(update={"position": position})
        return True

def _without_id(updates: Dict[str, Any]) -> Dict[str, Any]:
    """Ids are immutable, drop them from any partial update"""
    return {k: v for k, v in updates.items() if k != "id"}
