# ============================================================================
# FILE: vault/db/storage.py
# Storage contract shared by the in-memory and SQL backends
# ============================================================================
from abc import ABC, abstractmethod
from typing import Any, Dict, List, NamedTuple, Optional
from vault.schemas.user import User, UserCreate
from vault.schemas.category import Category, CategoryCreate
from vault.schemas.playlist import Playlist, PlaylistCreate, PlaylistTrack
from vault.schemas.track import Track, TrackCreate

class OrderedTrack(NamedTuple):
    """A playlist's track together with its position"""
    track: Track
    position: int

class BaseStorage(ABC):
    """
    CRUD over users, categories, playlists, tracks and playlist links.
    
    Lookups, updates and deletes never raise for unknown ids: they return
    None / False and leave the status-code mapping to the caller. Ids are
    assigned sequentially per entity type and never reused.
    """
    
    # Users
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...
    
    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...
    
    @abstractmethod
    def create_user(self, user_data: UserCreate) -> User:
        """Raises DuplicateUsernameError if the username is taken"""
    
    @abstractmethod
    def update_user(self, user_id: int, updates: Dict[str, Any]) -> Optional[User]:
        """Raises DuplicateUsernameError when renaming onto a taken username"""
    
    # Categories
    @abstractmethod
    def get_categories(self, user_id: int) -> List[Category]: ...
    
    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]: ...
    
    @abstractmethod
    def create_category(self, user_id: int, category_data: CategoryCreate) -> Category: ...
    
    @abstractmethod
    def update_category(self, category_id: int, updates: Dict[str, Any]) -> Optional[Category]: ...
    
    @abstractmethod
    def delete_category(self, category_id: int) -> bool:
        """Tracks keep their category_id; there is no cascade"""
    
    # Playlists
    @abstractmethod
    def get_playlists(self, user_id: int) -> List[Playlist]: ...
    
    @abstractmethod
    def get_playlist(self, playlist_id: int) -> Optional[Playlist]: ...
    
    @abstractmethod
    def create_playlist(self, user_id: int, playlist_data: PlaylistCreate) -> Playlist: ...
    
    @abstractmethod
    def update_playlist(self, playlist_id: int, updates: Dict[str, Any]) -> Optional[Playlist]: ...
    
    @abstractmethod
    def delete_playlist(self, playlist_id: int) -> bool:
        """Removes the playlist's links first, then the playlist"""
    
    # Tracks
    @abstractmethod
    def get_tracks(self, user_id: int) -> List[Track]: ...
    
    @abstractmethod
    def get_track(self, track_id: int) -> Optional[Track]: ...
    
    @abstractmethod
    def get_tracks_by_category(self, category_id: int) -> List[Track]: ...
    
    @abstractmethod
    def create_track(self, user_id: int, track_data: TrackCreate, file_path: str) -> Track:
        """Stamps created_at with the current UTC time"""
    
    @abstractmethod
    def update_track(self, track_id: int, updates: Dict[str, Any]) -> Optional[Track]: ...
    
    @abstractmethod
    def delete_track(self, track_id: int) -> bool:
        """Removes every playlist link to the track first, then the track"""
    
    # Playlist tracks
    @abstractmethod
    def get_playlist_tracks(self, playlist_id: int) -> List[OrderedTrack]:
        """Links of a playlist sorted by position (ties by link id)"""
    
    @abstractmethod
    def get_playlist_track(self, playlist_id: int, track_id: int) -> Optional[PlaylistTrack]: ...
    
    @abstractmethod
    def add_playlist_track(self, playlist_id: int, track_id: int, position: int) -> PlaylistTrack:
        """Returns the existing link unchanged if the pair is already linked"""
    
    @abstractmethod
    def remove_playlist_track(self, playlist_id: int, track_id: int) -> bool: ...
    
    @abstractmethod
    def update_track_position(self, playlist_id: int, track_id: int, position: int) -> bool:
        """Overwrites one link's position; other links are left untouched"""
