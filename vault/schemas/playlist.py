# ============================================================================
# FILE: vault/schemas/playlist.py
# ============================================================================
from pydantic import Field, field_validator
from typing import Optional, List
from vault.schemas.base import CamelModel, reject_null
from vault.schemas.track import Track

class PlaylistCreate(CamelModel):
    """Schema for creating a playlist"""
    name: str = Field(..., min_length=1)
    color: str
    icon: str

class PlaylistUpdate(CamelModel):
    """Schema for updating a playlist"""
    name: Optional[str] = Field(None, min_length=1)
    color: Optional[str] = None
    icon: Optional[str] = None
    
    @field_validator("name", "color", "icon")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

class Playlist(CamelModel):
    """Schema for playlist response"""
    id: int
    name: str
    color: str
    icon: str
    user_id: int

class PlaylistTrackAdd(CamelModel):
    """Schema for adding a track to playlist"""
    track_id: int

class PlaylistTrackMove(CamelModel):
    """Schema for moving a track within a playlist"""
    position: int = Field(..., ge=0)

class PlaylistTrack(CamelModel):
    """Link between a playlist and one of its tracks"""
    id: int
    playlist_id: int
    track_id: int
    position: int

class PlaylistTrackEntry(Track):
    """A track as listed inside a playlist"""
    position: int

class PlaylistDetail(Playlist):
    """Playlist together with its ordered tracks"""
    tracks: List[PlaylistTrackEntry] = []
