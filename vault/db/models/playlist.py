# ============================================================================
# FILE: vault/db/models/playlist.py
# ============================================================================
from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from vault.db.base import Base

class PlaylistRecord(Base):
    """Playlist model for user-created playlists"""
    __tablename__ = "playlists"
    __table_args__ = {"sqlite_autoincrement": True}
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    color = Column(String, nullable=False)
    icon = Column(String, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

class PlaylistTrackRecord(Base):
    """Junction table for playlist tracks"""
    __tablename__ = "playlist_tracks"
    __table_args__ = (
        UniqueConstraint("playlist_id", "track_id", name="uq_playlist_track"),
        {"sqlite_autoincrement": True},
    )
    
    id = Column(Integer, primary_key=True, index=True)
    playlist_id = Column(Integer, ForeignKey("playlists.id"), nullable=False, index=True)
    track_id = Column(Integer, ForeignKey("tracks.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
