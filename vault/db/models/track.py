# ============================================================================
# FILE: vault/db/models/track.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from datetime import datetime
from vault.db.base import Base

class TrackRecord(Base):
    """Stored audio recording
    category_id carries no foreign key, so deleting a category leaves its tracks in place
    """
    __tablename__ = "tracks"
    __table_args__ = {"sqlite_autoincrement": True}
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category_id = Column(Integer, nullable=True, index=True)
    duration = Column(Integer, nullable=False)  # Duration in seconds
    file_path = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
