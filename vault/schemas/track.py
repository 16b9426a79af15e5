# ============================================================================
# FILE: vault/schemas/track.py
# ============================================================================
from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime
from vault.schemas.base import CamelModel, reject_null

class TrackCreate(CamelModel):
    """Metadata sent alongside an uploaded recording"""
    name: str = Field(..., min_length=1)
    duration: int = Field(..., ge=0)  # Duration in seconds
    category_id: Optional[int] = None

class TrackUpdate(CamelModel):
    """Schema for updating a track"""
    name: Optional[str] = Field(None, min_length=1)
    duration: Optional[int] = Field(None, ge=0)
    category_id: Optional[int] = None
    
    @field_validator("name", "duration")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

class Track(CamelModel):
    """Schema for track response"""
    id: int
    name: str
    user_id: int
    category_id: Optional[int] = None
    duration: int
    file_path: str
    created_at: datetime
