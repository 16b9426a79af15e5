# ============================================================================
# FILE: vault/schemas/category.py
# ============================================================================
from pydantic import Field, field_validator
from typing import Optional
from vault.schemas.base import CamelModel, reject_null

class CategoryCreate(CamelModel):
    """Schema for creating a category"""
    name: str = Field(..., min_length=1)
    icon: str
    color: str

class CategoryUpdate(CamelModel):
    """Schema for updating a category"""
    name: Optional[str] = Field(None, min_length=1)
    icon: Optional[str] = None
    color: Optional[str] = None
    
    @field_validator("name", "icon", "color")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

class Category(CamelModel):
    """Schema for category response"""
    id: int
    name: str
    icon: str
    color: str
    user_id: int
