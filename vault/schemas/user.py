# ============================================================================
# FILE: vault/schemas/user.py
# ============================================================================
from pydantic import EmailStr, field_validator
from typing import Optional
from vault.schemas.base import CamelModel, reject_null

class UserCreate(CamelModel):
    """Schema for creating a user record"""
    username: str
    password: str
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    full_name: Optional[str] = None
    avatar_color: Optional[str] = None

class UserUpdate(CamelModel):
    """Schema for updating the profile (password is not editable here)"""
    username: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    full_name: Optional[str] = None
    avatar_color: Optional[str] = None
    
    @field_validator("username")
    @classmethod
    def username_not_null(cls, value):
        return reject_null(value)

class User(CamelModel):
    """Stored user record, including the password"""
    id: int
    username: str
    password: str
    email: Optional[str] = None
    phone: Optional[str] = None
    full_name: Optional[str] = None
    avatar_color: Optional[str] = None

class UserResponse(CamelModel):
    """Schema for user response"""
    id: int
    username: str
    email: Optional[str] = None
    phone: Optional[str] = None
    full_name: Optional[str] = None
    avatar_color: Optional[str] = None
