# ============================================================================
# FILE: vault/api/dependencies.py
# ============================================================================
from fastapi import Depends, HTTPException, status
from vault.config import settings
from vault.db.session import get_storage
from vault.db.storage import BaseStorage
from vault.schemas.user import User
from typing import Optional, TypeVar

T = TypeVar("T")

def require_current_user(
    store: BaseStorage = Depends(get_storage)
) -> User:
    """
    Resolve the caller for this request
    There are no sessions yet: every request acts as DEMO_USER_ID.
    Real authentication replaces this one dependency.
    """
    user = store.get_user(settings.DEMO_USER_ID)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user

def ensure_owner(resource: Optional[T], current_user: User, noun: str, action: str = "access") -> T:
    """
    404 if the resource is missing, 403 if the caller does not own it
    Returns the resource otherwise
    """
    if resource is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{noun.capitalize()} not found")
    if resource.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Not authorized to {action} this {noun}"
        )
    return resource
