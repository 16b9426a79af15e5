# ============================================================================
# FILE: vault/api/endpoints/user.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, status
from vault.api.dependencies import require_current_user
from vault.core.exceptions import DuplicateUsernameError
from vault.db.session import get_storage
from vault.db.storage import BaseStorage
from vault.schemas.user import User, UserResponse, UserUpdate
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(require_current_user)
):
    """
    Get current user information
    The password is never part of the response
    """
    return current_user

@router.patch("/me", response_model=UserResponse)
async def update_current_user(
    update_data: UserUpdate,
    store: BaseStorage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Update profile fields (username, email, phone, fullName, avatarColor)
    """
    try:
        user = store.update_user(current_user.id, update_data.model_dump(exclude_unset=True))
    except DuplicateUsernameError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already registered"
        )
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    logger.info(f"User updated: {user.id}")
    return user
