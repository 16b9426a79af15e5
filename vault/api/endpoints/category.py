# ============================================================================
# FILE: vault/api/endpoints/category.py
# ============================================================================
from fastapi import APIRouter, Depends, Response, status
from typing import List
from vault.api.dependencies import ensure_owner, require_current_user
from vault.db.session import get_storage
from vault.db.storage import BaseStorage
from vault.schemas.category import Category, CategoryCreate, CategoryUpdate
from vault.schemas.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("", response_model=List[Category])
async def get_my_categories(
    store: BaseStorage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """Get all categories for the current user"""
    return store.get_categories(current_user.id)

@router.post("", response_model=Category, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    store: BaseStorage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    category = store.create_category(current_user.id, category_data)
    logger.info(f"Category created: {category.id} for user {current_user.id}")
    return category

@router.patch("/{category_id}", response_model=Category)
async def update_category(
    category_id: int,
    update_data: CategoryUpdate,
    store: BaseStorage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Update category details (name, icon, color)
    Requires ownership
    """
    ensure_owner(store.get_category(category_id), current_user, "category", "update")
    return store.update_category(category_id, update_data.model_dump(exclude_unset=True))

@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: int,
    store: BaseStorage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Delete a category
    Tracks in the category are kept
    """
    ensure_owner(store.get_category(category_id), current_user, "category", "delete")
    store.delete_category(category_id)
    logger.info(f"Category deleted: {category_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
