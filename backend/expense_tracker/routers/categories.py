"""
API endpoints for user-defined categories.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from expense_tracker.database import get_db
from expense_tracker.dependencies import get_current_user
from expense_tracker.models.user import User
from expense_tracker.schemas import CategoryName, CategoryResponse, MessageResponse
from expense_tracker.services.category_service import category_service

router = APIRouter()


@router.get("", response_model=List[str])
async def list_categories(
    include_defaults: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List the caller's category names, optionally with the default set."""
    return category_service.list_names(db, current_user.id, include_defaults)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def add_category(
    body: CategoryName,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Add a category for the caller."""
    return category_service.add_category(db, current_user.id, body.name)


@router.delete("", response_model=MessageResponse)
async def delete_category(
    body: CategoryName,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete one of the caller's categories by name."""
    category_service.delete_category(db, current_user.id, body.name)
    return {"message": "Category deleted successfully"}
