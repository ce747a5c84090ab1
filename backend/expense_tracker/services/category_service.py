"""
Category Service for user-defined expense categories.
"""

import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from expense_tracker.models.category import Category
from expense_tracker.services.expense_service import expense_service

logger = logging.getLogger(__name__)

# Always available to every user, never stored
DEFAULT_CATEGORIES = [
    "Groceries",
    "Food",
    "Rent",
    "Utilities",
    "Transportation",
    "Entertainment",
]


def _require_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Category name is required",
        )
    return name


class CategoryService:
    def list_names(self, db: Session, user_id: int, include_defaults: bool = False) -> List[str]:
        """User category names sorted; optionally preceded by the defaults."""
        rows = (
            db.query(Category.name)
            .filter(Category.user_id == user_id)
            .order_by(Category.name.asc())
            .all()
        )
        names = [name for (name,) in rows]
        if not include_defaults:
            return names
        return DEFAULT_CATEGORIES + [n for n in names if n not in DEFAULT_CATEGORIES]

    def add_category(self, db: Session, user_id: int, name: Optional[str]) -> Category:
        name = _require_name(name)
        category = Category(user_id=user_id, name=name)
        db.add(category)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Category already exists",
            )
        db.refresh(category)
        logger.info(f"Category '{name}' added for user {user_id}")
        return category

    def delete_category(self, db: Session, user_id: int, name: Optional[str]) -> None:
        name = _require_name(name)
        category = (
            db.query(Category)
            .filter(Category.user_id == user_id, Category.name == name)
            .first()
        )
        if not category:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Category not found or you do not have permission to delete it.",
            )
        if expense_service.category_in_use(db, user_id, name):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Category is in use by existing expenses",
            )
        db.delete(category)
        db.commit()
        logger.info(f"Category '{name}' deleted for user {user_id}")


category_service = CategoryService()
