"""
Expense Service: owner-scoped CRUD and date-window listings.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from expense_tracker.models.expense import Expense
from expense_tracker.schemas import ExpenseCreate, ExpenseUpdate

logger = logging.getLogger(__name__)


def day_bounds(start_date: date, end_date: date) -> Tuple[datetime, datetime]:
    """
    Half-open timestamp window [start 00:00, day after end 00:00).

    Covers every moment of both boundary days.
    """
    lower = datetime.combine(start_date, time.min)
    upper = datetime.combine(end_date + timedelta(days=1), time.min)
    return lower, upper


def month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    lower = datetime(year, month, 1)
    if month == 12:
        upper = datetime(year + 1, 1, 1)
    else:
        upper = datetime(year, month + 1, 1)
    return lower, upper


class ExpenseService:
    def _owned(self, db: Session, user_id: int):
        return db.query(Expense).filter(Expense.user_id == user_id)

    def _between(self, db: Session, user_id: int, lower: datetime, upper: datetime) -> List[Expense]:
        return (
            self._owned(db, user_id)
            .filter(Expense.created_at >= lower, Expense.created_at < upper)
            .order_by(Expense.created_at.desc(), Expense.id.desc())
            .all()
        )

    def list_by_month(self, db: Session, user_id: int, month: int, year: int) -> List[Expense]:
        """Expenses in one calendar month, newest first."""
        lower, upper = month_bounds(year, month)
        return self._between(db, user_id, lower, upper)

    def list_in_range(self, db: Session, user_id: int, start_date: date, end_date: date) -> List[Expense]:
        """Expenses dated within [start_date, end_date] inclusive, newest first."""
        lower, upper = day_bounds(start_date, end_date)
        return self._between(db, user_id, lower, upper)

    def get_expense(self, db: Session, user_id: int, expense_id: int) -> Optional[Expense]:
        return self._owned(db, user_id).filter(Expense.id == expense_id).first()

    def create_expense(self, db: Session, user_id: int, expense_in: ExpenseCreate) -> Expense:
        expense = Expense(
            user_id=user_id,
            amount=expense_in.amount,
            description=expense_in.description,
            category=expense_in.category,
            created_at=expense_in.created_at or datetime.utcnow(),
        )
        db.add(expense)
        db.commit()
        db.refresh(expense)
        logger.info(f"Expense {expense.id} created for user {user_id}")
        return expense

    def update_expense(
        self, db: Session, user_id: int, expense_id: int, expense_in: ExpenseUpdate
    ) -> Expense:
        expense = self.get_expense(db, user_id, expense_id)
        if not expense:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Expense not found or you do not have permission to edit it.",
            )

        changes = expense_in.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if value is None:
                # Explicit nulls would violate NOT NULL columns
                continue
            setattr(expense, field, value)

        db.commit()
        db.refresh(expense)
        logger.info(f"Expense {expense.id} updated for user {user_id}: {sorted(changes)}")
        return expense

    def delete_expense(self, db: Session, user_id: int, expense_id: int) -> None:
        expense = self.get_expense(db, user_id, expense_id)
        if not expense:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Expense not found or not authorized",
            )
        db.delete(expense)
        db.commit()
        logger.info(f"Expense {expense_id} deleted for user {user_id}")

    def category_in_use(self, db: Session, user_id: int, category: str) -> bool:
        return (
            self._owned(db, user_id).filter(Expense.category == category).first()
            is not None
        )


expense_service = ExpenseService()
