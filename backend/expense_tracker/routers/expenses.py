"""
Expense API endpoints: CRUD, month and date-range listings, CSV export.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from expense_tracker.database import get_db
from expense_tracker.dependencies import get_current_user, get_date_range, DateRange
from expense_tracker.models.user import User
from expense_tracker.schemas import (
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseResponse,
    MessageResponse,
)
from expense_tracker.services.expense_service import expense_service
from expense_tracker.services.export_service import export_expenses_csv, export_filename

router = APIRouter()


@router.get("", response_model=List[ExpenseResponse])
async def list_expenses(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=1, le=9998),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List expenses for one month (defaults to the current month)."""
    now = datetime.utcnow()
    return expense_service.list_by_month(
        db, current_user.id, month or now.month, year or now.year
    )


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_in: ExpenseCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Record a new expense."""
    return expense_service.create_expense(db, current_user.id, expense_in)


# Fixed paths are registered before /{expense_id}
@router.get("/range", response_model=List[ExpenseResponse])
async def list_expenses_in_range(
    current_user: User = Depends(get_current_user),
    date_range: DateRange = Depends(get_date_range),
    db: Session = Depends(get_db),
):
    """List expenses dated within startDate..endDate, both days included."""
    return expense_service.list_in_range(
        db, current_user.id, date_range.start, date_range.end
    )


@router.get("/export")
async def export_expenses(
    current_user: User = Depends(get_current_user),
    date_range: DateRange = Depends(get_date_range),
    db: Session = Depends(get_db),
):
    """Download the range as a CSV attachment."""
    expenses = expense_service.list_in_range(
        db, current_user.id, date_range.start, date_range.end
    )
    filename = export_filename(date_range.start, date_range.end)
    return Response(
        content=export_expenses_csv(expenses),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    expense = expense_service.get_expense(db, current_user.id, expense_id)
    if not expense:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Expense not found or not authorized",
        )
    return expense


@router.put("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_id: int,
    expense_in: ExpenseUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update any subset of an expense's fields."""
    return expense_service.update_expense(db, current_user.id, expense_id, expense_in)


@router.delete("/{expense_id}", response_model=MessageResponse)
async def delete_expense(
    expense_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    expense_service.delete_expense(db, current_user.id, expense_id)
    return {"message": "Expense deleted successfully"}
