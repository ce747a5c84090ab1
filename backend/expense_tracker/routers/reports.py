"""
API endpoints for spending reports over a date range.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from expense_tracker.database import get_db
from expense_tracker.dependencies import get_current_user, get_report_range, DateRange
from expense_tracker.schemas import DailySummary, CategorySummary, RangeSummary
from expense_tracker.services.report_service import report_service

router = APIRouter()


@router.get("/range-daily-summary", response_model=List[DailySummary])
async def get_range_daily_summary(
    current_user=Depends(get_current_user),
    date_range: DateRange = Depends(get_report_range),
    db: Session = Depends(get_db),
):
    """Get daily spending trend."""
    return report_service.get_daily_summary(
        db, current_user.id, date_range.start, date_range.end
    )


@router.get("/range-category-summary", response_model=List[CategorySummary])
async def get_range_category_summary(
    current_user=Depends(get_current_user),
    date_range: DateRange = Depends(get_report_range),
    db: Session = Depends(get_db),
):
    """Get spending breakdown by category."""
    return report_service.get_category_summary(
        db, current_user.id, date_range.start, date_range.end
    )


@router.get("/range-summary", response_model=RangeSummary)
async def get_range_summary(
    current_user=Depends(get_current_user),
    date_range: DateRange = Depends(get_report_range),
    db: Session = Depends(get_db),
):
    """Get high-level spending summary."""
    return report_service.get_range_summary(
        db, current_user.id, date_range.start, date_range.end
    )
