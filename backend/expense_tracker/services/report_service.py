"""
Report Service: aggregate spending over a date range.

Each public method is one named aggregation executed in SQL, taking the
owner id and an inclusive date range.
"""

import logging
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from expense_tracker.models.expense import Expense
from expense_tracker.services.expense_service import day_bounds

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def to_money(value: Any) -> Decimal:
    """Normalize a driver sum (None, float, int or Decimal) to 2 places."""
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _as_date(value: Any) -> date:
    # SQLite's date() yields 'YYYY-MM-DD' text; PostgreSQL yields a date
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


class ReportService:
    def _in_range(self, query, user_id: int, start_date: date, end_date: date):
        lower, upper = day_bounds(start_date, end_date)
        return query.filter(
            Expense.user_id == user_id,
            Expense.created_at >= lower,
            Expense.created_at < upper,
        )

    def get_daily_summary(
        self, db: Session, user_id: int, start_date: date, end_date: date
    ) -> List[Dict[str, Any]]:
        """
        Daily spending totals, one row per calendar day of the range.

        Days without expenses are reported as zero so the series is continuous.
        """
        day = func.date(Expense.created_at).label("day")
        query = db.query(day, func.sum(Expense.amount).label("total"))
        results = (
            self._in_range(query, user_id, start_date, end_date)
            .group_by(day)
            .all()
        )

        totals = {_as_date(d): to_money(total) for d, total in results}

        summary = []
        current = start_date
        while current <= end_date:
            summary.append(
                {"day": current, "total_amount": totals.get(current, Decimal("0.00"))}
            )
            current += timedelta(days=1)
        return summary

    def get_category_summary(
        self, db: Session, user_id: int, start_date: date, end_date: date
    ) -> List[Dict[str, Any]]:
        """Spending per category, largest first."""
        total = func.sum(Expense.amount).label("total")
        query = db.query(Expense.category, total)
        results = (
            self._in_range(query, user_id, start_date, end_date)
            .group_by(Expense.category)
            .order_by(total.desc(), Expense.category.asc())
            .all()
        )
        return [
            {"category": category, "total_amount": to_money(amount)}
            for category, amount in results
        ]

    def get_range_summary(
        self, db: Session, user_id: int, start_date: date, end_date: date
    ) -> Dict[str, Any]:
        """Total, count and average expense for the range."""
        query = db.query(func.sum(Expense.amount), func.count(Expense.id))
        total, count = self._in_range(query, user_id, start_date, end_date).one()

        total = to_money(total)
        average = to_money(total / count) if count else Decimal("0.00")

        return {
            "start_date": start_date,
            "end_date": end_date,
            "total_amount": total,
            "expense_count": count,
            "average_amount": average,
        }


report_service = ReportService()
