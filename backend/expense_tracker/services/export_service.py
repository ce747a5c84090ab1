"""CSV export of expenses."""

import csv
import io
from datetime import date, datetime
from typing import Iterable

from expense_tracker.models.expense import Expense

CSV_HEADERS = ["date", "amount", "description", "category"]


def _serialize_value(value):
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    return str(value)


def export_filename(start_date: date, end_date: date) -> str:
    return f"expenses-{start_date.isoformat()}-to-{end_date.isoformat()}.csv"


def export_expenses_csv(expenses: Iterable[Expense]) -> str:
    """Render expenses as CSV text.

    Columns are deterministic: date, amount, description, category. Every
    field is quoted so descriptions may contain commas.
    """
    buffer = io.StringIO()
    writer = csv.DictWriter(
        buffer, fieldnames=CSV_HEADERS, quoting=csv.QUOTE_ALL, lineterminator="\n"
    )
    writer.writeheader()
    for expense in expenses:
        writer.writerow(
            {
                "date": _serialize_value(expense.created_at),
                "amount": _serialize_value(expense.amount),
                "description": _serialize_value(expense.description),
                "category": _serialize_value(expense.category),
            }
        )
    return buffer.getvalue()
