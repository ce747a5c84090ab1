"""
Database models for the Expense Tracker API.

All SQLAlchemy models are imported here so metadata is complete on import.
"""

from expense_tracker.models.user import User
from expense_tracker.models.expense import Expense
from expense_tracker.models.category import Category

__all__ = [
    "User",
    "Expense",
    "Category",
]
