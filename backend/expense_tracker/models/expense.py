"""
Expense database model.
"""

from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, DateTime, Index
from sqlalchemy.orm import relationship
from datetime import datetime

from expense_tracker.database import Base


class Expense(Base):
    """A single recorded expense owned by one user."""

    __tablename__ = "expenses"
    __table_args__ = (
        Index("idx_expense_user_date", "user_id", "created_at"),
        Index("idx_expense_user_category", "user_id", "category"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)  # Category name, not an FK
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)  # Transaction date and sort key

    # Relationships
    user = relationship("User", back_populates="expenses")

    def __repr__(self):
        return f"<Expense(id={self.id}, user_id={self.user_id}, amount={self.amount})>"
