"""
Create a demo user with a few weeks of sample expenses.

Usage: python scripts/seed_demo.py [--username demo] [--password demo1234] [--days 30]
"""

import argparse
import logging
import os
import random
import sys
from datetime import datetime, timedelta
from decimal import Decimal

sys.path.append(os.path.join(os.path.dirname(__file__), "..", "backend"))

from expense_tracker.database import init_db, get_db_context
from expense_tracker.models.expense import Expense
from expense_tracker.services.auth_service import auth_service
from expense_tracker.services.category_service import DEFAULT_CATEGORIES, category_service

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SAMPLE_DESCRIPTIONS = {
    "Groceries": ["Weekly shop", "Farmers market", "Milk and bread"],
    "Food": ["Lunch", "Coffee", "Takeaway dinner"],
    "Rent": ["Monthly rent"],
    "Utilities": ["Electricity bill", "Water bill", "Internet"],
    "Transportation": ["Bus pass", "Fuel", "Taxi"],
    "Entertainment": ["Cinema", "Concert tickets", "Streaming subscription"],
    "Hobbies": ["Paint supplies", "Climbing gym"],
}


def seed_demo(username: str, password: str, days: int, seed: int = 42) -> None:
    rng = random.Random(seed)
    init_db()

    with get_db_context() as db:
        user = auth_service.get_user_by_username(db, username)
        if user:
            logger.info(f"Demo user '{username}' already exists (id={user.id}), skipping")
            return

        user = auth_service.create_user(
            db, username=username, email=f"{username}@example.com", password=password
        )
        category_service.add_category(db, user.id, "Hobbies")

        categories = DEFAULT_CATEGORIES + ["Hobbies"]
        today = datetime.utcnow().replace(hour=12, minute=0, second=0, microsecond=0)
        count = 0
        for offset in range(days):
            for _ in range(rng.randint(0, 3)):
                category = rng.choice(categories)
                db.add(
                    Expense(
                        user_id=user.id,
                        amount=Decimal(rng.randint(150, 12000)) / 100,
                        description=rng.choice(SAMPLE_DESCRIPTIONS[category]),
                        category=category,
                        created_at=today - timedelta(days=offset, minutes=rng.randint(0, 600)),
                    )
                )
                count += 1
        db.commit()
        logger.info(f"Created demo user '{username}' (id={user.id}) with {count} expenses")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed a demo user with sample expenses")
    parser.add_argument("--username", default="demo")
    parser.add_argument("--password", default="demo1234")
    parser.add_argument("--days", type=int, default=30)
    args = parser.parse_args()
    seed_demo(args.username, args.password, args.days)
