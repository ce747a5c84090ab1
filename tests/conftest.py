"""
pytest configuration - shared fixtures
"""
import sys
import os
from datetime import datetime
from decimal import Decimal
from typing import Generator

# Settings are read at import time; configure before importing the app
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOGIN_RATE_LIMIT"] = "1000/minute"

# Add backend directory to sys.path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../backend"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from expense_tracker.database import Base, get_db, enable_sqlite_foreign_keys
from expense_tracker.models import User, Expense, Category
from expense_tracker.core import security
from expense_tracker.main import app


@pytest.fixture
def test_db() -> Generator[Session, None, None]:
    """Create in-memory SQLite database for testing"""
    # StaticPool keeps one connection so the TestClient thread sees the same database
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, autoflush=False)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture
def db_session(test_db):
    """Alias for test_db for clarity"""
    return test_db


@pytest.fixture
def client(test_db) -> Generator[TestClient, None, None]:
    """API client whose requests run against the test database"""
    def _get_db():
        yield test_db

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def register_user(client):
    """Register a user through the API and return the response body"""
    def _register(username="alice", password="secret123", email=None):
        response = client.post(
            "/api/register",
            json={
                "username": username,
                "email": email or f"{username}@example.com",
                "password": password,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def auth_headers(register_user):
    """Register a user and return Authorization headers for them"""
    def _headers(username="alice"):
        token = register_user(username)["token"]
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def make_user(test_db):
    """Insert a user row directly, bypassing the API"""
    def _make(username="bob"):
        user = User(
            username=username,
            email=f"{username}@example.com",
            hashed_password=security.get_password_hash("secret123"),
        )
        test_db.add(user)
        test_db.commit()
        test_db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_expense(test_db):
    """Insert an expense row directly"""
    def _make(user_id, amount, created_at, category="Food", description="Lunch"):
        expense = Expense(
            user_id=user_id,
            amount=Decimal(str(amount)),
            description=description,
            category=category,
            created_at=created_at,
        )
        test_db.add(expense)
        test_db.commit()
        test_db.refresh(expense)
        return expense

    return _make


@pytest.fixture
def populated_db(test_db, make_user, make_expense):
    """Two users; alice has a handful of May 2024 expenses, bob has one"""
    alice = make_user("alice")
    bob = make_user("bob")
    test_db.add(Category(user_id=alice.id, name="Hobbies"))
    test_db.commit()

    make_expense(alice.id, "12.50", datetime(2024, 5, 1, 9, 0), "Food", "Breakfast")
    make_expense(alice.id, "7.25", datetime(2024, 5, 1, 19, 30), "Food", "Dinner")
    make_expense(alice.id, "900.00", datetime(2024, 5, 3, 8, 0), "Rent", "May rent")
    make_expense(alice.id, "45.00", datetime(2024, 5, 31, 23, 59, 59), "Hobbies", "Paints")
    make_expense(alice.id, "3.00", datetime(2024, 6, 1, 0, 0), "Food", "Coffee")
    make_expense(bob.id, "99.99", datetime(2024, 5, 2, 12, 0), "Food", "Bob's lunch")

    return {"session": test_db, "alice": alice, "bob": bob}
