"""
Authentication Service.
"""

import logging
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from expense_tracker.core import security
from expense_tracker.models.user import User

logger = logging.getLogger(__name__)

DUPLICATE_USER_MESSAGE = "Username or email already exists"


class AuthService:
    def authenticate_user(
        self, db: Session, username: str, password: str
    ) -> Optional[User]:
        """Authenticate a user by username and password."""
        user = self.get_user_by_username(db, username)
        if not user:
            return None
        if not security.verify_password(password, user.hashed_password):
            return None
        return user

    def get_user_by_id(self, db: Session, user_id: int) -> Optional[User]:
        """Get a user by id."""
        return db.query(User).filter(User.id == user_id).first()

    def get_user_by_username(self, db: Session, username: str) -> Optional[User]:
        """Get a user by username."""
        return db.query(User).filter(User.username == username).first()

    def find_conflicting_user(self, db: Session, username: str, email: str) -> Optional[User]:
        """Get a user that already holds the username or the email."""
        return (
            db.query(User)
            .filter(or_(User.username == username, User.email == email))
            .first()
        )

    def create_user(self, db: Session, username: str, email: str, password: str) -> User:
        """Create a new user; 409 if the username or email is taken."""
        if self.find_conflicting_user(db, username, email):
            logger.info(f"Registration rejected, duplicate username/email: {username}")
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_USER_MESSAGE
            )

        db_user = User(
            username=username,
            email=email,
            hashed_password=security.get_password_hash(password),
        )
        db.add(db_user)
        try:
            db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration
            db.rollback()
            logger.info(f"Registration rejected by unique constraint: {username}")
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_USER_MESSAGE
            )
        db.refresh(db_user)
        logger.info(f"User registered: id={db_user.id} username={db_user.username}")
        return db_user

    def create_user_token(self, user: User) -> str:
        """Create access token for user."""
        return security.create_access_token(data={"user_id": user.id})


auth_service = AuthService()
