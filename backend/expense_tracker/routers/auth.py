"""
Authentication API endpoints.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session

from expense_tracker.database import get_db
from expense_tracker.services.auth_service import auth_service
from expense_tracker.models.user import User
from expense_tracker.config import settings
from expense_tracker.core.rate_limit import limiter
from expense_tracker.schemas import (
    UserRegister,
    UserLogin,
    UserResponse,
    RegisterResponse,
    LoginResponse,
)
from expense_tracker.dependencies import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED
)
async def register(user_in: UserRegister, db: Session = Depends(get_db)) -> Any:
    """
    Register a new user and log them in straight away.
    """
    user = auth_service.create_user(
        db=db,
        username=user_in.username,
        email=user_in.email,
        password=user_in.password,
    )
    return {
        "message": "User registered successfully",
        "token": auth_service.create_user_token(user),
        "user": {"id": user.id, "username": user.username, "email": user.email},
    }


@router.post("/login", response_model=LoginResponse)
@limiter.limit(lambda: settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    credentials: UserLogin,
    db: Session = Depends(get_db),
) -> Any:
    """
    Exchange username and password for a bearer token.
    """
    user = auth_service.authenticate_user(
        db, username=credentials.username, password=credentials.password
    )
    if not user:
        logger.info(f"Failed login for username: {credentials.username}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid username or password",
        )
    logger.info(f"User {user.id} logged in")
    return {
        "message": "Logged in successfully",
        "token": auth_service.create_user_token(user),
        "user": {"id": user.id, "username": user.username},
    }


@router.get("/me", response_model=UserResponse)
async def read_users_me(
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Get current user.
    """
    return current_user
