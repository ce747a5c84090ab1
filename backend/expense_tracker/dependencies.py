"""
Shared API dependencies.
"""

import logging
from datetime import date
from typing import NamedTuple, Optional

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session

from expense_tracker.config import settings
from expense_tracker.database import get_db
from expense_tracker.services.auth_service import auth_service
from expense_tracker.core import security
from expense_tracker.models.user import User

logger = logging.getLogger(__name__)

# auto_error is off so a missing header gets our own 401 body
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    db: Session = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> User:
    """
    Validate the bearer token and return the user it was issued for.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token, authorization denied",
            headers={"WWW-Authenticate": "Bearer"},
        )

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Token is not valid",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        user_id = security.decode_access_token(credentials.credentials)
    except JWTError as e:
        logger.info(f"Rejected token: {e}")
        raise credentials_exception

    user = auth_service.get_user_by_id(db, user_id=user_id)
    if user is None:
        raise credentials_exception

    return user


class DateRange(NamedTuple):
    start: date
    end: date

    @property
    def days(self) -> int:
        """Number of calendar days covered, both ends included."""
        return (self.end - self.start).days + 1


async def get_date_range(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
) -> DateRange:
    """
    Read the inclusive startDate/endDate query pair (YYYY-MM-DD).
    """
    if start_date is None or end_date is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="startDate and endDate are required",
        )
    if start_date > end_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="startDate must not be after endDate",
        )
    # The end day is matched up to the next midnight, which must exist
    if end_date >= date.max:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="endDate is out of range",
        )
    return DateRange(start_date, end_date)


async def get_report_range(
    date_range: DateRange = Depends(get_date_range),
) -> DateRange:
    """Date range for aggregate reports, capped at MAX_REPORT_RANGE_DAYS."""
    if date_range.days > settings.MAX_REPORT_RANGE_DAYS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Date range must not exceed {settings.MAX_REPORT_RANGE_DAYS} days",
        )
    return date_range
