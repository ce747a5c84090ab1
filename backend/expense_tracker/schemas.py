from typing import Optional
from datetime import datetime, date, timezone
from decimal import Decimal
from pydantic import BaseModel, Field, EmailStr, field_validator

MAX_PASSWORD_BYTES = 72


def _to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


# --- Shared ---
class MessageResponse(BaseModel):
    message: str


# --- Auth ---
class UserRegister(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value):
        # bcrypt only accepts up to 72 bytes of input
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class UserLogin(BaseModel):
    username: str
    password: str


class UserSummary(BaseModel):
    id: int
    username: str

    class Config:
        from_attributes = True


class UserResponse(UserSummary):
    email: str


class RegisterResponse(BaseModel):
    message: str
    token: str
    user: UserResponse


class LoginResponse(BaseModel):
    message: str
    token: str
    user: UserSummary


# --- Category ---
class CategoryName(BaseModel):
    # Optional so a missing name surfaces as the domain error, not a schema error
    name: Optional[str] = Field(None, max_length=100)


class CategoryResponse(BaseModel):
    name: str

    class Config:
        from_attributes = True


# --- Expense ---
class ExpenseBase(BaseModel):
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    description: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=100)

    class Config:
        str_strip_whitespace = True


class ExpenseCreate(ExpenseBase):
    created_at: Optional[datetime] = None

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, value):
        return _to_naive_utc(value)


class ExpenseUpdate(BaseModel):
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    description: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    created_at: Optional[datetime] = None

    class Config:
        str_strip_whitespace = True

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, value):
        return _to_naive_utc(value)


class ExpenseResponse(ExpenseBase):
    id: int
    created_at: datetime

    class Config:
        from_attributes = True


# --- Reports ---
class DailySummary(BaseModel):
    day: date
    total_amount: Decimal


class CategorySummary(BaseModel):
    category: str
    total_amount: Decimal


class RangeSummary(BaseModel):
    start_date: date
    end_date: date
    total_amount: Decimal
    expense_count: int
    average_amount: Decimal
