# findata/schemas/transaction.py
import math
from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Numeric(12, 2): ten integer digits
MAX_AMOUNT = 10 ** 10


class TransactionType(str, Enum):
    income = "income"
    expense = "expense"


def _reject_bool(value):
    # JSON true/false would otherwise be read as 1.0/0.0
    if isinstance(value, bool):
        raise ValueError("amount must be a number")
    return value


def _clean_amount(value: Optional[float]) -> float:
    if value is None or not math.isfinite(value):
        raise ValueError("amount must be a finite number")
    value = round(value, 2)
    if value <= 0:
        raise ValueError("amount must be greater than zero")
    if value >= MAX_AMOUNT:
        raise ValueError(f"amount must be lower than {MAX_AMOUNT}")
    return value


def _blank_to_none(value):
    # Query strings send "no filter" as an empty value
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _clean_text(value: Optional[str], max_length: int) -> str:
    if value is None:
        raise ValueError("value is required")
    value = value.strip()
    if not value:
        raise ValueError("value is blank")
    if len(value) > max_length:
        raise ValueError(f"value longer than {max_length} characters")
    return value


# Field order is validation order: the first failing field is reported
class TransactionCreate(BaseModel):
    type: TransactionType
    amount: float
    description: str = Field(..., description="E.g. Venda para cliente X")
    category: str
    transaction_date: date = Field(..., description="ISO 8601 calendar date")

    @field_validator("amount", mode="before")
    @classmethod
    def amount_not_bool(cls, value):
        return _reject_bool(value)

    @field_validator("amount")
    @classmethod
    def amount_positive(cls, value):
        return _clean_amount(value)

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value):
        return _clean_text(value, 255)

    @field_validator("category")
    @classmethod
    def category_not_blank(cls, value):
        return _clean_text(value, 100)


class TransactionUpdate(BaseModel):
    type: Optional[TransactionType] = None
    amount: Optional[float] = None
    description: Optional[str] = None
    category: Optional[str] = None
    transaction_date: Optional[date] = None

    # Validators only run for fields present in the payload, so an explicit null is rejected
    @field_validator("type", "transaction_date")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("value is required")
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def amount_not_bool(cls, value):
        return _reject_bool(value)

    @field_validator("amount")
    @classmethod
    def amount_positive(cls, value):
        return _clean_amount(value)

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value):
        return _clean_text(value, 255)

    @field_validator("category")
    @classmethod
    def category_not_blank(cls, value):
        return _clean_text(value, 100)


class TransactionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    type: TransactionType
    amount: float
    description: str
    category: str
    transaction_date: date
    created_at: datetime
    updated_at: datetime


class DateRange(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def blank_date_is_absent(cls, value):
        return _blank_to_none(value)


class TransactionFilters(DateRange):
    page: int = 1
    limit: int = 10
    type: Optional[TransactionType] = None
    category: Optional[str] = None

    @field_validator("type", "category", mode="before")
    @classmethod
    def blank_filter_is_absent(cls, value):
        return _blank_to_none(value)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class TransactionListResponse(BaseModel):
    transactions: List[TransactionRead]
    pagination: Pagination


class TransactionResponse(BaseModel):
    message: str
    transaction: TransactionRead
