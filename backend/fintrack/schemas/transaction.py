"""
Transaction schemas.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
import datetime as dt
from decimal import Decimal


class TransactionBase(BaseModel):
    date: dt.date
    amount: Decimal = Field(..., max_digits=12, decimal_places=2)
    description: str = Field(..., min_length=1)
    category_id: Optional[str] = None
    notes: Optional[str] = None


class TransactionCreate(TransactionBase):
    account_id: str

    @field_validator("amount")
    @classmethod
    def amount_not_zero(cls, v):
        if v == 0:
            raise ValueError("amount cannot be zero")
        return v


class TransactionUpdate(BaseModel):
    date: Optional[dt.date] = None
    amount: Optional[Decimal] = Field(None, max_digits=12, decimal_places=2)
    description: Optional[str] = Field(None, min_length=1)
    category_id: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("amount")
    @classmethod
    def amount_not_zero(cls, v):
        if v is not None and v == 0:
            raise ValueError("amount cannot be zero")
        return v


class TransactionResponse(BaseModel):
    id: str
    account_id: str
    category_id: Optional[str]
    description: str
    amount: float
    date: dt.date
    notes: Optional[str]
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True


class TransactionListResponse(BaseModel):
    items: list[TransactionResponse]
    total: int
    page: int
    pages: int


class RecentTransaction(BaseModel):
    id: str
    date: str
    description: str
    category: str
    color: str
    amount: float
