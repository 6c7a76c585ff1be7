"""
Account Pydantic schemas for API validation.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import Optional
from fintrack.models.account import AccountType


class AccountBase(BaseModel):
    """Base account schema."""
    name: str = Field(..., min_length=1, max_length=100)
    type: AccountType
    institution: Optional[str] = Field(None, max_length=100)


class AccountCreate(AccountBase):
    """Schema for creating an account."""
    balance: Decimal = Decimal("0")


class AccountUpdate(BaseModel):
    """Schema for updating an account."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[AccountType] = None
    institution: Optional[str] = Field(None, max_length=100)
    balance: Optional[Decimal] = None


class AccountResponse(AccountBase):
    """Schema for account response."""
    id: str
    balance: float
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AccountList(BaseModel):
    """Schema for listing accounts."""
    items: list[AccountResponse]
    total: int


class AccountSummary(BaseModel):
    """Total balance across a user's accounts."""
    total_balance: float
    account_count: int
