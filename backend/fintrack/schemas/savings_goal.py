"""
Savings goal schemas.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from decimal import Decimal


class SavingsGoalCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    target_amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    current_amount: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    target_date: date


class SavingsGoalUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    target_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    current_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    target_date: Optional[date] = None
    is_completed: Optional[bool] = None


class SavingsGoalResponse(BaseModel):
    id: str
    name: str
    target_amount: float
    current_amount: float
    target_date: date
    is_completed: bool
    percentage: int
    created_at: datetime
