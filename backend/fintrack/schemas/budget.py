"""
Budget schemas.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal


class BudgetCreate(BaseModel):
    category_id: str
    amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    period: str = Field("monthly", max_length=20)


class BudgetUpdate(BaseModel):
    amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    period: Optional[str] = Field(None, max_length=20)


class BudgetResponse(BaseModel):
    id: str
    category_id: str
    amount: float
    period: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BudgetOverviewItem(BaseModel):
    id: Optional[str]
    category: str
    color: str
    amount: float
    spent: float
    percentage: int
