"""
Category Pydantic schemas for API validation.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from fintrack.models.category import CategoryType, ColorToken


class CategoryBase(BaseModel):
    """Base category schema."""
    name: str = Field(..., min_length=1, max_length=100)
    type: CategoryType
    color: ColorToken = ColorToken.blue
    icon: str = Field("circle", max_length=50)


class CategoryCreate(CategoryBase):
    """Schema for creating a category."""
    pass


class CategoryUpdate(BaseModel):
    """Schema for updating a category."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[CategoryType] = None
    color: Optional[ColorToken] = None
    icon: Optional[str] = Field(None, max_length=50)


class CategoryResponse(BaseModel):
    """Schema for category response. Color is passed through as stored."""
    id: str
    user_id: Optional[str] = None
    name: str
    type: CategoryType
    color: str
    icon: str
    created_at: datetime

    class Config:
        from_attributes = True


class CategoryList(BaseModel):
    """Schema for listing categories."""
    items: list[CategoryResponse]
    total: int
