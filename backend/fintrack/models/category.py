"""
Category database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Enum, ForeignKey
from sqlalchemy.orm import relationship
import enum
from fintrack.database import Base


class CategoryType(str, enum.Enum):
    """Whether a category collects income or expenses."""
    income = "income"
    expense = "expense"


class ColorToken(str, enum.Enum):
    """Fixed display palette for categories."""
    blue = "blue"
    green = "green"
    orange = "orange"
    indigo = "indigo"
    pink = "pink"
    purple = "purple"
    red = "red"
    yellow = "yellow"


class Category(Base):
    """Category model. Rows without an owner are shared defaults and read-only."""

    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)  # NULL = shared default
    name = Column(String(100), nullable=False)
    type = Column(Enum(CategoryType), nullable=False)
    icon = Column(String(50), nullable=False, default="circle")
    color = Column(String(20), nullable=False, default="blue")  # ColorToken value
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="category")
    budgets = relationship("Budget", back_populates="category")
