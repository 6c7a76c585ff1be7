"""
Pydantic schemas package.
"""

from fintrack.schemas.account import (
    AccountBase,
    AccountCreate,
    AccountUpdate,
    AccountResponse,
    AccountList,
    AccountSummary,
)
from fintrack.schemas.category import (
    CategoryBase,
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryList,
)
from fintrack.schemas.transaction import (
    TransactionBase,
    TransactionCreate,
    TransactionUpdate,
    TransactionResponse,
    TransactionListResponse,
    RecentTransaction,
)
from fintrack.schemas.budget import (
    BudgetCreate,
    BudgetUpdate,
    BudgetResponse,
    BudgetOverviewItem,
)
from fintrack.schemas.savings_goal import (
    SavingsGoalCreate,
    SavingsGoalUpdate,
    SavingsGoalResponse,
)

__all__ = [
    "AccountBase",
    "AccountCreate",
    "AccountUpdate",
    "AccountResponse",
    "AccountList",
    "AccountSummary",
    "CategoryBase",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategoryList",
    "TransactionBase",
    "TransactionCreate",
    "TransactionUpdate",
    "TransactionResponse",
    "TransactionListResponse",
    "RecentTransaction",
    "BudgetCreate",
    "BudgetUpdate",
    "BudgetResponse",
    "BudgetOverviewItem",
    "SavingsGoalCreate",
    "SavingsGoalUpdate",
    "SavingsGoalResponse",
]
