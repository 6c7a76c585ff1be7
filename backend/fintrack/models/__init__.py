"""
Database models package.
"""

from fintrack.models.user import User
from fintrack.models.account import Account, AccountType
from fintrack.models.category import Category, CategoryType, ColorToken
from fintrack.models.transaction import Transaction
from fintrack.models.budget import Budget
from fintrack.models.savings_goal import SavingsGoal
from fintrack.models.notification import Notification, NotificationType

__all__ = [
    "User",
    "Account",
    "AccountType",
    "Category",
    "CategoryType",
    "ColorToken",
    "Transaction",
    "Budget",
    "SavingsGoal",
    "Notification",
    "NotificationType",
]
