"""
Main API router.
"""

from fastapi import APIRouter
from fintrack.api import accounts, analytics, budgets, categories, goals, notifications, profile, transactions

api_router = APIRouter()

api_router.include_router(profile.router)
api_router.include_router(accounts.router)
api_router.include_router(categories.router)
api_router.include_router(transactions.router)
api_router.include_router(budgets.router)
api_router.include_router(goals.router)
api_router.include_router(notifications.router)
api_router.include_router(analytics.router)
