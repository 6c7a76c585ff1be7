"""
Seed script for default categories.
"""

import logging
import uuid

from fintrack.database import Base, SessionLocal, engine
from fintrack.models import Category, CategoryType

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    {"name": "Salary", "type": CategoryType.income, "color": "green", "icon": "briefcase"},
    {"name": "Freelance", "type": CategoryType.income, "color": "indigo", "icon": "laptop"},
    {"name": "Investments", "type": CategoryType.income, "color": "purple", "icon": "trending-up"},
    {"name": "Other Income", "type": CategoryType.income, "color": "blue", "icon": "plus-circle"},
    {"name": "Housing", "type": CategoryType.expense, "color": "blue", "icon": "home"},
    {"name": "Food", "type": CategoryType.expense, "color": "orange", "icon": "utensils"},
    {"name": "Transportation", "type": CategoryType.expense, "color": "indigo", "icon": "car"},
    {"name": "Utilities", "type": CategoryType.expense, "color": "yellow", "icon": "zap"},
    {"name": "Entertainment", "type": CategoryType.expense, "color": "pink", "icon": "film"},
    {"name": "Shopping", "type": CategoryType.expense, "color": "purple", "icon": "shopping-bag"},
    {"name": "Health", "type": CategoryType.expense, "color": "red", "icon": "heart"},
    {"name": "Other", "type": CategoryType.expense, "color": "green", "icon": "circle"},
]


def seed_categories(db=None) -> int:
    """Insert the shared default categories unless they exist. Returns rows added."""
    owns_session = db is None
    if owns_session:
        Base.metadata.create_all(bind=engine)
        db = SessionLocal()

    try:
        existing_count = db.query(Category).filter(Category.user_id.is_(None)).count()
        if existing_count > 0:
            logger.info("Categories already seeded (%d categories exist)", existing_count)
            return 0

        for data in DEFAULT_CATEGORIES:
            db.add(Category(id=str(uuid.uuid4()), **data))

        db.commit()
        logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))
        return len(DEFAULT_CATEGORIES)
    except Exception:
        db.rollback()
        raise
    finally:
        if owns_session:
            db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed_categories()
