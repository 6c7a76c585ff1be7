"""Tests for default category seeding."""

from fintrack.models import Category, CategoryType
from fintrack.seed import DEFAULT_CATEGORIES, seed_categories
from fintrack.services.palette import PALETTE


def test_seeds_empty_table(db_session):
    assert seed_categories(db_session) == len(DEFAULT_CATEGORIES)
    names = {c.name for c in db_session.query(Category).all()}
    assert {"Salary", "Food", "Housing"} <= names


def test_does_not_reseed(db_session):
    seed_categories(db_session)
    assert seed_categories(db_session) == 0
    assert db_session.query(Category).count() == len(DEFAULT_CATEGORIES)


def test_defaults_use_palette_colors():
    assert all(c["color"] in PALETTE for c in DEFAULT_CATEGORIES)
    assert {c["type"] for c in DEFAULT_CATEGORIES} == {CategoryType.income, CategoryType.expense}


def test_user_categories_do_not_block_seeding(db_session, sample_user):
    db_session.add(Category(user_id=sample_user.id, name="Mine", type=CategoryType.expense))
    db_session.commit()
    assert seed_categories(db_session) == len(DEFAULT_CATEGORIES)
    assert db_session.query(Category).filter(Category.user_id.is_(None)).count() == len(DEFAULT_CATEGORIES)
