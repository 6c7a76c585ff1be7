"""Shared test fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from datetime import date
from decimal import Decimal
import uuid

from fintrack.database import Base
from fintrack.dependencies import get_db, UserSession
from fintrack.main import app
from fintrack.models import (
    Account,
    AccountType,
    Budget,
    Category,
    CategoryType,
    Transaction,
    User,
)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test using in-memory SQLite."""
    # Use StaticPool to ensure all connections use the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    # Create session
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_user(db_session):
    """Create a sample user."""
    user = User(id=str(uuid.uuid4()), email="jane@example.com", full_name="Jane Doe")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def other_user(db_session):
    """A second user whose data must never leak into sample_user's views."""
    user = User(id=str(uuid.uuid4()), email="other@example.com")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(sample_user):
    """Headers identifying sample_user."""
    return {"X-User-Id": sample_user.id}


@pytest.fixture
def user_session(sample_user):
    return UserSession(user_id=sample_user.id, email=sample_user.email)


@pytest.fixture
def sample_account(db_session, sample_user):
    """Create a sample account."""
    account = Account(
        id=str(uuid.uuid4()),
        user_id=sample_user.id,
        name="Test Checking",
        type=AccountType.checking,
        institution="Test Bank",
        balance=Decimal("1000.00")
    )
    db_session.add(account)
    db_session.commit()
    db_session.refresh(account)
    return account


@pytest.fixture
def food_category(db_session):
    """A shared default expense category (no owner)."""
    category = Category(
        id=str(uuid.uuid4()),
        name="Food",
        type=CategoryType.expense,
        color="orange",
        icon="utensils"
    )
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def salary_category(db_session):
    """A shared default income category (no owner)."""
    category = Category(
        id=str(uuid.uuid4()),
        name="Salary",
        type=CategoryType.income,
        color="green",
        icon="briefcase"
    )
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def make_transaction(db_session, sample_user, sample_account):
    """Factory for transactions on sample_account."""
    def _make(amount, day, description="Test", category=None, user=None, account=None):
        txn = Transaction(
            id=str(uuid.uuid4()),
            user_id=(user or sample_user).id,
            account_id=(account or sample_account).id,
            category_id=category.id if category else None,
            description=description,
            amount=Decimal(amount),
            date=day
        )
        db_session.add(txn)
        db_session.commit()
        db_session.refresh(txn)
        return txn
    return _make


@pytest.fixture
def sample_transaction(make_transaction, food_category):
    """Create a sample expense transaction."""
    return make_transaction("-50.00", date(2024, 1, 15), "WHOLE FOODS #1234", food_category)


@pytest.fixture
def food_budget(db_session, sample_user, food_category):
    """A 100.00 budget on Food."""
    budget = Budget(
        id=str(uuid.uuid4()),
        user_id=sample_user.id,
        category_id=food_category.id,
        amount=Decimal("100.00"),
        period="monthly"
    )
    db_session.add(budget)
    db_session.commit()
    db_session.refresh(budget)
    return budget
