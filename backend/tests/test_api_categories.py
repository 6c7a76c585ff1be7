"""Tests for categories API endpoints."""

import pytest
import uuid
from datetime import date
from decimal import Decimal

from fintrack.models import Budget, Category, CategoryType


@pytest.fixture
def own_category(db_session, sample_user):
    """An expense category owned by sample_user."""
    category = Category(
        id=str(uuid.uuid4()),
        user_id=sample_user.id,
        name="Hobbies",
        type=CategoryType.expense,
        color="purple"
    )
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


class TestCategoriesAPI:
    """Test categories CRUD endpoints."""

    def test_list_categories_empty(self, client, auth_headers):
        response = client.get("/api/v1/categories", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"items": [], "total": 0}

    def test_create_category(self, client, auth_headers, sample_user):
        """Should create a category owned by the caller with the default icon."""
        response = client.post("/api/v1/categories", headers=auth_headers, json={
            "name": "Groceries",
            "type": "expense",
            "color": "green"
        })
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Groceries"
        assert data["type"] == "expense"
        assert data["color"] == "green"
        assert data["icon"] == "circle"
        assert data["user_id"] == sample_user.id

    def test_default_color(self, client, auth_headers):
        response = client.post("/api/v1/categories", headers=auth_headers, json={
            "name": "Misc",
            "type": "expense"
        })
        assert response.json()["color"] == "blue"

    def test_rejects_color_outside_palette(self, client, auth_headers):
        response = client.post("/api/v1/categories", headers=auth_headers, json={
            "name": "Odd",
            "type": "expense",
            "color": "teal"
        })
        assert response.status_code == 422

    def test_filter_by_type(self, client, auth_headers, food_category, salary_category):
        """Should return only the requested kind, sorted by name."""
        response = client.get("/api/v1/categories?type=income", headers=auth_headers)
        assert [c["name"] for c in response.json()["items"]] == ["Salary"]

        response = client.get("/api/v1/categories", headers=auth_headers)
        assert [c["name"] for c in response.json()["items"]] == ["Food", "Salary"]

    def test_get_missing_category(self, client, auth_headers):
        response = client.get("/api/v1/categories/nope", headers=auth_headers)
        assert response.status_code == 404


class TestCategoryOwnership:
    """Shared defaults are read-only and user categories are private."""

    def test_own_categories_listed_with_defaults(self, client, auth_headers, food_category, own_category):
        response = client.get("/api/v1/categories", headers=auth_headers)
        assert [c["name"] for c in response.json()["items"]] == ["Food", "Hobbies"]

    def test_other_users_categories_hidden(self, client, other_user, food_category, own_category):
        headers = {"X-User-Id": other_user.id}
        response = client.get("/api/v1/categories", headers=headers)
        assert [c["name"] for c in response.json()["items"]] == ["Food"]
        assert client.get(f"/api/v1/categories/{own_category.id}", headers=headers).status_code == 404

    def test_update_own_category(self, client, auth_headers, own_category):
        response = client.patch(f"/api/v1/categories/{own_category.id}", headers=auth_headers, json={
            "name": "Crafts",
            "color": "red"
        })
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Crafts"
        assert data["color"] == "red"
        assert data["type"] == "expense"

    def test_default_category_is_read_only(self, client, auth_headers, food_category):
        response = client.patch(f"/api/v1/categories/{food_category.id}", headers=auth_headers, json={
            "name": "Dining"
        })
        assert response.status_code == 403
        assert client.delete(f"/api/v1/categories/{food_category.id}", headers=auth_headers).status_code == 403

    def test_other_user_cannot_delete_default_category(self, client, db_session, other_user,
                                                       food_category, make_transaction):
        """Deleting a shared category must not uncategorize anyone's transactions."""
        mine = make_transaction("-25.00", date(2024, 1, 15), "Market", food_category)

        response = client.delete(
            f"/api/v1/categories/{food_category.id}",
            headers={"X-User-Id": other_user.id}
        )
        assert response.status_code == 403
        db_session.refresh(mine)
        assert mine.category_id == food_category.id

    def test_other_user_cannot_touch_private_category(self, client, db_session, other_user,
                                                      own_category, make_transaction):
        mine = make_transaction("-12.00", date(2024, 1, 15), "Yarn", own_category)
        headers = {"X-User-Id": other_user.id}

        assert client.patch(
            f"/api/v1/categories/{own_category.id}", headers=headers, json={"name": "Mine now"}
        ).status_code == 404
        assert client.delete(f"/api/v1/categories/{own_category.id}", headers=headers).status_code == 404
        db_session.refresh(mine)
        assert mine.category_id == own_category.id

    def test_delete_uncategorizes_transactions(self, client, auth_headers, own_category, make_transaction):
        """Transactions survive their category's deletion."""
        txn = make_transaction("-8.00", date(2024, 1, 15), "Paint", own_category)
        response = client.delete(f"/api/v1/categories/{own_category.id}", headers=auth_headers)
        assert response.status_code == 204

        response = client.get(f"/api/v1/transactions/{txn.id}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["category_id"] is None

    def test_delete_blocked_by_budget(self, client, db_session, auth_headers, sample_user, own_category):
        db_session.add(Budget(
            id=str(uuid.uuid4()),
            user_id=sample_user.id,
            category_id=own_category.id,
            amount=Decimal("40.00")
        ))
        db_session.commit()

        response = client.delete(f"/api/v1/categories/{own_category.id}", headers=auth_headers)
        assert response.status_code == 409

    def test_private_category_not_usable_by_others(self, client, db_session, other_user, own_category):
        from fintrack.models import Account, AccountType
        theirs = Account(user_id=other_user.id, name="Theirs", type=AccountType.cash, balance=0)
        db_session.add(theirs)
        db_session.commit()
        headers = {"X-User-Id": other_user.id}

        response = client.post("/api/v1/transactions", headers=headers, json={
            "account_id": theirs.id,
            "category_id": own_category.id,
            "description": "Borrowed",
            "amount": "-1.00",
            "date": "2024-01-15"
        })
        assert response.status_code == 404
        response = client.post("/api/v1/budgets", headers=headers, json={
            "category_id": own_category.id,
            "amount": "10.00"
        })
        assert response.status_code == 404
