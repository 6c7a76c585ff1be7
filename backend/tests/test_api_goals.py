"""Tests for savings goals API endpoints."""

import pytest
from decimal import Decimal

from fintrack.api.goals import goal_percentage


class TestGoalPercentage:
    """Test goal completion math."""

    def test_rounds_half_up(self):
        assert goal_percentage(Decimal("125.00"), Decimal("1000.00")) == 13

    def test_zero_target(self):
        assert goal_percentage(Decimal("10.00"), Decimal("0")) == 0

    def test_over_target(self):
        assert goal_percentage(Decimal("150"), Decimal("100")) == 150


class TestGoalsAPI:
    """Test savings goal endpoints."""

    def create(self, client, headers, name, target_date, target="1000.00", current="250.00"):
        return client.post("/api/v1/goals", headers=headers, json={
            "name": name,
            "target_amount": target,
            "current_amount": current,
            "target_date": target_date
        })

    def test_create_goal(self, client, auth_headers):
        response = self.create(client, auth_headers, "Emergency fund", "2024-12-31")
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Emergency fund"
        assert data["target_amount"] == 1000.0
        assert data["current_amount"] == 250.0
        assert data["percentage"] == 25
        assert data["is_completed"] is False

    def test_list_sorted_by_target_date(self, client, auth_headers):
        self.create(client, auth_headers, "Later", "2025-06-01")
        self.create(client, auth_headers, "Sooner", "2024-06-01")

        response = client.get("/api/v1/goals", headers=auth_headers)
        assert [g["name"] for g in response.json()] == ["Sooner", "Later"]

    def test_completed_goals_hidden_by_default(self, client, auth_headers):
        goal = self.create(client, auth_headers, "Bike", "2024-06-01").json()
        client.patch(f"/api/v1/goals/{goal['id']}", headers=auth_headers, json={"is_completed": True})

        assert client.get("/api/v1/goals", headers=auth_headers).json() == []
        response = client.get("/api/v1/goals?include_completed=true", headers=auth_headers)
        assert [g["name"] for g in response.json()] == ["Bike"]

    def test_update_progress(self, client, auth_headers):
        goal = self.create(client, auth_headers, "Trip", "2024-09-01").json()
        response = client.patch(f"/api/v1/goals/{goal['id']}", headers=auth_headers, json={
            "current_amount": "500.00"
        })
        assert response.status_code == 200
        assert response.json()["percentage"] == 50

    def test_delete_goal(self, client, auth_headers):
        goal = self.create(client, auth_headers, "Trip", "2024-09-01").json()
        assert client.delete(f"/api/v1/goals/{goal['id']}", headers=auth_headers).status_code == 204
        assert client.delete(f"/api/v1/goals/{goal['id']}", headers=auth_headers).status_code == 404
