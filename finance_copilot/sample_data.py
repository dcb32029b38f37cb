"""Built-in sample user used by ``--mock`` runs, tests and the seed command.

Three months of ₹30000 income; expenses split across Rent, Food and
Entertainment to total ₹17799 (January), ₹22399 (February) and ₹17399
(March); one Emergency Fund goal of ₹60000 due 180 days from ``today`` with
nothing saved yet.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

from .models import FinancialContext

MOCK_USER_ID = "mock-user"
GOAL_HORIZON_DAYS = 180

_INCOME = (
    ("1", "2025-01", 30000),
    ("2", "2025-02", 30000),
    ("3", "2025-03", 30000),
)

_EXPENSES = (
    ("e1", "2025-01-05", "Rent", 8000),
    ("e2", "2025-01-10", "Food", 5879),
    ("e3", "2025-01-15", "Entertainment", 3920),
    ("e4", "2025-02-05", "Rent", 8000),
    ("e5", "2025-02-12", "Food", 8640),
    ("e6", "2025-02-18", "Entertainment", 5759),
    ("e7", "2025-03-05", "Rent", 8000),
    ("e8", "2025-03-11", "Food", 5640),
    ("e9", "2025-03-20", "Entertainment", 3759),
)


def sample_records(user_id: str = MOCK_USER_ID, *, today: date | None = None) -> dict[str, list[dict[str, Any]]]:
    """Return the sample dataset as raw row mappings keyed by table name."""

    today = today or date.today()
    deadline = (today + timedelta(days=GOAL_HORIZON_DAYS)).isoformat()
    return {
        "monthly_income": [
            {"id": i, "user_id": user_id, "month": month, "amount": amount}
            for i, month, amount in _INCOME
        ],
        "expenses": [
            {"id": i, "user_id": user_id, "date": d, "category": cat, "amount": amount}
            for i, d, cat, amount in _EXPENSES
        ],
        "savings_goals": [
            {
                "id": "g1",
                "user_id": user_id,
                "name": "Emergency Fund",
                "target_amount": 60000,
                "current_amount": 0,
                "deadline": deadline,
            }
        ],
    }


def sample_context(user_id: str = MOCK_USER_ID, *, today: date | None = None) -> FinancialContext:
    records = sample_records(user_id, today=today)
    return FinancialContext.from_records(
        user_id,
        monthly_income=records["monthly_income"],
        expenses=records["expenses"],
        savings_goals=records["savings_goals"],
    )


__all__ = ["GOAL_HORIZON_DAYS", "MOCK_USER_ID", "sample_context", "sample_records"]
