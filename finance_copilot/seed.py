"""Write sample users into the record tables.

``seed_sample_user`` replaces one user's rows with the built-in sample
dataset; ``seed_demo_users`` writes five months of randomized history for
several users (income near a per-user base, 8-15 expenses a month across
seven categories, two goals each).
"""

from __future__ import annotations

import calendar
import random
from collections.abc import Sequence
from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy import delete
from sqlalchemy.orm import Session

from .db import ExpenseRow, IncomeRow, SavingsGoalRow
from .logging_setup import get_logger
from .sample_data import GOAL_HORIZON_DAYS, sample_records

_logger = get_logger("finance_copilot.seed")

DEMO_MONTHS = ("2024-10", "2024-11", "2024-12", "2025-01", "2025-02")
DEMO_CATEGORIES = ("Food", "Rent", "Entertainment", "Transport", "Shopping", "Health", "Utilities")


def clear_user(session: Session, user_id: str) -> None:
    for model in (ExpenseRow, IncomeRow, SavingsGoalRow):
        session.execute(delete(model).where(model.user_id == user_id))


def seed_sample_user(session: Session, user_id: str, *, today: date | None = None) -> None:
    """Replace ``user_id``'s rows with the sample dataset."""

    records = sample_records(user_id, today=today)
    clear_user(session, user_id)
    session.add_all(
        IncomeRow(user_id=user_id, month=r["month"], amount=Decimal(r["amount"]))
        for r in records["monthly_income"]
    )
    session.add_all(
        ExpenseRow(
            user_id=user_id,
            date=date.fromisoformat(r["date"]),
            category=r["category"],
            amount=Decimal(r["amount"]),
        )
        for r in records["expenses"]
    )
    session.add_all(
        SavingsGoalRow(
            user_id=user_id,
            name=r["name"],
            target_amount=Decimal(r["target_amount"]),
            current_amount=Decimal(r["current_amount"]),
            deadline=date.fromisoformat(r["deadline"]),
        )
        for r in records["savings_goals"]
    )
    _logger.info("seeded sample data for user %s", user_id)


def _seed_demo_user(
    session: Session, user_id: str, base_income: int, *, rng: random.Random, deadline: date
) -> None:
    for month in DEMO_MONTHS:
        session.add(
            IncomeRow(
                user_id=user_id,
                month=month,
                amount=Decimal(base_income + rng.randint(-2000, 2000)),
                source="Salary",
            )
        )

    for month in DEMO_MONTHS:
        year, mon = (int(x) for x in month.split("-"))
        days_in_month = calendar.monthrange(year, mon)[1]
        for _ in range(rng.randint(8, 15)):
            session.add(
                ExpenseRow(
                    user_id=user_id,
                    date=date(year, mon, rng.randint(1, days_in_month)),
                    category=rng.choice(DEMO_CATEGORIES),
                    amount=Decimal(rng.randint(100, 5000)),
                )
            )

    for name, target, current in (
        ("Emergency Fund", 60000, rng.randint(5000, 25000)),
        ("Vacation", 30000, rng.randint(0, 10000)),
    ):
        session.add(
            SavingsGoalRow(
                user_id=user_id,
                name=name,
                target_amount=Decimal(target),
                current_amount=Decimal(current),
                deadline=deadline,
            )
        )


def seed_demo_users(
    session: Session,
    user_ids: Sequence[str],
    *,
    rng: random.Random | None = None,
    today: date | None = None,
) -> None:
    """Replace each user's rows with randomized demo history."""

    rng = rng or random.Random()
    deadline = (today or date.today()) + timedelta(days=GOAL_HORIZON_DAYS)
    for user_id in user_ids:
        clear_user(session, user_id)
        _seed_demo_user(session, user_id, 30000 + rng.randint(0, 15000), rng=rng, deadline=deadline)
        _logger.info("seeded demo history for user %s", user_id)


__all__ = ["DEMO_CATEGORIES", "DEMO_MONTHS", "clear_user", "seed_demo_users", "seed_sample_user"]
