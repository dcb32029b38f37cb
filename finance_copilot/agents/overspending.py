"""Overspending relative to income.

For each month the agent compares total expense with total income, and for
each (month, category) cell it computes the category's share of that month's
income. Categories are then ranked by their average share.

Numeric policy
--------------
- A month with zero income yields a share of exactly ``0.0`` for every cell;
  such months are never flagged as over-income.
- A category's average share is taken only over the months in which it has
  an expense entry, unweighted by amount.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from ..models import FinancialContext
from .base import agent

AGENT_ID = "overspending-categories"
TOP_CATEGORIES_LIMIT = 10


@dataclass(frozen=True, slots=True)
class MonthAmount:
    month: str
    amount: float


@dataclass(frozen=True, slots=True)
class CategoryShare:
    month: str
    category: str
    amount: float
    share_of_income: float


@dataclass(frozen=True, slots=True)
class CategoryShareRank:
    category: str
    avg_share_of_income: float
    months: int


@dataclass(frozen=True, slots=True)
class OverspendingPayload:
    income_by_month: tuple[MonthAmount, ...]
    expense_by_month: tuple[MonthAmount, ...]
    category_share_by_month: tuple[CategoryShare, ...]
    over_income_months: tuple[str, ...]
    top_categories_by_share: tuple[CategoryShareRank, ...]

    @classmethod
    def empty(cls) -> OverspendingPayload:
        return cls((), (), (), (), ())

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def share_of_income(amount: float, income: float) -> float:
    """Percentage of ``income`` taken by ``amount``; 0 when there is no income."""

    if income > 0:
        return amount / income * 100
    return 0.0


@agent(AGENT_ID, empty=OverspendingPayload.empty)
def run_overspending(ctx: FinancialContext) -> OverspendingPayload:
    income: dict[str, float] = {}
    for m in ctx.monthly_income:
        income[m.month] = income.get(m.month, 0.0) + m.amount

    expense: dict[str, float] = {}
    cells: dict[tuple[str, str], float] = {}
    for e in ctx.expenses:
        month = e.month
        expense[month] = expense.get(month, 0.0) + e.amount
        key = (month, e.category)
        cells[key] = cells.get(key, 0.0) + e.amount

    # dict.fromkeys keeps income months first, then expense-only months.
    all_months = dict.fromkeys([*income, *expense])
    over_income = tuple(
        month
        for month in all_months
        if income.get(month, 0.0) > 0 and expense.get(month, 0.0) > income.get(month, 0.0)
    )

    shares = tuple(
        CategoryShare(
            month=month,
            category=category,
            amount=amount,
            share_of_income=share_of_income(amount, income.get(month, 0.0)),
        )
        for (month, category), amount in cells.items()
    )

    per_category: dict[str, list[float]] = {}
    for s in shares:
        per_category.setdefault(s.category, []).append(s.share_of_income)
    ranked = sorted(
        (
            CategoryShareRank(
                category=category,
                avg_share_of_income=sum(values) / len(values),
                months=len(values),
            )
            for category, values in per_category.items()
        ),
        key=lambda r: r.avg_share_of_income,
        reverse=True,
    )

    return OverspendingPayload(
        income_by_month=tuple(MonthAmount(month=k, amount=v) for k, v in income.items()),
        expense_by_month=tuple(MonthAmount(month=k, amount=v) for k, v in expense.items()),
        category_share_by_month=shares,
        over_income_months=over_income,
        top_categories_by_share=tuple(ranked[:TOP_CATEGORIES_LIMIT]),
    )


__all__ = [
    "AGENT_ID",
    "CategoryShare",
    "CategoryShareRank",
    "MonthAmount",
    "OverspendingPayload",
    "run_overspending",
    "share_of_income",
]
