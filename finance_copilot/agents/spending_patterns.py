"""Spending patterns: totals by category, by month, and by (month, category)."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from ..models import FinancialContext
from .base import agent

AGENT_ID = "spending-patterns"


@dataclass(frozen=True, slots=True)
class CategoryTotal:
    category: str
    total: float
    count: int


@dataclass(frozen=True, slots=True)
class MonthTotal:
    month: str
    total: float
    count: int


@dataclass(frozen=True, slots=True)
class MonthCategoryTotal:
    month: str
    category: str
    total: float


@dataclass(frozen=True, slots=True)
class SpendingPatternsPayload:
    """Aggregates in first-encounter order of the underlying expenses."""

    total_by_category: tuple[CategoryTotal, ...]
    total_by_month: tuple[MonthTotal, ...]
    category_by_month: tuple[MonthCategoryTotal, ...]
    overall_total: float
    month_count: int

    @classmethod
    def empty(cls) -> SpendingPatternsPayload:
        return cls((), (), (), 0.0, 0)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@agent(AGENT_ID, empty=SpendingPatternsPayload.empty)
def run_spending_patterns(ctx: FinancialContext) -> SpendingPatternsPayload:
    by_category: dict[str, list[float | int]] = {}
    by_month: dict[str, list[float | int]] = {}
    # Keyed by a (month, category) tuple, so a category containing any
    # separator character cannot collide with another cell.
    by_cell: dict[tuple[str, str], float] = {}
    overall = 0.0

    for e in ctx.expenses:
        month = e.month
        amount = e.amount
        overall += amount

        cat = by_category.setdefault(e.category, [0.0, 0])
        cat[0] += amount
        cat[1] += 1

        mon = by_month.setdefault(month, [0.0, 0])
        mon[0] += amount
        mon[1] += 1

        key = (month, e.category)
        by_cell[key] = by_cell.get(key, 0.0) + amount

    return SpendingPatternsPayload(
        total_by_category=tuple(
            CategoryTotal(category=c, total=float(t), count=int(n)) for c, (t, n) in by_category.items()
        ),
        total_by_month=tuple(
            MonthTotal(month=m, total=float(t), count=int(n)) for m, (t, n) in by_month.items()
        ),
        category_by_month=tuple(
            MonthCategoryTotal(month=m, category=c, total=t) for (m, c), t in by_cell.items()
        ),
        overall_total=overall,
        month_count=len(by_month),
    )


__all__ = [
    "AGENT_ID",
    "CategoryTotal",
    "MonthCategoryTotal",
    "MonthTotal",
    "SpendingPatternsPayload",
    "run_spending_patterns",
]
