"""Month-over-month income and expense trends, plus the monthly savings rate.

Months are ordered by plain string comparison of ``YYYY-MM`` labels, which is
chronological because the format is fixed width.

``change_pct`` is ``None`` both for the first point and whenever the previous
value is exactly zero: callers must read it as "cannot compare", not as "no
change". ``change_vs_prev`` is only ``None`` for the first point.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from ..models import FinancialContext
from .base import agent

AGENT_ID = "monthly-trends"


@dataclass(frozen=True, slots=True)
class TrendPoint:
    month: str
    value: float
    change_vs_prev: float | None = None
    change_pct: float | None = None


@dataclass(frozen=True, slots=True)
class SavingsRate:
    month: str
    income: float
    expense: float
    savings: float
    rate_pct: float


@dataclass(frozen=True, slots=True)
class MonthlyTrendsPayload:
    expense_trend: tuple[TrendPoint, ...]
    income_trend: tuple[TrendPoint, ...]
    savings_rate_by_month: tuple[SavingsRate, ...]
    increasing_expense_months: tuple[str, ...]
    decreasing_income_months: tuple[str, ...]

    @classmethod
    def empty(cls) -> MonthlyTrendsPayload:
        return cls((), (), (), (), ())

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def build_trend(series: list[tuple[str, float]]) -> tuple[TrendPoint, ...]:
    """Attach period-over-period deltas to an already sorted series."""

    points: list[TrendPoint] = []
    prev: float | None = None
    for month, value in series:
        change = None if prev is None else value - prev
        pct = None if prev is None or prev == 0 else change / prev * 100
        points.append(TrendPoint(month=month, value=value, change_vs_prev=change, change_pct=pct))
        prev = value
    return tuple(points)


def savings_rate(income: float, expense: float) -> float:
    if income > 0:
        return (income - expense) / income * 100
    return 0.0


@agent(AGENT_ID, empty=MonthlyTrendsPayload.empty)
def run_monthly_trends(ctx: FinancialContext) -> MonthlyTrendsPayload:
    expense_by_month: dict[str, float] = {}
    for e in ctx.expenses:
        expense_by_month[e.month] = expense_by_month.get(e.month, 0.0) + e.amount

    income_by_month: dict[str, float] = {}
    for m in ctx.monthly_income:
        income_by_month[m.month] = income_by_month.get(m.month, 0.0) + m.amount

    # One point per income record; sorted() is stable for same-month sources.
    income_series = sorted(((m.month, m.amount) for m in ctx.monthly_income), key=lambda x: x[0])
    expense_series = sorted(expense_by_month.items(), key=lambda x: x[0])

    income_trend = build_trend(income_series)
    expense_trend = build_trend(expense_series)

    rates = []
    for month in sorted({*income_by_month, *expense_by_month}):
        inc = income_by_month.get(month, 0.0)
        exp = expense_by_month.get(month, 0.0)
        rates.append(
            SavingsRate(
                month=month,
                income=inc,
                expense=exp,
                savings=inc - exp,
                rate_pct=savings_rate(inc, exp),
            )
        )

    return MonthlyTrendsPayload(
        expense_trend=expense_trend,
        income_trend=income_trend,
        savings_rate_by_month=tuple(rates),
        increasing_expense_months=tuple(
            p.month for p in expense_trend if p.change_pct is not None and p.change_pct > 0
        ),
        decreasing_income_months=tuple(
            p.month for p in income_trend if p.change_pct is not None and p.change_pct < 0
        ),
    )


__all__ = [
    "AGENT_ID",
    "MonthlyTrendsPayload",
    "SavingsRate",
    "TrendPoint",
    "build_trend",
    "run_monthly_trends",
    "savings_rate",
]
