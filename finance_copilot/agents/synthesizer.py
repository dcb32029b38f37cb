"""Deterministic synthesis of agent results into advisory text.

:func:`synthesize` applies a fixed list of rules, in order, to the four agent
results. Each rule appends zero or more lines to the insights, risks or
suggestions lists; no rule reads another rule's output. No I/O, no model
calls: the same inputs (and the same ``today``) always give the same text.

Headline totals
---------------
Total income, expenses and net are computed from the raw context when it is
supplied, even if an agent failed, and only fall back to agent payloads when
it is not.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import TypeVar

from ..formatting import MoneyFormat, format_money, month_name, round_half_up
from ..models import AdvisoryOutput, AgentResult, FinancialContext, coerce_amount
from .monthly_trends import MonthlyTrendsPayload
from .overspending import OverspendingPayload
from .savings_consistency import SavingsConsistencyPayload
from .spending_patterns import SpendingPatternsPayload

SUMMARY_WITH_DATA = (
    "Here's what your spending and savings look like, and what to do next, all from your data."
)
SUMMARY_NO_DATA = "Not enough data yet. Add income, expenses, and goals, then run again."

PLACEHOLDER_INSIGHTS = "Add your data to see insights."
PLACEHOLDER_RISKS = "No major risks from your data."
PLACEHOLDER_SUGGESTIONS = (
    "Add income and expense data, then run again for concrete steps to save money."
)

HIGH_SHARE_THRESHOLD_PCT = 30.0
TARGET_SAVINGS_RATE_PCT = 20.0
DAYS_PER_MONTH = 30
# Used when a goal's deadline cannot be parsed as a date.
FALLBACK_MONTHS_LEFT = 6

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class AgentResults:
    """The four agent results a synthesis run consumes."""

    spending: AgentResult[SpendingPatternsPayload]
    overspending: AgentResult[OverspendingPayload]
    trends: AgentResult[MonthlyTrendsPayload]
    savings: AgentResult[SavingsConsistencyPayload]

    def all(self) -> tuple[AgentResult, ...]:
        return (self.spending, self.overspending, self.trends, self.savings)


@dataclass(slots=True)
class _Draft:
    insights: list[str]
    risks: list[str]
    suggestions: list[str]


def _whole(value: float) -> str:
    """Percentages as whole numbers, half away from zero (``35.5`` -> ``36``)."""

    return str(round_half_up(value))


def _months_left(deadline: str, today: date) -> int:
    try:
        due = date.fromisoformat(deadline[:10])
    except ValueError:
        return FALLBACK_MONTHS_LEFT
    return max(1, math.ceil((due - today).days / DAYS_PER_MONTH))


def _by_total_desc(items: tuple[T, ...], total: Callable[[T], float]) -> list[T]:
    # sorted() is stable, so equal totals keep their encounter order.
    return sorted(items, key=total, reverse=True)


# ---- Rules -------------------------------------------------------------------


def _headline(
    draft: _Draft, results: AgentResults, context: FinancialContext | None, money: MoneyFormat
) -> None:
    if context is not None:
        total_income = sum(coerce_amount(m.amount) for m in context.monthly_income)
        total_expenses = sum(coerce_amount(e.amount) for e in context.expenses)
    else:
        total_income = (
            sum(p.value for p in results.trends.payload.income_trend) if results.trends.ok else 0.0
        )
        total_expenses = results.spending.payload.overall_total if results.spending.ok else 0.0
    net = total_income - total_expenses
    draft.insights.append(
        f"Total income: {format_money(total_income, money)}. "
        f"Total expenses: {format_money(total_expenses, money)}. "
        f"Net (money in hand): {format_money(net, money)}."
    )


def _spending(draft: _Draft, results: AgentResults, money: MoneyFormat) -> None:
    spending = results.spending
    if not spending.ok:
        draft.insights.append(f"Spending data unavailable ({spending.error}).")
        return
    p = spending.payload
    if p.overall_total <= 0:
        draft.insights.append("No expense data yet. Add your expenses to get advice.")
        return
    draft.insights.append(
        f"You spent {format_money(p.overall_total, money)} over {p.month_count} month(s)."
    )
    if p.total_by_category:
        top = _by_total_desc(p.total_by_category, lambda c: c.total)[:3]
        listing = " → ".join(f"{c.category} {format_money(c.total, money)}" for c in top)
        draft.insights.append(f"Your top spending: {listing}.")


def _peak_months(draft: _Draft, results: AgentResults, money: MoneyFormat) -> None:
    trends = results.trends
    if not trends.ok or not trends.payload.expense_trend:
        return
    trend = trends.payload.expense_trend
    highest = lowest = trend[0]
    for point in trend[1:]:
        if point.value > highest.value:
            highest = point
        if point.value < lowest.value:
            lowest = point
    if highest.month != lowest.month:
        draft.insights.append(
            f"You spent the most in {month_name(highest.month)} ({format_money(highest.value, money)}) "
            f"and the least in {month_name(lowest.month)} ({format_money(lowest.value, money)})."
        )


def _overspending(draft: _Draft, results: AgentResults) -> None:
    overspending = results.overspending
    if not overspending.ok:
        return
    o = overspending.payload
    if o.over_income_months:
        months = ", ".join(month_name(m) for m in o.over_income_months)
        draft.risks.append(f"You spent more than you earned in {months}. That drains savings.")
        draft.suggestions.append(
            "Cut discretionary spending (e.g. Entertainment, eating out) in high-spend months "
            "so you don't exceed income."
        )
    if o.top_categories_by_share:
        top = o.top_categories_by_share[0]
        if top.avg_share_of_income > HIGH_SHARE_THRESHOLD_PCT:
            draft.suggestions.append(
                f"{top.category} is taking {_whole(top.avg_share_of_income)}% of your income. "
                "Look for cuts there first (subscriptions, habits, one-offs)."
            )


def _savings_rate(draft: _Draft, results: AgentResults) -> None:
    trends = results.trends
    if not trends.ok or not trends.payload.savings_rate_by_month:
        return
    rates = trends.payload.savings_rate_by_month
    negative = [r for r in rates if r.rate_pct < 0]
    if negative:
        months = ", ".join(month_name(r.month) for r in negative)
        draft.risks.append(f"You had no savings (spent more than income) in {months}.")
    avg = sum(r.rate_pct for r in rates) / len(rates)
    nudge = (
        "Aim to save at least 20% to build a safety net."
        if avg < TARGET_SAVINGS_RATE_PCT
        else "Good base to build on."
    )
    draft.insights.append(f"Your average savings rate is {_whole(avg)}%. {nudge}")


def _category_to_cut(draft: _Draft, results: AgentResults, money: MoneyFormat) -> None:
    spending = results.spending
    if not spending.ok or not spending.payload.total_by_category:
        return
    candidates = [
        c
        for c in _by_total_desc(spending.payload.total_by_category, lambda c: c.total)
        if c.category.lower() != "rent"
    ]
    if candidates:
        to_cut = candidates[0]
        draft.suggestions.append(
            f"To save money, trim {to_cut.category} first "
            f"(you spent {format_money(to_cut.total, money)}). Small cuts add up."
        )


def _goals(draft: _Draft, results: AgentResults, today: date, money: MoneyFormat) -> None:
    savings = results.savings
    if not savings.ok or not savings.payload.goals:
        return
    s = savings.payload
    names = ", ".join(g.name for g in s.goals)
    label = "Your goal" if len(s.goals) == 1 else "Your goals"
    draft.insights.append(
        f"{label}: {names}, {_whole(s.overall_progress_pct)}% done "
        f"({format_money(s.total_current, money)} of {format_money(s.total_target, money)})."
    )
    if s.behind_goals:
        draft.risks.append(
            f"You're behind on: {', '.join(s.behind_goals)}. Start or increase monthly contributions."
        )
    with_deadline = next((g for g in s.goals if g.deadline), None)
    if s.total_current == 0 and s.total_target > 0 and with_deadline is not None:
        months_left = _months_left(with_deadline.deadline or "", today)
        per_month = s.total_target / months_left
        monthly = math.ceil(per_month) if math.isfinite(per_month) else 0
        draft.suggestions.append(
            f"How to save for {names}: put aside {format_money(monthly, money)} per month "
            f"for the next ~{months_left} months. Set a standing transfer so you don't skip."
        )
    if 0 < s.overall_progress_pct < 100:
        draft.suggestions.append(
            "Keep your monthly savings amount fixed; automate the transfer so you stay on track."
        )


# ---- Entry point -------------------------------------------------------------


def synthesize(
    results: AgentResults,
    *,
    context: FinancialContext | None = None,
    today: date | None = None,
    money: MoneyFormat | None = None,
) -> AdvisoryOutput:
    """Merge agent results into an :class:`AdvisoryOutput`.

    Parameters
    ----------
    results:
        The four agent results; any of them may carry an error.
    context:
        The raw snapshot, preferred for the headline totals.
    today:
        Reference date for goal deadline math. Defaults to the local date.
    money:
        Currency rendering; Indian rupees with Indian grouping by default.
    """

    today = today or date.today()
    money = money or MoneyFormat()
    draft = _Draft(insights=[], risks=[], suggestions=[])

    _headline(draft, results, context, money)
    _spending(draft, results, money)
    _peak_months(draft, results, money)
    _overspending(draft, results)
    _savings_rate(draft, results)
    _category_to_cut(draft, results, money)
    _goals(draft, results, today, money)

    has_data = any(r.ok for r in results.all())
    if not has_data:
        # Nothing succeeded: every list collapses to its placeholder.
        draft = _Draft(insights=[], risks=[], suggestions=[])
    return AdvisoryOutput(
        summary=SUMMARY_WITH_DATA if has_data else SUMMARY_NO_DATA,
        key_insights=tuple(draft.insights) or (PLACEHOLDER_INSIGHTS,),
        risks_warnings=tuple(draft.risks) or (PLACEHOLDER_RISKS,),
        actionable_suggestions=tuple(draft.suggestions) or (PLACEHOLDER_SUGGESTIONS,),
    )


__all__ = [
    "AgentResults",
    "PLACEHOLDER_INSIGHTS",
    "PLACEHOLDER_RISKS",
    "PLACEHOLDER_SUGGESTIONS",
    "SUMMARY_NO_DATA",
    "SUMMARY_WITH_DATA",
    "synthesize",
]
