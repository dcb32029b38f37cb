"""Savings-goal progress and classification.

The three name lists answer different questions and are computed by
independent predicates:

- ``completed_goals``: progress of at least 100%.
- ``behind_goals``: not complete and a deadline is set.
- ``on_track_goals``: some progress made but not complete.

A goal with partial progress and a deadline therefore appears in both
``behind_goals`` and ``on_track_goals``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from ..models import FinancialContext, SavingsGoal
from .base import agent

AGENT_ID = "savings-consistency"


@dataclass(frozen=True, slots=True)
class GoalProgress:
    name: str
    target_amount: float
    current_amount: float
    progress_pct: float
    remaining: float
    deadline: str | None = None


@dataclass(frozen=True, slots=True)
class SavingsConsistencyPayload:
    goals: tuple[GoalProgress, ...]
    total_target: float
    total_current: float
    overall_progress_pct: float
    on_track_goals: tuple[str, ...]
    behind_goals: tuple[str, ...]
    completed_goals: tuple[str, ...]

    @classmethod
    def empty(cls) -> SavingsConsistencyPayload:
        return cls((), 0.0, 0.0, 0.0, (), (), ())

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def progress_pct(current: float, target: float) -> float:
    if target > 0:
        return current / target * 100
    return 0.0


def goal_progress(goal: SavingsGoal) -> GoalProgress:
    target = goal.target_amount
    current = goal.current_amount
    return GoalProgress(
        name=goal.name,
        target_amount=target,
        current_amount=current,
        progress_pct=progress_pct(current, target),
        remaining=max(0.0, target - current),
        deadline=goal.deadline,
    )


@agent(AGENT_ID, empty=SavingsConsistencyPayload.empty)
def run_savings_consistency(ctx: FinancialContext) -> SavingsConsistencyPayload:
    if not ctx.savings_goals:
        return SavingsConsistencyPayload.empty()

    goals = tuple(goal_progress(g) for g in ctx.savings_goals)
    total_target = sum(g.target_amount for g in goals)
    total_current = sum(g.current_amount for g in goals)

    return SavingsConsistencyPayload(
        goals=goals,
        total_target=total_target,
        total_current=total_current,
        overall_progress_pct=progress_pct(total_current, total_target),
        on_track_goals=tuple(g.name for g in goals if 0 < g.progress_pct < 100),
        behind_goals=tuple(g.name for g in goals if g.progress_pct < 100 and g.deadline),
        completed_goals=tuple(g.name for g in goals if g.progress_pct >= 100),
    )


__all__ = [
    "AGENT_ID",
    "GoalProgress",
    "SavingsConsistencyPayload",
    "goal_progress",
    "progress_pct",
    "run_savings_consistency",
]
