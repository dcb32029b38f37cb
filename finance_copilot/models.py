"""Data models for ``finance_copilot``.

Input records (income, expenses, savings goals) are pydantic models so rows
coming from JSON exports or the SQL tables are validated and coerced once, at
the edge. Everything derived from them (agent results, advisory output) is a
plain frozen dataclass: the analysis pipeline never mutates what it is given.

Monetary policy
---------------
Amounts are always floats. A missing, non-numeric, NaN or infinite amount is
coerced to ``0.0`` so no NaN can leak into sums, shares or rendered text.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

PayloadT = TypeVar("PayloadT")


def coerce_amount(value: Any) -> float:
    """Return ``value`` as a finite float, or ``0.0`` when that is impossible."""

    if value is None or isinstance(value, bool):
        return 0.0
    try:
        num = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(num):
        return 0.0
    return num


def _as_text(value: Any) -> Any:
    # Dates from SQL drivers arrive as ``date`` objects; the pipeline works on
    # ISO strings so lexicographic order stays chronological.
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = ""
    user_id: str = ""
    currency: str | None = None

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def _stringify_key(cls, v: Any) -> str:
        return "" if v is None else str(v)


class MonthlyIncome(_Record):
    """Income received in one calendar month. A month may hold several records."""

    month: str
    amount: float = 0.0
    source: str | None = None

    @field_validator("month", mode="before")
    @classmethod
    def _month_text(cls, v: Any) -> Any:
        v = _as_text(v)
        # A full date is accepted and truncated to its month.
        return v[:7] if isinstance(v, str) else v

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, v: Any) -> float:
        return coerce_amount(v)


class Expense(_Record):
    """A single expense. ``category`` is an opaque, case-sensitive label."""

    date: str
    category: str
    amount: float = 0.0
    description: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def _date_text(cls, v: Any) -> Any:
        return _as_text(v)

    @field_validator("category", mode="before")
    @classmethod
    def _category_text(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, v: Any) -> float:
        return coerce_amount(v)

    @property
    def month(self) -> str:
        return self.date[:7]


class SavingsGoal(_Record):
    """A savings goal with a target and the amount saved so far."""

    name: str
    target_amount: float = 0.0
    current_amount: float = 0.0
    deadline: str | None = None

    @field_validator("target_amount", "current_amount", mode="before")
    @classmethod
    def _amounts(cls, v: Any) -> float:
        return coerce_amount(v)

    @field_validator("deadline", mode="before")
    @classmethod
    def _deadline_text(cls, v: Any) -> Any:
        v = _as_text(v)
        if isinstance(v, str) and not v.strip():
            return None
        return v


class FinancialContext(BaseModel):
    """Immutable snapshot of one user's records, the sole input to the pipeline.

    Built once per run by a context provider and shared by reference with all
    agents. ``fetched_at`` is informational only.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    monthly_income: tuple[MonthlyIncome, ...] = ()
    expenses: tuple[Expense, ...] = ()
    savings_goals: tuple[SavingsGoal, ...] = ()
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_records(
        cls,
        user_id: str,
        *,
        monthly_income: Iterable[Any] = (),
        expenses: Iterable[Any] = (),
        savings_goals: Iterable[Any] = (),
        fetched_at: datetime | None = None,
    ) -> FinancialContext:
        """Build a context from raw mappings (JSON rows, SQL row dicts)."""

        data: dict[str, Any] = {
            "user_id": user_id,
            "monthly_income": tuple(monthly_income),
            "expenses": tuple(expenses),
            "savings_goals": tuple(savings_goals),
        }
        if fetched_at is not None:
            data["fetched_at"] = fetched_at
        return cls.model_validate(data)


# ---------------------------------------------------------------------------
# Pipeline outputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AgentResult(Generic[PayloadT]):
    """Uniform envelope returned by every agent.

    Consumers must check :attr:`ok` (or ``error``) before trusting ``payload``;
    on failure the payload is the agent's empty shape.
    """

    agent_id: str
    payload: PayloadT
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class AdvisoryOutput:
    """Synthesized advice. Each list holds at least one entry."""

    summary: str
    key_insights: tuple[str, ...]
    risks_warnings: tuple[str, ...]
    actionable_suggestions: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary,
            "key_insights": list(self.key_insights),
            "risks_warnings": list(self.risks_warnings),
            "actionable_suggestions": list(self.actionable_suggestions),
        }


__all__ = [
    "AdvisoryOutput",
    "AgentResult",
    "Expense",
    "FinancialContext",
    "MonthlyIncome",
    "SavingsGoal",
    "coerce_amount",
]
