from __future__ import annotations

import math
from datetime import date, datetime

import pytest
from pydantic import ValidationError

from finance_copilot.models import (
    AdvisoryOutput,
    AgentResult,
    Expense,
    FinancialContext,
    MonthlyIncome,
    SavingsGoal,
    coerce_amount,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, 0.0),
        (True, 0.0),
        ("abc", 0.0),
        (math.nan, 0.0),
        (math.inf, 0.0),
        ("12.5", 12.5),
        (7, 7.0),
    ],
)
def test_coerce_amount(raw, expected):
    assert coerce_amount(raw) == expected


def test_income_month_accepts_full_date_and_truncates():
    assert MonthlyIncome(month="2025-01-15", amount=100).month == "2025-01"
    assert MonthlyIncome(month=date(2025, 2, 3), amount=100).month == "2025-02"


def test_expense_coerces_bad_amount_and_date_objects():
    e = Expense(date=date(2025, 3, 9), category="Food", amount="n/a")
    assert e.amount == 0.0
    assert e.date == "2025-03-09"
    assert e.month == "2025-03"


def test_expense_keeps_category_verbatim():
    e = Expense(date="2025-03-09", category=" food ", amount=1)
    assert e.category == " food "


def test_record_ids_are_strings_and_extra_fields_ignored():
    e = Expense(id=42, user_id=7, date="2025-01-01", category="Rent", amount=1, merchant="x")
    assert e.id == "42"
    assert e.user_id == "7"
    assert not hasattr(e, "merchant")


def test_goal_blank_deadline_is_none_and_date_deadline_is_iso():
    assert SavingsGoal(name="g", target_amount=1, deadline="  ").deadline is None
    assert SavingsGoal(name="g", target_amount=1, deadline=datetime(2025, 9, 1, 8)).deadline == "2025-09-01"


def test_context_is_frozen():
    ctx = FinancialContext.from_records("u1", expenses=[{"date": "2025-01-01", "category": "Food", "amount": 5}])
    assert isinstance(ctx.expenses, tuple)
    with pytest.raises(ValidationError):
        ctx.user_id = "other"  # type: ignore[misc]


def test_context_keeps_given_fetched_at():
    when = datetime(2025, 1, 1, 12, 0)
    ctx = FinancialContext.from_records("u1", fetched_at=when)
    assert ctx.fetched_at == when
    assert ctx.monthly_income == ()


def test_agent_result_ok_reflects_error():
    assert AgentResult("a", payload=1).ok
    assert not AgentResult("a", payload=0, error="boom").ok


def test_advisory_output_to_dict_uses_lists():
    out = AdvisoryOutput("s", ("i",), ("r",), ("a",))
    assert out.to_dict() == {
        "summary": "s",
        "key_insights": ["i"],
        "risks_warnings": ["r"],
        "actionable_suggestions": ["a"],
    }
