from __future__ import annotations

from finance_copilot.agents.spending_patterns import (
    AGENT_ID,
    SpendingPatternsPayload,
    run_spending_patterns,
)
from finance_copilot.models import Expense, FinancialContext
from tests.helpers.context import make_context


def test_empty_expenses_yield_empty_payload_without_error():
    result = run_spending_patterns(make_context(income=[("2025-01", 1000)]))
    assert result.agent_id == AGENT_ID
    assert result.ok
    assert result.payload == SpendingPatternsPayload.empty()


def test_totals_on_sample_data(sample_ctx):
    p = run_spending_patterns(sample_ctx).payload

    assert p.overall_total == 57597
    assert p.month_count == 3
    assert [(c.category, c.total, c.count) for c in p.total_by_category] == [
        ("Rent", 24000, 3),
        ("Food", 20159, 3),
        ("Entertainment", 13438, 3),
    ]
    assert [(m.month, m.total) for m in p.total_by_month] == [
        ("2025-01", 17799),
        ("2025-02", 22399),
        ("2025-03", 17399),
    ]
    assert len(p.category_by_month) == 9


def test_cells_are_keyed_by_month_and_category_pair():
    ctx = make_context(
        expenses=[
            ("2025-01-02", "Food|Dining", 10),
            ("2025-01-03", "Food", 5),
            ("2025-01-04", "Food", 7),
        ]
    )
    cells = {(c.month, c.category): c.total for c in run_spending_patterns(ctx).payload.category_by_month}
    assert cells == {("2025-01", "Food|Dining"): 10, ("2025-01", "Food"): 12}


def test_categories_are_case_sensitive():
    ctx = make_context(expenses=[("2025-01-02", "food", 1), ("2025-01-03", "Food", 2)])
    cats = [c.category for c in run_spending_patterns(ctx).payload.total_by_category]
    assert cats == ["food", "Food"]


def test_internal_failure_becomes_error_result():
    broken = FinancialContext.model_construct(
        user_id="u1",
        monthly_income=(),
        expenses=(Expense.model_construct(date=None, category="Food", amount=10.0),),
        savings_goals=(),
    )
    result = run_spending_patterns(broken)
    assert not result.ok
    assert result.error
    assert result.payload == SpendingPatternsPayload.empty()
