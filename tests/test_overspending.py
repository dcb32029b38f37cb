from __future__ import annotations

import pytest

from finance_copilot.agents.overspending import (
    TOP_CATEGORIES_LIMIT,
    run_overspending,
    share_of_income,
)
from tests.helpers.context import make_context


def test_share_of_income_is_zero_without_income():
    assert share_of_income(500, 0) == 0.0
    assert share_of_income(500, 1000) == 50.0


def test_zero_income_month_has_zero_shares_and_is_not_over_income():
    ctx = make_context(
        income=[("2025-01", 0)],
        expenses=[("2025-01-05", "Food", 300), ("2025-02-05", "Food", 200)],
    )
    p = run_overspending(ctx).payload

    assert all(s.share_of_income == 0.0 for s in p.category_share_by_month)
    assert p.over_income_months == ()


def test_over_income_months_list_income_months_first():
    ctx = make_context(
        income=[("2025-03", 100), ("2025-01", 100)],
        expenses=[
            ("2025-02-01", "Food", 50),
            ("2025-01-01", "Food", 150),
            ("2025-03-01", "Rent", 101),
        ],
    )
    p = run_overspending(ctx).payload
    assert p.over_income_months == ("2025-03", "2025-01")
    assert [m.month for m in p.income_by_month] == ["2025-03", "2025-01"]


def test_income_records_in_same_month_are_summed():
    ctx = make_context(
        income=[("2025-01", 600), ("2025-01", 400)],
        expenses=[("2025-01-10", "Food", 250)],
    )
    p = run_overspending(ctx).payload
    assert [(m.month, m.amount) for m in p.income_by_month] == [("2025-01", 1000)]
    assert p.category_share_by_month[0].share_of_income == 25.0


def test_average_share_is_unweighted_over_months_with_entries(sample_ctx):
    p = run_overspending(sample_ctx).payload
    food = next(r for r in p.top_categories_by_share if r.category == "Food")

    assert food.months == 3
    expected = (5879 / 30000 * 100 + 8640 / 30000 * 100 + 5640 / 30000 * 100) / 3
    assert food.avg_share_of_income == pytest.approx(expected)
    assert [r.category for r in p.top_categories_by_share] == ["Rent", "Food", "Entertainment"]
    assert p.over_income_months == ()


def test_top_categories_capped_and_ties_keep_encounter_order():
    expenses = [("2025-01-01", f"c{i:02d}", 10) for i in range(TOP_CATEGORIES_LIMIT + 3)]
    p = run_overspending(make_context(income=[("2025-01", 1000)], expenses=expenses)).payload

    assert len(p.top_categories_by_share) == TOP_CATEGORIES_LIMIT
    assert [r.category for r in p.top_categories_by_share] == [
        f"c{i:02d}" for i in range(TOP_CATEGORIES_LIMIT)
    ]
