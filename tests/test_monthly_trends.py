from __future__ import annotations

import pytest

from finance_copilot.agents.monthly_trends import build_trend, run_monthly_trends, savings_rate
from tests.helpers.context import make_context


def test_first_point_has_no_change_values():
    first = build_trend([("2025-01", 100.0), ("2025-02", 150.0)])[0]
    assert first.change_vs_prev is None
    assert first.change_pct is None


def test_previous_zero_gives_delta_but_no_percentage():
    points = build_trend([("2025-01", 0.0), ("2025-02", 40.0)])
    assert points[1].change_vs_prev == 40.0
    assert points[1].change_pct is None


def test_savings_rate_without_income_is_zero():
    assert savings_rate(0, 500) == 0.0
    assert savings_rate(1000, 1500) == -50.0


def test_expense_trend_is_sorted_and_flags_increases():
    ctx = make_context(
        expenses=[
            ("2025-03-01", "Food", 90),
            ("2025-01-01", "Food", 100),
            ("2025-02-01", "Food", 120),
        ]
    )
    p = run_monthly_trends(ctx).payload

    assert [pt.month for pt in p.expense_trend] == ["2025-01", "2025-02", "2025-03"]
    assert p.expense_trend[1].change_pct == pytest.approx(20.0)
    assert p.increasing_expense_months == ("2025-02",)


def test_income_trend_has_one_point_per_record():
    ctx = make_context(income=[("2025-02", 500), ("2025-01", 1000), ("2025-02", 300)])
    p = run_monthly_trends(ctx).payload

    assert [(pt.month, pt.value) for pt in p.income_trend] == [
        ("2025-01", 1000),
        ("2025-02", 500),
        ("2025-02", 300),
    ]
    assert p.decreasing_income_months == ("2025-02", "2025-02")
    # Savings rates still use the month's summed income.
    feb = next(r for r in p.savings_rate_by_month if r.month == "2025-02")
    assert feb.income == 800


def test_savings_rate_covers_union_of_months(sample_ctx):
    p = run_monthly_trends(sample_ctx).payload

    assert [r.month for r in p.savings_rate_by_month] == ["2025-01", "2025-02", "2025-03"]
    assert all(r.rate_pct > 0 for r in p.savings_rate_by_month)
    jan = p.savings_rate_by_month[0]
    assert jan.savings == 30000 - 17799
    assert jan.rate_pct == pytest.approx((30000 - 17799) / 30000 * 100)
