"""Analysis agents: independent, pure aggregation passes over one context.

Each ``run_*`` callable takes a :class:`~finance_copilot.models.FinancialContext`
and returns an :class:`~finance_copilot.models.AgentResult`; none of them
raises for bad data. :func:`synthesize` merges the four results.
"""

from .monthly_trends import MonthlyTrendsPayload, run_monthly_trends
from .overspending import OverspendingPayload, run_overspending
from .savings_consistency import SavingsConsistencyPayload, run_savings_consistency
from .spending_patterns import SpendingPatternsPayload, run_spending_patterns
from .synthesizer import AgentResults, synthesize

__all__ = [
    "AgentResults",
    "MonthlyTrendsPayload",
    "OverspendingPayload",
    "SavingsConsistencyPayload",
    "SpendingPatternsPayload",
    "run_monthly_trends",
    "run_overspending",
    "run_savings_consistency",
    "run_spending_patterns",
    "synthesize",
]
