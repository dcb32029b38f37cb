"""Public interface for the ``finance_copilot`` package.

Re-exports the analysis entry points, the record and output models, and the
context providers. There is no runtime logic here, only symbol re-exports.
"""

from .errors import (
    ContextProviderError,
    ElaborationError,
    ElaborationUnavailable,
    FinanceCopilotError,
)
from .formatting import MoneyFormat, format_money
from .models import (
    AdvisoryOutput,
    AgentResult,
    Expense,
    FinancialContext,
    MonthlyIncome,
    SavingsGoal,
)
from .orchestrator import AnalysisResult, run_agents, run_analysis, run_for_user
from .providers import (
    ContextProvider,
    JsonFileContextProvider,
    MockContextProvider,
    SqlContextProvider,
)
from .report import format_report, render_for_elaboration

__all__ = [
    # Pipeline
    "run_agents",
    "run_analysis",
    "run_for_user",
    "format_report",
    "render_for_elaboration",
    "AnalysisResult",
    # Models
    "FinancialContext",
    "MonthlyIncome",
    "Expense",
    "SavingsGoal",
    "AgentResult",
    "AdvisoryOutput",
    "MoneyFormat",
    "format_money",
    # Providers
    "ContextProvider",
    "MockContextProvider",
    "JsonFileContextProvider",
    "SqlContextProvider",
    # Errors
    "FinanceCopilotError",
    "ContextProviderError",
    "ElaborationError",
    "ElaborationUnavailable",
]
