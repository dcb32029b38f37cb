"""Run the four analysis agents against one context, then synthesize.

The agents only read the shared, immutable context, so running them in a
thread pool or one after another yields identical results. The pool is small
and bounded; ``parallel=False`` runs them inline.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from typing import Any

from .agents import (
    AgentResults,
    run_monthly_trends,
    run_overspending,
    run_savings_consistency,
    run_spending_patterns,
    synthesize,
)
from .formatting import MoneyFormat
from .logging_setup import get_logger
from .models import AdvisoryOutput, FinancialContext
from .providers import ContextProvider

_logger = get_logger("finance_copilot.orchestrator")

_AGENTS = (
    run_spending_patterns,
    run_overspending,
    run_monthly_trends,
    run_savings_consistency,
)


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Everything one run produced, for formatting or inspection."""

    user_id: str
    output: AdvisoryOutput
    context: FinancialContext
    agent_results: AgentResults

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "fetched_at": self.context.fetched_at.isoformat(),
            "output": self.output.to_dict(),
            "agents": {
                r.agent_id: {"payload": r.payload.to_dict(), "error": r.error}
                for r in self.agent_results.all()
            },
        }


def run_agents(
    context: FinancialContext, *, parallel: bool = True, max_workers: int = len(_AGENTS)
) -> AgentResults:
    """Run all agents and return their results in a fixed order."""

    if parallel and max_workers > 1:
        workers = max(1, min(max_workers, len(_AGENTS)))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="fc-agent") as ex:
            futures = [ex.submit(fn, context) for fn in _AGENTS]
            spending, overspending, trends, savings = (f.result() for f in futures)
    else:
        spending, overspending, trends, savings = (fn(context) for fn in _AGENTS)
    return AgentResults(
        spending=spending, overspending=overspending, trends=trends, savings=savings
    )


def run_analysis(
    context: FinancialContext,
    *,
    parallel: bool = True,
    max_workers: int = len(_AGENTS),
    today: date | None = None,
    money: MoneyFormat | None = None,
) -> AnalysisResult:
    """Analyze one user's snapshot and synthesize advice.

    Never raises for data problems: an agent that fails shows up with its
    ``error`` set and the synthesis degrades around it.
    """

    t0 = time.perf_counter()
    results = run_agents(context, parallel=parallel, max_workers=max_workers)
    failed = [r.agent_id for r in results.all() if not r.ok]
    if failed:
        _logger.info("user %s: %d agent(s) failed: %s", context.user_id, len(failed), ", ".join(failed))

    output = synthesize(results, context=context, today=today, money=money)
    _logger.debug(
        "user %s: analysis finished in %.1f ms", context.user_id, (time.perf_counter() - t0) * 1000
    )
    return AnalysisResult(
        user_id=context.user_id, output=output, context=context, agent_results=results
    )


def run_for_user(provider: ContextProvider, user_id: str, **kwargs: Any) -> AnalysisResult:
    """Resolve ``user_id`` through ``provider`` and analyze the snapshot.

    Provider failures propagate as :class:`~finance_copilot.errors.ContextProviderError`.
    """

    context = provider.fetch(user_id)
    return run_analysis(context, **kwargs)


__all__ = ["AnalysisResult", "run_agents", "run_analysis", "run_for_user"]
