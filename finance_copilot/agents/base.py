"""The single failure boundary shared by all analysis agents.

An agent is a pure function ``FinancialContext -> payload``. Decorating it
with :func:`agent` turns it into ``FinancialContext -> AgentResult[payload]``
where any exception raised while computing is logged and converted into an
error result carrying the payload type's empty shape. Nothing above this
boundary needs a ``try``.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import TypeVar

from ..logging_setup import get_logger
from ..models import AgentResult, FinancialContext

PayloadT = TypeVar("PayloadT")

AgentFn = Callable[[FinancialContext], AgentResult[PayloadT]]

_logger = get_logger("finance_copilot.agents")


def agent(
    agent_id: str, *, empty: Callable[[], PayloadT]
) -> Callable[[Callable[[FinancialContext], PayloadT]], AgentFn[PayloadT]]:
    """Wrap a payload-computing function in the agent result contract."""

    def decorate(compute: Callable[[FinancialContext], PayloadT]) -> AgentFn[PayloadT]:
        @functools.wraps(compute)
        def run(ctx: FinancialContext) -> AgentResult[PayloadT]:
            try:
                payload = compute(ctx)
            except Exception as e:  # noqa: BLE001 - converted to data below
                _logger.warning("agent %s failed: %s", agent_id, e, exc_info=True)
                return AgentResult(agent_id=agent_id, payload=empty(), error=str(e) or type(e).__name__)
            return AgentResult(agent_id=agent_id, payload=payload)

        run.agent_id = agent_id  # type: ignore[attr-defined]
        return run

    return decorate


__all__ = ["AgentFn", "agent"]
