"""Runtime settings read from the process environment.

``.env`` loading happens at the CLI boundary (``python-dotenv``); this module
only reads ``os.environ`` and only when :meth:`Settings.from_env` is called.
Nothing here runs at import time.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .formatting import DEFAULT_GROUPING, DEFAULT_SYMBOL, MoneyFormat

DEFAULT_USER_ID = "default-user"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
MAX_AGENT_WORKERS = 4

_TRUTHY = {"1", "true", "yes", "on"}


def _flag(value: str | None) -> bool:
    return value is not None and value.strip().lower() in _TRUTHY


def _workers(value: str | None) -> int:
    try:
        n = int(value) if value else MAX_AGENT_WORKERS
    except ValueError:
        n = MAX_AGENT_WORKERS
    return max(1, min(n, MAX_AGENT_WORKERS))


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved configuration for one process.

    Attributes
    ----------
    openai_api_key:
        Key for the elaboration service; ``None`` disables ``ask``.
    openai_base_url:
        Optional OpenAI-compatible endpoint (Azure, local gateways).
    openai_model:
        Chat model used for elaboration.
    database_url:
        SQLAlchemy URL for :class:`~finance_copilot.providers.SqlContextProvider`.
    user_id:
        Default user when none is given on the command line.
    use_mock:
        Serve the built-in sample user instead of a real data source.
    money:
        How amounts are rendered in advisory text.
    agent_workers:
        Thread pool size for running agents concurrently (1 means sequential).
    """

    openai_api_key: str | None = None
    openai_base_url: str | None = None
    openai_model: str = DEFAULT_OPENAI_MODEL
    database_url: str | None = None
    user_id: str = DEFAULT_USER_ID
    use_mock: bool = False
    money: MoneyFormat = MoneyFormat()
    agent_workers: int = MAX_AGENT_WORKERS

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        money = MoneyFormat(
            symbol=env.get("FINANCE_COPILOT_CURRENCY_SYMBOL") or DEFAULT_SYMBOL,
            grouping=(env.get("FINANCE_COPILOT_GROUPING") or DEFAULT_GROUPING).strip().lower(),
        )
        return cls(
            openai_api_key=env.get("OPENAI_API_KEY") or None,
            openai_base_url=env.get("OPENAI_BASE_URL") or None,
            openai_model=env.get("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL,
            database_url=env.get("DATABASE_URL") or None,
            user_id=env.get("FINANCE_COPILOT_USER_ID") or DEFAULT_USER_ID,
            use_mock=_flag(env.get("FINANCE_COPILOT_USE_MOCK")),
            money=money,
            agent_workers=_workers(env.get("FINANCE_COPILOT_AGENT_WORKERS")),
        )


__all__ = ["DEFAULT_USER_ID", "Settings"]
