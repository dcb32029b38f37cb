"""Pytest configuration for test isolation and shared fixtures.

Settings are read from the process environment and the CLI loads ``.env``
from the working directory. A developer's shell or ``.env`` could otherwise
change money formatting, the default user or the data source under test, so
an autouse fixture clears the relevant variables and moves each test into its
own temporary directory.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from finance_copilot.logging_setup import reset_logging
from finance_copilot.models import FinancialContext
from finance_copilot.sample_data import sample_context
from tests.helpers.context import TODAY

_ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_MODEL",
    "DATABASE_URL",
    "FINANCE_COPILOT_USER_ID",
    "FINANCE_COPILOT_USE_MOCK",
    "FINANCE_COPILOT_CURRENCY_SYMBOL",
    "FINANCE_COPILOT_GROUPING",
    "FINANCE_COPILOT_AGENT_WORKERS",
    "FINANCE_COPILOT_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def sample_ctx(today: date) -> FinancialContext:
    return sample_context("u1", today=today)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo ``configure_logging`` between tests so ``caplog`` sees package records."""

    reset_logging()
    yield
    reset_logging()
