"""Context providers: turn a user id into a :class:`FinancialContext`.

The analysis pipeline never fetches anything itself. A provider materializes
one user's records in memory and the pipeline works on that snapshot. Every
provider raises :class:`~finance_copilot.errors.ContextProviderError` (with
the original exception chained) when it cannot.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from datetime import date
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .db import ExpenseRow, IncomeRow, SavingsGoalRow, make_engine, row_to_record, session_scope
from .errors import ContextProviderError
from .logging_setup import get_logger
from .models import FinancialContext
from .sample_data import sample_context

_logger = get_logger("finance_copilot.providers")

_TABLES = ("monthly_income", "expenses", "savings_goals")


@runtime_checkable
class ContextProvider(Protocol):
    def fetch(self, user_id: str) -> FinancialContext: ...


def _build(user_id: str, tables: Mapping[str, Sequence[Any]], *, source: str) -> FinancialContext:
    try:
        context = FinancialContext.from_records(
            user_id,
            monthly_income=tables.get("monthly_income", ()),
            expenses=tables.get("expenses", ()),
            savings_goals=tables.get("savings_goals", ()),
        )
    except ValidationError as e:
        raise ContextProviderError(f"invalid records for user {user_id!r} in {source}: {e}") from e
    _logger.info(
        "fetched user %s from %s: %d income, %d expense, %d goal record(s)",
        user_id,
        source,
        len(context.monthly_income),
        len(context.expenses),
        len(context.savings_goals),
    )
    return context


def _belongs_to(row: Any, user_id: str) -> bool:
    # JSON ids may be numbers; compare as text.
    if not isinstance(row, Mapping):
        return True
    owner = row.get("user_id")
    return owner is None or owner == "" or str(owner) == user_id


class MockContextProvider:
    """Serves the built-in sample dataset under whatever user id is asked for."""

    def __init__(self, *, today: date | None = None) -> None:
        self._today = today

    def fetch(self, user_id: str) -> FinancialContext:
        return sample_context(user_id, today=self._today)


class JsonFileContextProvider:
    """Reads a JSON document shaped like the three record tables.

    Expected shape::

        {"monthly_income": [...], "expenses": [...], "savings_goals": [...]}

    Records carrying a ``user_id`` that differs from the requested one are
    skipped; records without one are taken as belonging to the requested user.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def _load(self) -> Mapping[str, Any]:
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise ContextProviderError(f"file not found: {self._path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise ContextProviderError(f"cannot read {self._path}: {e}") from e
        if not isinstance(raw, Mapping):
            raise ContextProviderError(f"{self._path}: expected a JSON object at top level")
        return raw

    def fetch(self, user_id: str) -> FinancialContext:
        raw = self._load()
        tables: dict[str, list[Any]] = {}
        for name in _TABLES:
            rows = raw.get(name) or []
            if not isinstance(rows, list):
                raise ContextProviderError(f"{self._path}: {name!r} must be a list")
            tables[name] = [row for row in rows if _belongs_to(row, user_id)]
        return _build(user_id, tables, source=str(self._path))


class SqlContextProvider:
    """Reads the three record tables through SQLAlchemy.

    The engine is built once from the URL given at construction, or passed in
    directly, and reused for every fetch made through this provider.
    """

    def __init__(self, database_url: str | None = None, *, engine: Engine | None = None) -> None:
        if engine is None:
            if not database_url:
                raise ContextProviderError(
                    "no database configured; set DATABASE_URL, pass --database-url, or use --mock"
                )
            try:
                engine = make_engine(database_url)
            except SQLAlchemyError as e:
                raise ContextProviderError(f"invalid database URL: {e}") from e
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def fetch(self, user_id: str) -> FinancialContext:
        try:
            with session_scope(self._engine) as session:
                income = session.scalars(
                    select(IncomeRow).where(IncomeRow.user_id == user_id).order_by(IncomeRow.month.desc())
                ).all()
                expenses = session.scalars(
                    select(ExpenseRow).where(ExpenseRow.user_id == user_id).order_by(ExpenseRow.date.desc())
                ).all()
                goals = session.scalars(
                    select(SavingsGoalRow).where(SavingsGoalRow.user_id == user_id).order_by(SavingsGoalRow.id)
                ).all()
                tables = {
                    "monthly_income": [row_to_record(r) for r in income],
                    "expenses": [row_to_record(r) for r in expenses],
                    "savings_goals": [row_to_record(r) for r in goals],
                }
        except SQLAlchemyError as e:
            raise ContextProviderError(f"database fetch failed for user {user_id!r}: {e}") from e
        return _build(user_id, tables, source="database")


__all__ = [
    "ContextProvider",
    "JsonFileContextProvider",
    "MockContextProvider",
    "SqlContextProvider",
]
