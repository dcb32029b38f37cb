"""DB helpers for tests: bootstrap a temporary SQLite DB with the record tables."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy.engine import Engine

from finance_copilot.db import create_schema, make_engine


def bootstrap_sqlite_db(db_file: Path) -> tuple[str, Engine]:
    """Create a SQLite database file with the schema; return its URL and engine.

    Using a file-backed SQLite DB ensures multiple SQLAlchemy connections share
    the same state (in-memory DBs are per-connection by default).
    """

    url = f"sqlite+pysqlite:///{db_file}"
    db_file.parent.mkdir(parents=True, exist_ok=True)
    engine = make_engine(url)
    create_schema(engine)
    return url, engine
