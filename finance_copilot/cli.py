"""Command-line interface for ``finance_copilot``.

Three commands sit on a Typer app:

- ``report``: analyze one user and print the four-section advisory report.
- ``ask``: answer questions about that report with a language model, either
  one question from the command line or an interactive loop.
- ``seed``: create the record tables and write sample users into them.

The root callback loads ``.env`` from the working directory (never overriding
variables already set) and configures logging before any command runs.
Business logic lives in :mod:`finance_copilot.orchestrator` and friends.
"""

from __future__ import annotations

import json
import sys
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown

from .config import Settings
from .errors import ContextProviderError, ElaborationError
from .logging_setup import configure_logging
from .orchestrator import AnalysisResult, run_for_user
from .providers import (
    ContextProvider,
    JsonFileContextProvider,
    MockContextProvider,
    SqlContextProvider,
)
from .report import format_report

app = typer.Typer(
    name="finance-copilot",
    no_args_is_help=True,
    add_completion=False,
    help="Personal finance analytics and advice from your income, expense and goal records.",
)
console = Console()


class OutputFormat(str, Enum):
    markdown = "markdown"
    plain = "plain"
    json = "json"


MockOpt = Annotated[
    bool, typer.Option("--mock", help="Use the built-in sample user instead of a data source.")
]
JsonFileOpt = Annotated[
    Path | None,
    typer.Option("--json-file", help="Read records from a JSON file.", dir_okay=False),
]
DatabaseUrlOpt = Annotated[
    str | None, typer.Option("--database-url", help="Override DATABASE_URL.")
]


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


def _settings() -> Settings:
    try:
        return Settings.from_env()
    except ValueError as e:
        raise _fail(f"invalid configuration: {e}") from e


def _provider(
    settings: Settings, *, mock: bool, json_file: Path | None, database_url: str | None
) -> ContextProvider:
    if mock or settings.use_mock:
        return MockContextProvider()
    if json_file is not None:
        return JsonFileContextProvider(json_file)
    return SqlContextProvider(database_url or settings.database_url)


def _analyze(
    settings: Settings,
    user_id: str | None,
    *,
    mock: bool,
    json_file: Path | None,
    database_url: str | None,
) -> AnalysisResult:
    try:
        provider = _provider(settings, mock=mock, json_file=json_file, database_url=database_url)
        return run_for_user(
            provider,
            user_id or settings.user_id,
            money=settings.money,
            max_workers=settings.agent_workers,
        )
    except ContextProviderError as e:
        raise _fail(str(e)) from e


@app.command("report")
def report_cmd(
    user_id: Annotated[
        str | None, typer.Argument(help="User to analyze (default: FINANCE_COPILOT_USER_ID).")
    ] = None,
    *,
    mock: MockOpt = False,
    json_file: JsonFileOpt = None,
    database_url: DatabaseUrlOpt = None,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", help="Output style.", case_sensitive=False)
    ] = OutputFormat.markdown,
) -> None:
    """Analyze one user and print the advisory report."""

    settings = _settings()
    result = _analyze(settings, user_id, mock=mock, json_file=json_file, database_url=database_url)

    if output_format is OutputFormat.json:
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    elif output_format is OutputFormat.plain:
        typer.echo(format_report(result.output))
    else:
        console.print(Markdown(format_report(result.output)))


@app.command("ask")
def ask_cmd(
    question: Annotated[
        list[str] | None, typer.Argument(help="Question to ask; omit for an interactive session.")
    ] = None,
    *,
    user_id: Annotated[str | None, typer.Option("--user-id", help="User to analyze.")] = None,
    mock: MockOpt = False,
    json_file: JsonFileOpt = None,
    database_url: DatabaseUrlOpt = None,
) -> None:
    """Ask questions about your finances; answers come from a language model."""

    # Deferred: keeps the openai import off the report/seed paths.
    from .llm import ElaborationService
    from .term_ui import chat_loop

    settings = _settings()
    try:
        service = ElaborationService.from_settings(settings)
    except ElaborationError as e:
        raise _fail(str(e)) from e

    result = _analyze(settings, user_id, mock=mock, json_file=json_file, database_url=database_url)

    text = " ".join(question or []).strip()
    if text:
        try:
            typer.echo(service.answer(text, result.output))
        except ElaborationError as e:
            raise _fail(str(e)) from e
        return

    typer.echo("\nFinance Copilot: ask anything about your money. Type exit or quit when done.\n")
    chat_loop(lambda q: service.answer(q, result.output), echo=typer.echo)


@app.command("seed")
def seed_cmd(
    *,
    database_url: DatabaseUrlOpt = None,
    user_id: Annotated[
        str | None, typer.Option("--user-id", help="User to receive the sample dataset.")
    ] = None,
    demo_users: Annotated[
        int, typer.Option("--demo-users", min=0, help="Also seed N randomized demo users.")
    ] = 0,
) -> None:
    """Create the record tables and write sample data."""

    from sqlalchemy.exc import SQLAlchemyError

    from .db import create_schema, make_engine, session_scope
    from .seed import seed_demo_users, seed_sample_user

    settings = _settings()
    url = database_url or settings.database_url
    if not url:
        raise _fail("no database configured; set DATABASE_URL or pass --database-url")

    target = user_id or settings.user_id
    demo_ids = [f"demo-user-{i}" for i in range(1, demo_users + 1)]
    try:
        engine = make_engine(url)
        create_schema(engine)
        with session_scope(engine) as session:
            seed_sample_user(session, target)
            if demo_ids:
                seed_demo_users(session, demo_ids)
    except SQLAlchemyError as e:
        raise _fail(f"seeding failed: {e}") from e

    typer.echo(f"Seeded sample data for {target}.")
    for demo_id in demo_ids:
        typer.echo(f"Seeded demo history for {demo_id}.")


@app.callback()
def _root(
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Logging level (default: FINANCE_COPILOT_LOG_LEVEL or WARNING)."),
    ] = None,
) -> None:
    """Load ``.env`` and configure logging before any command runs."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level, stream=sys.stderr)


def main() -> None:  # pragma: no cover - console script shim
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
