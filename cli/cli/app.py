"""mocksink CLI application -- Typer-based developer interface.

Rewrites a job description so its sinks point at mock tables, and prints
the mock DDL or identifier for a single table.  Human-readable output goes
to *stderr* via Rich; the rewritten job and generated SQL go to *stdout* (or
a file) so that pipelines can compose cleanly.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from cli.display import display_mock_report, display_statements

# ---------------------------------------------------------------------------
# App & global state
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="mocksink",
    help="mocksink - redirect SQL job sinks to mock tables for dry runs",
    no_args_is_help=True,
)
console = Console(stderr=True)

# Mutable global options populated by the Typer callback.
_json_output: bool = False


# ---------------------------------------------------------------------------
# Callback -- global options
# ---------------------------------------------------------------------------


@app.callback()
def _global_options(
    json_mode: bool = typer.Option(
        False,
        "--json/--no-json",
        help="Emit the rewritten job and the mocking report as one JSON document on stdout.",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Log level (DEBUG, INFO, WARNING, ERROR).",
        envvar="MOCKSINK_LOG_LEVEL",
    ),
    structured_logs: bool = typer.Option(
        False,
        "--structured-logs",
        help="Emit log records as single-line JSON.",
        envvar="MOCKSINK_STRUCTURED_LOGGING",
    ),
) -> None:
    """Global options applied to every command."""
    from mock_engine.config import load_settings
    from mock_engine.logging_config import configure_logging

    global _json_output  # noqa: PLW0603
    _json_output = json_mode

    overrides: dict[str, object] = {"structured_logging": structured_logs}
    if log_level is not None:
        overrides["log_level"] = log_level
    try:
        settings = load_settings(**overrides)
    except ValidationError as exc:
        console.print(f"[red]Invalid settings: {exc}[/red]")
        raise typer.Exit(code=2) from exc
    configure_logging(settings)


# ---------------------------------------------------------------------------
# rewrite
# ---------------------------------------------------------------------------


@app.command()
def rewrite(
    job_path: Path = typer.Argument(
        ...,
        help="Path to a job JSON file with 'ddl' and 'trans' statement lists.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    out: Path | None = typer.Option(
        None,
        "--out",
        "-o",
        help="Write the rewritten job here instead of stdout.",
    ),
    mock: bool | None = typer.Option(
        None,
        "--mock/--no-mock",
        help="Enable or disable sink mocking. Defaults to MOCKSINK_MOCK_SINK.",
    ),
    show_statements: bool = typer.Option(
        False,
        "--show-statements",
        help="Print the rewritten DDL and transform lists to stderr.",
    ),
) -> None:
    """Redirect the INSERT targets of a job to mock sink tables."""
    from mock_engine.config import load_settings
    from mock_engine.mocking import MockingError, MockStatementExplainer
    from mock_engine.models import JobParam

    try:
        job = JobParam.model_validate_json(job_path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as exc:
        console.print(f"[red]Failed to read job: {exc}[/red]")
        raise typer.Exit(code=2) from exc

    settings = load_settings()
    explainer = MockStatementExplainer.build(settings=settings)
    if mock is not None:
        explainer.mock_sink(mock)

    try:
        mocked, report = explainer.rewrite(job)
    except MockingError as exc:
        console.print(f"[red]Mocking aborted: {exc}[/red]")
        raise typer.Exit(code=1) from exc

    if out is not None:
        out.write_text(mocked.model_dump_json(indent=2) + "\n", encoding="utf-8")
        console.print(f"[green]Rewritten job written to {out}[/green]")

    if _json_output:
        document = {"job": mocked.model_dump(mode="json"), "report": report.model_dump(mode="json")}
        sys.stdout.write(json.dumps(document, indent=2) + "\n")
    elif out is None:
        sys.stdout.write(mocked.model_dump_json(indent=2) + "\n")

    display_mock_report(console, report)
    if show_statements:
        display_statements(console, "DDL", mocked.ddl)
        display_statements(console, "Transforms", mocked.trans)


# ---------------------------------------------------------------------------
# ddl / name
# ---------------------------------------------------------------------------


@app.command()
def ddl(
    table: str = typer.Argument(..., help="Plain name of the sink table."),
    columns: str = typer.Argument(..., help="Column definitions, e.g. 'id INT, amt DOUBLE'."),
    connector: str | None = typer.Option(
        None,
        "--connector",
        help="Connector identifier. Defaults to MOCKSINK_MOCK_CONNECTOR.",
    ),
    drop: bool = typer.Option(
        False,
        "--drop",
        help="Print a DROP TABLE IF EXISTS for the mock table before the CREATE.",
    ),
) -> None:
    """Print the mock CREATE TABLE statement for one sink table."""
    from mock_engine.config import load_settings
    from mock_engine.mocking import drop_mock_sink_ddl, mock_sink_ddl

    if drop:
        sys.stdout.write(drop_mock_sink_ddl(table) + ";\n")
    sys.stdout.write(mock_sink_ddl(table, columns, connector or load_settings().mock_connector) + ";\n")


@app.command()
def name(
    table: str = typer.Argument(..., help="Plain name of the sink table."),
) -> None:
    """Print the fully-qualified mock identifier of a sink table."""
    from mock_engine.mocking import mock_table_name

    sys.stdout.write(mock_table_name(table) + "\n")
