"""Rich output formatting for the mocksink CLI.

All functions write to a :class:`rich.console.Console` instance (typically
bound to *stderr*) so that machine-readable output on *stdout* is never
polluted with human-readable decoration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

    from mock_engine.models.report import MockReport
    from mock_engine.models.statement import StatementParam


def display_mock_report(console: Console, report: MockReport) -> None:
    """Render a summary of a mocking pass.

    Parameters
    ----------
    console:
        Rich console to write to (typically stderr).
    report:
        The report returned by ``MockStatementExplainer.rewrite``.
    """
    if not report.enabled:
        console.print("[dim]Sink mocking disabled; job left unchanged.[/dim]")
        return

    lines = [
        f"[bold]Inserts rewritten:[/bold] {report.inserts_rewritten}",
        f"[bold]Mock DDL generated:[/bold] {report.ddl_mocked}",
    ]
    console.print(Panel("\n".join(lines), title="Mock sinks", expand=False))

    if report.mocked_tables:
        table = Table(title=f"Sink tables ({len(report.mocked_tables)})", expand=False)
        table.add_column("Table", style="bold")
        table.add_column("Mock DDL")
        for name in report.mocked_tables:
            has_ddl = name not in report.tables_without_ddl
            table.add_row(name, "[green]yes[/green]" if has_ddl else "[yellow]missing[/yellow]")
        console.print(table)

    for statement in report.dropped_statements:
        console.print(f"[red]Dropped unparseable transform:[/red] {statement}")
    for statement in report.unparsed_ddl:
        console.print(f"[yellow]Kept unparseable DDL unchanged:[/yellow] {statement}")


def display_statements(console: Console, title: str, statements: list[StatementParam]) -> None:
    """Render one statement list of a job as a numbered table."""
    if not statements:
        return

    table = Table(title=title, show_lines=True, expand=False)
    table.add_column("#", justify="right")
    table.add_column("Type")
    table.add_column("Statement", overflow="fold")
    for idx, statement in enumerate(statements, start=1):
        table.add_row(str(idx), statement.type.value, statement.value)
    console.print(table)
