"""Display helpers for CLI output."""

from click import echo, style
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sqlcase.executor import CaseStatus
from sqlcase.suite import GroupReport, Suite

console = Console()

STATUS_STYLES = {
    CaseStatus.PASSED: "green",
    CaseStatus.FAILED: "bold red",
    CaseStatus.SKIPPED: "yellow",
}


def print_success(message: str):
    echo(style(message, fg="green", bold=True))


def print_info(message: str):
    echo(style(message, fg="blue"))


def print_warning(message: str):
    echo(style(message, fg="yellow", bold=True))


def print_error(message: str):
    echo(style(message, fg="red", bold=True))


def show_inventory(suite: Suite):
    table = Table(title="Case groups", box=box.SIMPLE)
    table.add_column("Group")
    table.add_column("Fixture")
    table.add_column("Enabled")
    for group in suite.groups:
        table.add_row(
            group.name,
            group.path,
            "yes" if group.enabled else f"no ({group.reason or 'disabled'})",
        )
    console.print(table)


def show_report(report: GroupReport):
    group = report.group
    if not group.enabled:
        print_warning(f"{group.name}: skipped ({group.reason or 'disabled'})")
        return
    if report.error is not None:
        print_error(f"{group.name}: setup failed: {report.error}")
        return
    table = Table(title=group.name, box=box.SIMPLE)
    table.add_column("Case")
    table.add_column("Status")
    table.add_column("Detail")
    for result in report.results:
        detail = str(result.error) if result.error else (result.reason or "")
        table.add_row(
            escape(result.name),
            f"[{STATUS_STYLES[result.status]}]{result.status.value}[/]",
            escape(detail),
        )
    console.print(table)
    summary = (
        f"{group.name}: {report.passed} passed, {report.failed} failed, "
        f"{report.skipped} skipped"
    )
    if report.ok:
        print_success(summary)
    else:
        print_error(summary)
