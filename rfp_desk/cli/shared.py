"""Shared CLI helpers: console, logger and result printing."""

from rich.console import Console
from rich.table import Table

from rfp_desk.models.outputs import CheckResult
from rfp_desk.utils.logger import get_logger

console = Console()
logger = get_logger("rfp_desk.cli")


def print_check_result(result: CheckResult) -> None:
    table = Table(title="Mailbox check", show_header=False)
    table.add_column("field", style="bold")
    table.add_column("value")
    status = "[green]ok[/green]" if result.success else "[red]failed[/red]"
    table.add_row("Status", status)
    table.add_row("Processed", str(result.processed))
    table.add_row("Message", result.message)
    console.print(table)
