"""Table rendering of command and workflow results."""

from rich.markup import escape
from rich.table import Table

from .formatting import first_line
from .workflow import WorkflowRecord


def create_record_table(record: WorkflowRecord, title: str) -> Table:
    """Create a table with one row per workflow step.

    Args:
        record: Workflow record to display
        title: Table title
    """
    table = Table(title=title, expand=True)

    table.add_column("#", style="dim", width=3, justify="right")
    table.add_column("Command", style="cyan", min_width=20)
    table.add_column("Exit", width=5, justify="center")
    table.add_column("Output", style="white", overflow="ellipsis", min_width=30)

    for i, step in enumerate(record.records, 1):
        color = "green" if step.ok else "red"
        exit_code = f"[{color}]{step.exit_code}[/{color}]"
        # Failing steps show stderr
        output = first_line(step.stdout) if step.ok else first_line(step.stderr or step.stdout)
        table.add_row(str(i), escape(step.command_text), exit_code, escape(output))

    return table
