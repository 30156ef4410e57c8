"""Display helpers shared by the command line and the terminal board."""

import json
import math
from collections.abc import Iterable
from datetime import UTC, date, datetime, timedelta
from typing import Optional

from rich.table import Table
from rich.text import Text

from todoboard.models import Priority, Task
from todoboard.utils.ui.console import get_console

PRIORITY_STYLES = {
    Priority.LOW: "green",
    Priority.MEDIUM: "yellow",
    Priority.HIGH: "bold red",
}

_ONE_DAY = timedelta(days=1)


def _as_utc(value: date | datetime) -> datetime:
    # A bare calendar date is taken as midnight UTC
    if not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def days_remaining(due_date: date | datetime, now: Optional[datetime] = None) -> int:
    """Whole days left until ``due_date``, rounded up.

    The difference is taken on full timestamps, not on calendar days, so the
    result depends on the current time of day.
    """
    if now is None:
        now = datetime.now(UTC)
    return math.ceil((_as_utc(due_date) - _as_utc(now)) / _ONE_DAY)


def time_remaining(due_date: date | datetime, now: Optional[datetime] = None) -> str:
    """Human label for how long is left until a task is due."""
    days = days_remaining(due_date, now)
    if days < 0:
        return "Overdue"
    if days == 0:
        return "Due today"
    return f"{days} day{'s' if days > 1 else ''} remaining"


def format_due_date(due_date: date, date_format: str = "%m/%d/%Y") -> str:
    """Format a due date for display."""
    return due_date.strftime(date_format)


def priority_style(priority: Priority) -> str:
    """Rich style for a priority badge."""
    return PRIORITY_STYLES.get(priority, "")


def format_priority(priority: Priority) -> Text:
    """Priority badge as rich text."""
    return Text(priority.value, style=priority_style(priority))


def build_task_table(
    tasks: Iterable[Task],
    *,
    date_format: str = "%m/%d/%Y",
    now: Optional[datetime] = None,
) -> Table:
    """Build a rich table listing tasks with their time remaining."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Description")
    table.add_column("Due")
    table.add_column("Remaining")
    table.add_column("Priority")

    for task in tasks:
        remaining = time_remaining(task.due_date, now)
        table.add_row(
            task.id,
            task.title,
            task.description,
            format_due_date(task.due_date, date_format),
            Text(remaining, style="red" if remaining == "Overdue" else ""),
            format_priority(task.priority),
        )
    return table


def format_tasks(
    tasks: list[Task],
    output_format: str = "table",
    *,
    date_format: str = "%m/%d/%Y",
) -> None:
    """Print tasks in the requested output format."""
    console = get_console()
    if output_format == "json":
        print(json.dumps([task.to_payload() for task in tasks], indent=2))
        return
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return
    console.print(build_task_table(tasks, date_format=date_format))


def format_error(message: str) -> None:
    """Format and display an error message."""
    get_console().print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    get_console().print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    get_console().print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    get_console().print(f"[bold blue]Info:[/bold blue] {message}")
