"""Task commands: list, add, edit, delete and the interactive board."""

from datetime import datetime
from typing import Optional

import typer

from todoboard.config import get_config_manager
from todoboard.models import Priority
from todoboard.utils.ui.board_app import run_board
from todoboard.utils.ui.console import get_console
from todoboard.utils.ui.formatters import format_info, format_success, format_tasks

from .decorators import AppError, command_wrapper
from .utils import board_session, date_format, make_tasks_api, see_log

console = get_console()

DATE_FORMATS = ["%Y-%m-%d"]


def _due_text(due: Optional[datetime]) -> str:
    return due.date().isoformat() if due is not None else ""


@command_wrapper
def board(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Open the interactive task board."""
    run_board(make_tasks_api(profile), date_format=date_format(profile))


@command_wrapper
async def list_tasks(
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output format (table, json)"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """List all tasks with their time remaining."""
    output_format = output or get_config_manager(profile).config.output.format
    async with board_session(profile) as task_board:
        if not await task_board.load_tasks():
            raise AppError(see_log("Could not load tasks"))
        format_tasks(task_board.tasks, output_format, date_format=date_format(profile))


@command_wrapper
async def add_task(
    title: str = typer.Option("", "--title", "-t", help="Task title"),
    description: str = typer.Option("", "--description", "-d", help="Task description"),
    due: Optional[datetime] = typer.Option(
        None, "--due", formats=DATE_FORMATS, help="Due date (YYYY-MM-DD)"
    ),
    priority: Priority = typer.Option(Priority.MEDIUM, "--priority", "-p", help="Priority"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Create a task."""
    async with board_session(profile) as task_board:
        task_board.update_new_draft("title", title)
        task_board.update_new_draft("description", description)
        task_board.update_new_draft("due_date", _due_text(due))
        task_board.update_new_draft("priority", priority)

        created = await task_board.add_task()
        if created is None:
            if task_board.validation_errors:
                for message in task_board.validation_errors.values():
                    console.print(f"  - {message}")
                raise typer.Exit(1)
            raise AppError(see_log("Failed to add task"))

    format_success(f"Task created: {created.id}")
    format_tasks([created], date_format=date_format(profile))


@command_wrapper
async def edit_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    description: Optional[str] = typer.Option(
        None, "--description", "-d", help="New description"
    ),
    due: Optional[datetime] = typer.Option(
        None, "--due", formats=DATE_FORMATS, help="New due date (YYYY-MM-DD)"
    ),
    priority: Optional[Priority] = typer.Option(None, "--priority", "-p", help="New priority"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Edit a task. Fields are sent as given, without validation."""
    changes = {
        "title": title,
        "description": description,
        "due_date": _due_text(due) if due is not None else None,
        "priority": priority,
    }
    changes = {field: value for field, value in changes.items() if value is not None}
    if not changes:
        raise AppError("Nothing to change; pass at least one field option")

    async with board_session(profile) as task_board:
        if not await task_board.load_tasks():
            raise AppError(see_log("Could not load tasks"))
        task = task_board.get_task(task_id)
        if task is None:
            raise AppError(f"Task '{task_id}' not found")

        task_board.begin_edit(task)
        for field, value in changes.items():
            task_board.update_edited_draft(field, value)

        updated = await task_board.save_edit()
        if updated is None:
            raise AppError(see_log(f"Failed to update task '{task_id}'"))

    format_success(f"Task updated: {updated.id}")
    format_tasks([updated], date_format=date_format(profile))


@command_wrapper
async def delete_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Delete a task."""
    async with board_session(profile) as task_board:
        if not await task_board.load_tasks():
            raise AppError(see_log("Could not load tasks"))
        task = task_board.get_task(task_id)
        if task is None:
            raise AppError(f"Task '{task_id}' not found")

        if not force:
            confirm = typer.confirm(f"Delete task '{task.title}'?")
            if not confirm:
                format_info("Cancelled")
                raise typer.Exit(0)

        if not await task_board.delete_task(task_id):
            raise AppError(see_log(f"Failed to delete task '{task_id}'"))

    console.print("Done.", style=None)
