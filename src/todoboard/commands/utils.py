"""Shared helpers for commands."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from todoboard.api.client import APIClient
from todoboard.api.tasks import TasksAPI
from todoboard.board import TaskBoard
from todoboard.config import get_config_manager
from todoboard.utils.logger import get_log_file
from todoboard.utils.ui.formatters import format_error


def make_tasks_api(profile: str = "default") -> TasksAPI:
    """Tasks API bound to a profile's endpoint."""
    return TasksAPI(APIClient(profile))


@asynccontextmanager
async def board_session(profile: str = "default") -> AsyncIterator[TaskBoard]:
    """A board for a single command; alerts are printed as errors."""
    board = TaskBoard(make_tasks_api(profile), alert=format_error)
    try:
        yield board
    finally:
        await board.close()


def date_format(profile: str = "default") -> str:
    return get_config_manager(profile).config.ui.date_format


def see_log(message: str) -> str:
    """Point the user at the log file, where service errors are recorded."""
    return f"{message} (details in {get_log_file()})"
