"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem/service state.
"""

from __future__ import annotations

import logging
import logging.handlers
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from todoboard.api.tasks import TasksAPI


def _reset_logging() -> None:
    import todoboard.utils.logger as logger_mod

    logger_mod._logger = None
    root = logging.getLogger("todoboard")
    for handler in list(root.handlers):
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            handler.close()
            root.removeHandler(handler)


# ---------------------------------------------------------------------------
# Directory isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_user_dirs(tmp_path):
    """Keep log and config files inside *tmp_path*."""
    import todoboard.config as config_mod

    _reset_logging()
    config_mod._config_manager = None
    with (
        patch("todoboard.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")),
        patch("todoboard.config.user_config_dir", return_value=str(tmp_path / "config")),
    ):
        yield tmp_path
    config_mod._config_manager = None
    _reset_logging()


# ---------------------------------------------------------------------------
# Task service doubles
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_api():
    """A TasksAPI double whose calls all succeed with empty results."""
    api = MagicMock(spec=TasksAPI)
    api.list_tasks = AsyncMock(return_value=[])
    api.create_task = AsyncMock()
    api.update_task = AsyncMock()
    api.delete_task = AsyncMock(return_value=httpx.Response(200))
    api.close = AsyncMock()
    return api
