"""Unit tests for the task commands: list, add, edit, delete, board."""

from __future__ import annotations

import json
from unittest.mock import patch

import httpx
import pytest
from typer.testing import CliRunner

from todoboard.main import app

from factories import task_record

runner = CliRunner()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(args, mock_api, **kwargs):
    with patch("todoboard.commands.utils.make_tasks_api", return_value=mock_api):
        return runner.invoke(app, args, **kwargs)


def _http_error(method: str = "GET") -> httpx.HTTPError:
    return httpx.ConnectError("refused", request=httpx.Request(method, "https://tasks.test/"))


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


class TestListTasks:
    def test_json_output(self, mock_api):
        mock_api.list_tasks.return_value = [task_record("a"), task_record("b", priority="high")]

        result = _run(["list", "--output", "json"], mock_api)

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert [t["_id"] for t in payload] == ["a", "b"]
        assert payload[1]["priority"] == "high"
        mock_api.close.assert_awaited_once()

    def test_table_output(self, mock_api):
        mock_api.list_tasks.return_value = [task_record("a", title="Walk dog")]

        result = _run(["list"], mock_api)

        assert result.exit_code == 0
        assert "Walk dog" in result.output

    def test_empty(self, mock_api):
        result = _run(["list"], mock_api)

        assert result.exit_code == 0
        assert "No tasks found" in result.output

    def test_load_failure_exits_one(self, mock_api):
        mock_api.list_tasks.side_effect = _http_error()

        result = _run(["list"], mock_api)

        assert result.exit_code == 1
        assert "Could not load tasks" in result.output

    def test_output_format_from_config(self, mock_api):
        from todoboard.config import get_config_manager

        get_config_manager("default").set("output.format", "json")
        mock_api.list_tasks.return_value = [task_record("a")]

        result = _run(["list"], mock_api)

        assert json.loads(result.output)[0]["_id"] == "a"


# ---------------------------------------------------------------------------
# add
# ---------------------------------------------------------------------------


class TestAddTask:
    def test_creates_task(self, mock_api):
        mock_api.create_task.return_value = task_record("new", title="Buy milk", priority="low")

        result = _run(
            [
                "add",
                "--title", "Buy milk",
                "--description", "2%",
                "--due", "2099-01-01",
                "--priority", "low",
            ],
            mock_api,
        )

        assert result.exit_code == 0
        assert "Task created: new" in result.output
        mock_api.create_task.assert_awaited_once_with(
            {"title": "Buy milk", "description": "2%", "dueDate": "2099-01-01", "priority": "low"}
        )

    def test_priority_defaults_to_medium(self, mock_api):
        mock_api.create_task.return_value = task_record("new")

        result = _run(
            ["add", "-t", "Buy milk", "-d", "2%", "--due", "2099-01-01"],
            mock_api,
        )

        assert result.exit_code == 0
        assert mock_api.create_task.await_args.args[0]["priority"] == "medium"

    def test_missing_fields_exit_one(self, mock_api):
        result = _run(["add", "--description", "2%"], mock_api)

        assert result.exit_code == 1
        assert "Please fill all fields" in result.output
        assert "Title is required" in result.output
        assert "Due date is required" in result.output
        assert "Description is required" not in result.output
        mock_api.create_task.assert_not_called()

    def test_blank_title_rejected(self, mock_api):
        result = _run(["add", "-t", "   ", "-d", "2%", "--due", "2099-01-01"], mock_api)

        assert result.exit_code == 1
        assert "Title is required" in result.output

    def test_bad_due_date_rejected_by_parser(self, mock_api):
        result = _run(["add", "-t", "a", "-d", "b", "--due", "01/02/2099"], mock_api)

        assert result.exit_code == 2
        mock_api.create_task.assert_not_called()

    def test_service_failure_exits_one(self, mock_api):
        mock_api.create_task.side_effect = _http_error("POST")

        result = _run(["add", "-t", "a", "-d", "b", "--due", "2099-01-01"], mock_api)

        assert result.exit_code == 1
        assert "Failed to add task" in result.output


# ---------------------------------------------------------------------------
# edit
# ---------------------------------------------------------------------------


class TestEditTask:
    def test_sends_full_draft(self, mock_api):
        mock_api.list_tasks.return_value = [task_record("t1")]
        mock_api.update_task.return_value = task_record("t1", due_date="2099-02-01")

        result = _run(["edit", "t1", "--due", "2099-02-01"], mock_api)

        assert result.exit_code == 0
        assert "Task updated: t1" in result.output
        mock_api.update_task.assert_awaited_once_with(
            "t1",
            {
                "title": "Buy milk",
                "description": "2%",
                "dueDate": "2099-02-01",
                "priority": "medium",
            },
        )

    def test_empty_title_is_not_validated(self, mock_api):
        mock_api.list_tasks.return_value = [task_record("t1")]
        mock_api.update_task.return_value = task_record("t1", title="")

        result = _run(["edit", "t1", "--title", ""], mock_api)

        assert result.exit_code == 0
        assert mock_api.update_task.await_args.args[1]["title"] == ""

    def test_nothing_to_change(self, mock_api):
        result = _run(["edit", "t1"], mock_api)

        assert result.exit_code == 1
        assert "Nothing to change" in result.output
        mock_api.list_tasks.assert_not_called()

    def test_unknown_task(self, mock_api):
        mock_api.list_tasks.return_value = [task_record("t1")]

        result = _run(["edit", "zzz", "-p", "high"], mock_api)

        assert result.exit_code == 1
        assert "Task 'zzz' not found" in result.output
        mock_api.update_task.assert_not_called()

    def test_service_failure_exits_one(self, mock_api):
        mock_api.list_tasks.return_value = [task_record("t1")]
        mock_api.update_task.side_effect = _http_error("PUT")

        result = _run(["edit", "t1", "-p", "high"], mock_api)

        assert result.exit_code == 1
        assert "Failed to update task" in result.output


# ---------------------------------------------------------------------------
# delete
# ---------------------------------------------------------------------------


class TestDeleteTask:
    def test_force_deletes(self, mock_api):
        mock_api.list_tasks.return_value = [task_record("t1")]

        result = _run(["delete", "t1", "--force"], mock_api)

        assert result.exit_code == 0
        assert "Done." in result.output
        mock_api.delete_task.assert_awaited_once_with("t1")

    def test_confirm_yes(self, mock_api):
        mock_api.list_tasks.return_value = [task_record("t1", title="Buy milk")]

        result = _run(["delete", "t1"], mock_api, input="y\n")

        assert result.exit_code == 0
        assert "Delete task 'Buy milk'?" in result.output
        mock_api.delete_task.assert_awaited_once_with("t1")

    def test_confirm_no(self, mock_api):
        mock_api.list_tasks.return_value = [task_record("t1")]

        result = _run(["delete", "t1"], mock_api, input="n\n")

        assert result.exit_code == 0
        assert "Cancelled" in result.output
        mock_api.delete_task.assert_not_called()

    def test_error_status_still_succeeds(self, mock_api):
        mock_api.list_tasks.return_value = [task_record("t1")]
        mock_api.delete_task.return_value = httpx.Response(404)

        result = _run(["delete", "t1", "-f"], mock_api)

        assert result.exit_code == 0

    def test_network_failure_exits_one(self, mock_api):
        mock_api.list_tasks.return_value = [task_record("t1")]
        mock_api.delete_task.side_effect = _http_error("DELETE")

        result = _run(["delete", "t1", "-f"], mock_api)

        assert result.exit_code == 1
        assert "Failed to delete task" in result.output

    def test_unknown_task(self, mock_api):
        result = _run(["delete", "missing", "-f"], mock_api)

        assert result.exit_code == 1
        assert "not found" in result.output


# ---------------------------------------------------------------------------
# board
# ---------------------------------------------------------------------------


class TestBoard:
    def test_runs_board_with_profile_settings(self, mock_api):
        from todoboard.config import get_config_manager

        get_config_manager("work").set("ui.date_format", "%d.%m.%Y")

        with (
            patch("todoboard.commands.tasks.make_tasks_api", return_value=mock_api) as make_api,
            patch("todoboard.commands.tasks.run_board") as run_board,
        ):
            result = runner.invoke(app, ["board", "--profile", "work"])

        assert result.exit_code == 0
        make_api.assert_called_once_with("work")
        run_board.assert_called_once_with(mock_api, date_format="%d.%m.%Y")


@pytest.mark.parametrize("command", ["list", "add", "edit", "delete", "board"])
def test_help(command):
    result = runner.invoke(app, [command, "--help"])
    assert result.exit_code == 0
