"""Task board state and the operations that keep it in sync with the service.

:class:`TaskBoard` is the single owner of the task list and the two form
drafts. Both the terminal board and the command line drive it; neither keeps
task state of its own.

Failures talking to the service are written to the application log and
otherwise leave the state as it was. The exception is :meth:`TaskBoard.delete_task`,
which removes the task locally whenever the service answered at all.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx

from todoboard.api.tasks import TasksAPI
from todoboard.models import Task, TaskDraft, ValidationErrors
from todoboard.utils.logger import get_logger

INCOMPLETE_FORM_MESSAGE = "Please fill all fields before submitting the task."


def validate(draft: TaskDraft) -> ValidationErrors:
    """Check a draft before it is created.

    Returns a mapping holding only the fields that failed.
    """
    errors: ValidationErrors = {}
    if not draft.title.strip():
        errors["title"] = "Title is required"
    if not draft.description.strip():
        errors["description"] = "Description is required"
    if not draft.due_date:
        errors["due_date"] = "Due date is required"
    return errors


class TaskBoard:
    """In-memory task list plus create and edit drafts.

    Args:
        api: Tasks API used for every service call
        alert: Called with a message when the user must be stopped, e.g. on
            an incomplete create form. Defaults to logging the message.
    """

    def __init__(
        self,
        api: TasksAPI,
        alert: Callable[[str], Any] | None = None,
    ) -> None:
        self.api = api
        self.alert = alert or self._log_alert
        self.tasks: list[Task] = []
        self.new_draft = TaskDraft()
        self.validation_errors: ValidationErrors = {}
        self.editing_task_id: str | None = None
        self.edited_draft = TaskDraft()
        self.logger = get_logger("board")

    def _log_alert(self, message: str) -> None:
        self.logger.warning("alert: %s", message)

    @property
    def is_editing(self) -> bool:
        return self.editing_task_id is not None

    def get_task(self, task_id: str) -> Task | None:
        """Find a loaded task by ID."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    async def load_tasks(self) -> bool:
        """Replace the task list with the service's collection.

        Returns:
            True if the list was replaced
        """
        try:
            records = await self.api.list_tasks()
        except httpx.HTTPError as e:
            self.logger.error("Failed to fetch tasks: %s", e)
            return False

        self.tasks = [Task.model_validate(record) for record in records]
        self.logger.info("Loaded %d tasks", len(self.tasks))
        return True

    def update_new_draft(self, field: str, value: Any) -> TaskDraft:
        """Set one field of the create form."""
        self.new_draft = self.new_draft.with_field(field, value)
        return self.new_draft

    def update_edited_draft(self, field: str, value: Any) -> TaskDraft:
        """Set one field of the edit form."""
        self.edited_draft = self.edited_draft.with_field(field, value)
        return self.edited_draft

    async def add_task(self) -> Task | None:
        """Validate the create form and send it to the service.

        An incomplete form raises the alert and sends nothing. On a failed
        request the draft is kept so the user can try again.

        Returns:
            The created task, or None if nothing was created
        """
        self.validation_errors = validate(self.new_draft)
        if self.validation_errors:
            self.alert(INCOMPLETE_FORM_MESSAGE)
            return None

        try:
            record = await self.api.create_task(self.new_draft.to_payload())
        except httpx.HTTPError as e:
            self.logger.error("Failed to add task: %s", e)
            return None

        created = Task.model_validate(record)
        self.tasks = [*self.tasks, created]
        self.new_draft = TaskDraft()
        self.validation_errors = {}
        self.logger.info("Created task %s", created.id)
        return created

    async def delete_task(self, task_id: str) -> bool:
        """Delete a task on the service and drop it from the list.

        The response status is not required to be a success: once the
        service has answered, the task is removed locally. If the service
        refused the delete, the list and the service disagree until the next
        :meth:`load_tasks`.

        Returns:
            True if the local list was updated
        """
        try:
            response = await self.api.delete_task(task_id)
        except httpx.HTTPError as e:
            self.logger.error("Error deleting task %s: %s", task_id, e)
            return False

        if not response.is_success:
            self.logger.warning(
                "Delete of task %s answered %d; removed locally anyway",
                task_id,
                response.status_code,
            )
        self.tasks = [task for task in self.tasks if task.id != task_id]
        return True

    def begin_edit(self, task: Task) -> None:
        """Open the edit form on a task."""
        self.editing_task_id = task.id
        self.edited_draft = TaskDraft.from_task(task)

    async def save_edit(self) -> Task | None:
        """Send the edit form to the service.

        The edit form is not validated. On failure the board stays in edit
        mode with the draft untouched.

        Returns:
            The updated task, or None if nothing was saved
        """
        task_id = self.editing_task_id
        if task_id is None:
            self.logger.warning("save_edit called with no task being edited")
            return None

        try:
            record = await self.api.update_task(task_id, self.edited_draft.to_payload())
        except httpx.HTTPError as e:
            self.logger.error("Error editing task %s: %s", task_id, e)
            return None

        updated = Task.model_validate(record)
        self.tasks = [updated if task.id == task_id else task for task in self.tasks]
        self.editing_task_id = None
        self.edited_draft = TaskDraft()
        self.logger.info("Updated task %s", task_id)
        return updated

    def cancel_edit(self) -> None:
        """Leave edit mode without saving."""
        self.editing_task_id = None
        self.edited_draft = TaskDraft()

    async def close(self) -> None:
        await self.api.close()
