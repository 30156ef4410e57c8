"""Textual TUI for the task board: create form, task list and edit dialog."""

from __future__ import annotations

from rich.text import Text
from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.screen import ModalScreen, Screen
from textual.widgets import Button, Footer, Header, Input, Label, Select, Static

from todoboard.api.tasks import TasksAPI
from todoboard.board import TaskBoard
from todoboard.models import Priority, Task, TaskDraft
from todoboard.utils.ui.formatters import format_due_date, time_remaining

PRIORITY_OPTIONS = [(p.value.capitalize(), p.value) for p in Priority]

# Create form widget id -> draft field
FORM_FIELDS = {
    "title": "title",
    "description": "description",
    "due-date": "due_date",
}


class AlertScreen(ModalScreen[None]):
    """Blocking message box; nothing else is reachable until it is closed."""

    BINDINGS = [Binding("escape,enter", "close", "Close")]

    def __init__(self, message: str):
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="alert-dialog"):
            yield Static(self.message, id="alert-message")
            yield Button("OK", id="alert-ok", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)


class EditTaskScreen(ModalScreen[bool]):
    """Edit dialog bound to the board's edit draft.

    Dismissed with True once the service accepted the change, False on
    cancel. A failed save keeps the dialog open with the typed values.
    """

    app: "TaskBoardApp"

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, board: TaskBoard):
        super().__init__()
        self.board = board

    def compose(self) -> ComposeResult:
        draft = self.board.edited_draft
        with Vertical(id="edit-dialog"):
            yield Label("Edit Task", id="edit-heading")
            yield Input(value=draft.title, placeholder="Task title", id="edit-title")
            yield Input(
                value=draft.description,
                placeholder="Description",
                id="edit-description",
            )
            yield Input(value=draft.due_date, placeholder="YYYY-MM-DD", id="edit-due-date")
            yield Select(
                PRIORITY_OPTIONS,
                value=draft.priority.value,
                allow_blank=False,
                id="edit-priority",
            )
            with Horizontal(id="edit-actions"):
                yield Button("Save", id="save", variant="success")
                yield Button("Cancel", id="cancel")

    @on(Input.Changed)
    def _update_draft(self, event: Input.Changed) -> None:
        field = FORM_FIELDS[event.input.id.removeprefix("edit-")]
        self.board.update_edited_draft(field, event.value)

    @on(Select.Changed, "#edit-priority")
    def _update_priority(self, event: Select.Changed) -> None:
        self.board.update_edited_draft("priority", event.value)

    @on(Button.Pressed, "#save")
    def _on_save(self, event: Button.Pressed) -> None:
        event.stop()
        self.save()

    @on(Button.Pressed, "#cancel")
    def _on_cancel(self, event: Button.Pressed) -> None:
        event.stop()
        self.action_cancel()

    @work(group="board", exit_on_error=False)
    async def save(self) -> None:
        if await self.board.save_edit() is not None:
            await self.app.refresh_tasks()
            self.dismiss(True)

    def action_cancel(self) -> None:
        self.board.cancel_edit()
        self.dismiss(False)


class TaskItem(Horizontal):
    """One row of the task list."""

    class EditRequested(Message):
        def __init__(self, task: Task):
            super().__init__()
            self.task = task

    class DeleteRequested(Message):
        def __init__(self, task_id: str):
            super().__init__()
            self.task_id = task_id

    def __init__(self, task: Task, date_format: str = "%m/%d/%Y"):
        super().__init__(classes="task-item")
        self.model = task
        self.date_format = date_format

    def compose(self) -> ComposeResult:
        task = self.model
        with Vertical(classes="task-content"):
            yield Static(Text(task.title, style="bold"), classes="task-title")
            yield Static(task.description, classes="task-description", markup=False)
            yield Static(
                f"Due: {format_due_date(task.due_date, self.date_format)}",
                classes="task-due",
            )
            yield Static(time_remaining(task.due_date), classes="time-remaining")
            yield Static(
                task.priority.value,
                classes=f"priority-badge {task.priority.value}",
            )
        with Horizontal(classes="task-actions"):
            yield Button("Edit", classes="edit-btn", variant="primary")
            yield Button("Delete", classes="delete-btn", variant="error")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.has_class("edit-btn"):
            self.post_message(self.EditRequested(self.model))
        elif event.button.has_class("delete-btn"):
            self.post_message(self.DeleteRequested(self.model.id))


class TaskBoardApp(App):
    """Single-screen to-do board backed by the task service."""

    TITLE = "todoboard"
    SUB_TITLE = "My To-Do List"

    CSS = """
    #header {
        height: auto;
        padding: 0 1;
    }

    #tagline {
        color: $text-muted;
    }

    #input-group {
        height: auto;
        padding: 0 1;
    }

    .task-input.error {
        border: tall $error;
    }

    .error-message {
        color: $error;
        height: auto;
    }

    #task-list {
        padding: 0 1;
    }

    .task-item {
        height: auto;
        border: round $primary;
        margin-bottom: 1;
    }

    .task-content {
        width: 1fr;
        height: auto;
    }

    .task-actions {
        width: auto;
        height: auto;
    }

    .time-remaining {
        color: $accent;
    }

    .priority-badge.low {
        color: $success;
    }

    .priority-badge.medium {
        color: $warning;
    }

    .priority-badge.high {
        color: $error;
        text-style: bold;
    }

    AlertScreen, EditTaskScreen {
        align: center middle;
    }

    #alert-dialog, #edit-dialog {
        width: 60;
        height: auto;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }

    #edit-actions {
        height: auto;
    }
    """

    BINDINGS = [
        Binding("d", "toggle_dark", "Dark/Light"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, api: TasksAPI, date_format: str = "%m/%d/%Y", **kwargs):
        super().__init__(**kwargs)
        self.board = TaskBoard(api, alert=self.show_alert)
        self.date_format = date_format

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="header"):
            yield Static("[b]My To-Do List[/b]", id="heading")
            yield Static("Stay organized and boost your productivity", id="tagline")
        with Vertical(id="input-group"):
            yield Input(placeholder="Task title", id="title", classes="task-input")
            yield Static("", id="title-error", classes="error-message")
            yield Input(placeholder="Description", id="description", classes="task-input")
            yield Static("", id="description-error", classes="error-message")
            yield Input(placeholder="Due date (YYYY-MM-DD)", id="due-date", classes="task-input")
            yield Static("", id="due-date-error", classes="error-message")
            yield Select(
                PRIORITY_OPTIONS,
                value=Priority.MEDIUM.value,
                allow_blank=False,
                id="priority",
            )
            yield Button("+ Add Task", id="add", variant="success")
        yield VerticalScroll(id="task-list")
        yield Footer()

    def on_mount(self) -> None:
        # One-shot; the list is never polled
        self.load_tasks()

    async def on_unmount(self) -> None:
        await self.board.close()

    @property
    def board_screen(self) -> Screen:
        """The screen holding the form and list, even while a dialog is open."""
        return self.screen_stack[0]

    def show_alert(self, message: str) -> None:
        self.push_screen(AlertScreen(message))

    async def refresh_tasks(self) -> None:
        """Re-render the task list from the board."""
        task_list = self.board_screen.query_one("#task-list", VerticalScroll)
        await task_list.remove_children()
        await task_list.mount_all(
            TaskItem(task, date_format=self.date_format) for task in self.board.tasks
        )

    def _show_errors(self) -> None:
        errors = self.board.validation_errors
        for widget_id, field in FORM_FIELDS.items():
            message = errors.get(field, "")
            self.board_screen.query_one(f"#{widget_id}-error", Static).update(message)
            self.board_screen.query_one(f"#{widget_id}", Input).set_class(bool(message), "error")

    def _sync_form(self, draft: TaskDraft) -> None:
        for widget_id, field in FORM_FIELDS.items():
            self.board_screen.query_one(f"#{widget_id}", Input).value = getattr(draft, field)
        self.board_screen.query_one("#priority", Select).value = draft.priority.value

    @work(group="board", exit_on_error=False)
    async def load_tasks(self) -> None:
        await self.board.load_tasks()
        await self.refresh_tasks()

    @work(group="board", exit_on_error=False)
    async def add_task(self) -> None:
        created = await self.board.add_task()
        self._show_errors()
        if created is not None:
            self._sync_form(self.board.new_draft)
            await self.refresh_tasks()

    @work(group="board", exit_on_error=False)
    async def delete_task(self, task_id: str) -> None:
        if await self.board.delete_task(task_id):
            await self.refresh_tasks()

    @on(Input.Changed, ".task-input")
    def _update_new_draft(self, event: Input.Changed) -> None:
        self.board.update_new_draft(FORM_FIELDS[event.input.id], event.value)

    @on(Select.Changed, "#priority")
    def _update_new_priority(self, event: Select.Changed) -> None:
        self.board.update_new_draft("priority", event.value)

    @on(Button.Pressed, "#add")
    def _on_add(self, event: Button.Pressed) -> None:
        event.stop()
        self.add_task()

    def on_task_item_edit_requested(self, message: TaskItem.EditRequested) -> None:
        self.board.begin_edit(message.task)
        self.push_screen(EditTaskScreen(self.board))

    def on_task_item_delete_requested(self, message: TaskItem.DeleteRequested) -> None:
        self.delete_task(message.task_id)

    def action_toggle_dark(self) -> None:
        self.theme = "textual-light" if self.theme == "textual-dark" else "textual-dark"


def run_board(api: TasksAPI, date_format: str = "%m/%d/%Y") -> None:
    """Run the board until the user quits."""
    TaskBoardApp(api, date_format=date_format).run()
