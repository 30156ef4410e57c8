"""Data models for todoboard."""

from todoboard.models.task import Priority, Task, TaskDraft, ValidationErrors

__all__ = ["Priority", "Task", "TaskDraft", "ValidationErrors"]
