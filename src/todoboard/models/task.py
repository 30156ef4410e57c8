"""Task data models."""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

ValidationErrors = dict[str, str]


class Priority(str, Enum):
    """Priority of a task."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(BaseModel):
    """A task as stored by the task service."""

    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", coerce_numbers_to_str=True
    )

    id: str = Field(
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="_id",
    )
    title: str
    description: str
    due_date: date = Field(alias="dueDate")
    priority: Priority = Priority.MEDIUM

    @field_validator("due_date", mode="before")
    @classmethod
    def _truncate_timestamp(cls, value: Any) -> Any:
        # The service may echo a full ISO timestamp for a date-only field
        if isinstance(value, str) and "T" in value:
            value = datetime.fromisoformat(value)
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.astimezone(timezone.utc)
            return value.date()
        return value

    def to_payload(self) -> dict[str, Any]:
        """Serialize using the service's field names."""
        return self.model_dump(mode="json", by_alias=True)


# Form field names accepted by TaskDraft.with_field, mapped to model attributes
_DRAFT_FIELDS = {
    "title": "title",
    "description": "description",
    "due_date": "due_date",
    "dueDate": "due_date",
    "priority": "priority",
}


class TaskDraft(BaseModel):
    """Unsaved form state for creating or editing a task.

    ``due_date`` holds the raw form text (``YYYY-MM-DD``) and may be empty.
    Drafts are treated as immutable values: every keystroke produces a new
    draft through :meth:`with_field`.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str = ""
    description: str = ""
    due_date: str = Field(default="", alias="dueDate")
    priority: Priority = Priority.MEDIUM

    @classmethod
    def from_task(cls, task: Task) -> TaskDraft:
        """Copy a task's editable fields into a new draft."""
        return cls(
            title=task.title,
            description=task.description,
            due_date=task.due_date.isoformat(),
            priority=task.priority,
        )

    def with_field(self, field: str, value: Any) -> TaskDraft:
        """Return a copy of this draft with one form field replaced."""
        try:
            name = _DRAFT_FIELDS[field]
        except KeyError:
            raise ValueError(f"Unknown task field: {field!r}") from None
        data = self.model_dump()
        data[name] = value
        return type(self).model_validate(data)

    def to_payload(self) -> dict[str, Any]:
        """Request body for the create and update endpoints."""
        return self.model_dump(mode="json", by_alias=True)
