"""Pydantic models for tasks and the form input that creates or edits them."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hypertask import __version__


class Priority(str, Enum):
    """How urgent a task is."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


PRIORITY_VALUES = tuple(p.value for p in Priority)

TITLE_REQUIRED = "Invalid task data: Title is required and cannot be empty."
PRIORITY_INVALID = f"Invalid task data: Priority must be one of {', '.join(PRIORITY_VALUES)}."
DESCRIPTION_INVALID = "Invalid task data: Description must be a string."


def _clean_title(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(TITLE_REQUIRED)
    return value.strip()


def _clean_priority(value: Any) -> Priority:
    if isinstance(value, Priority):
        return value
    if value not in PRIORITY_VALUES:
        raise ValueError(PRIORITY_INVALID)
    return Priority(value)


def _clean_description(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(DESCRIPTION_INVALID)
    return value


class TaskCreate(BaseModel):
    """Fields submitted to create a new task."""

    title: str | None = Field(
        default=None,
        validate_default=True,
        description="The task title (required, blank after trimming is rejected)",
    )
    description: str = Field(default="", description="Free-form details, may be empty")
    priority: Priority = Field(default=Priority.MEDIUM, description="One of low, medium, high")

    @field_validator("title", mode="before")
    @classmethod
    def check_title(cls, value: Any) -> str:
        return _clean_title(value)

    @field_validator("description", mode="before")
    @classmethod
    def check_description(cls, value: Any) -> str:
        return _clean_description(value)

    @field_validator("priority", mode="before")
    @classmethod
    def check_priority(cls, value: Any) -> Priority:
        # An empty select submits "", which means "use the default".
        if value is None or value == "":
            return Priority.MEDIUM
        return _clean_priority(value)


class TaskUpdate(BaseModel):
    """Partial update; only the fields that were submitted are applied."""

    title: str | None = Field(default=None, description="New title for the task")
    description: str | None = Field(default=None, description="New description")
    priority: Priority | None = Field(default=None, description="New priority")

    @field_validator("title", mode="before")
    @classmethod
    def check_title(cls, value: Any) -> str:
        return _clean_title(value)

    @field_validator("description", mode="before")
    @classmethod
    def check_description(cls, value: Any) -> str:
        return _clean_description(value)

    @field_validator("priority", mode="before")
    @classmethod
    def check_priority(cls, value: Any) -> Priority:
        return _clean_priority(value)


class Task(BaseModel):
    """A stored task. Records are immutable and replaced on every change."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Repository-assigned identifier")
    title: str = Field(..., description="The task title")
    description: str = Field(default="", description="Longer description of the task")
    priority: Priority = Field(default=Priority.MEDIUM, description="Task priority")
    completed: bool = Field(default=False, description="Whether the task has been completed")
    created_at: datetime = Field(..., description="When the task was created")


class HealthResponse(BaseModel):
    """Response from the health check endpoint."""

    status: str = "healthy"
    version: str = __version__
