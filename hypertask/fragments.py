"""HTML fragments swapped into the page by the htmx client.

Every function here is pure: a task (or message) in, an HTML string out.
The ``task-<id>`` element id is what the client targets for in-place
replacement, so the row, the edit form and all of their controls agree on it.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Literal

from hypertask.markup import (
    ButtonOptions,
    CheckboxOptions,
    HxAttributes,
    escape,
    render_button,
    render_checkbox,
    render_element,
    render_icon,
)
from hypertask.models import Priority, Task

Severity = Literal["danger", "warning"]

PRIORITY_VARIANTS = {
    Priority.HIGH: "danger",
    Priority.MEDIUM: "primary",
    Priority.LOW: "success",
}

_SEVERITY_ICONS = {
    "danger": "exclamation-octagon",
    "warning": "exclamation-triangle",
}

EMPTY_STATE_MESSAGE = "No tasks found. Add your first task above."
DELETE_CONFIRMATION = "Are you sure you want to delete this task?"

_DESCRIPTION_STYLE = "margin-left: 1.75rem; color: var(--sl-color-neutral-600); font-size: 0.875rem;"


def task_element_id(task: Task) -> str:
    return f"task-{task.id}"


def task_url(task: Task) -> str:
    return f"/api/tasks/{task.id}"


def _swap_into(task: Task, **hx: str) -> HxAttributes:
    """htmx attributes that replace the task's element with the response."""
    return HxAttributes(target=f"#{task_element_id(task)}", swap="outerHTML", **hx)


def render_task(task: Task) -> str:
    """Render the read-only row for a task."""
    url = task_url(task)
    title = render_element("span", {"class": "task-complete" if task.completed else None}, escape(task.title))
    checkbox = render_checkbox(
        CheckboxOptions(
            label_html=title,
            checked=task.completed,
            hx=_swap_into(task, put=f"{url}/toggle", trigger="change"),
        )
    )
    description = render_element("div", {"style": _DESCRIPTION_STYLE}, escape(task.description))

    badge = render_element("sl-badge", {"variant": PRIORITY_VARIANTS[task.priority]}, escape(task.priority.value))
    trigger = render_element(
        "sl-button",
        {"slot": "trigger", "size": "small", "variant": "neutral", "circle": True},
        render_icon("three-dots-vertical"),
    )
    edit_item = render_element(
        "sl-menu-item",
        _swap_into(task, get=f"{url}/edit").to_attributes(),
        render_icon("pencil", slot="prefix") + "Edit",
    )
    delete_item = render_element(
        "sl-menu-item",
        _swap_into(task, delete=url, confirm=DELETE_CONFIRMATION).to_attributes(),
        render_icon("trash", slot="prefix") + "Delete",
    )
    menu = render_element("sl-dropdown", {}, trigger + render_element("sl-menu", {}, edit_item + delete_item))

    return render_element(
        "div",
        {"id": task_element_id(task), "class": "task-item"},
        render_element("div", {}, checkbox + description) + render_element("div", {}, badge + menu),
    )


def render_task_list(tasks: Iterable[Task]) -> str:
    """Render every task in order, or the empty state when there are none."""
    rendered = "".join(render_task(task) for task in tasks)
    return rendered or render_empty_state()


def render_edit_form(task: Task) -> str:
    """Render the inline edit form that replaces a task's row."""
    url = task_url(task)
    title = render_element(
        "sl-input",
        {"name": "title", "required": True, "placeholder": "Task title", "value": task.title},
    )
    description = render_element(
        "sl-textarea",
        {"name": "description", "placeholder": "Description"},
        escape(task.description),
    )
    options = "".join(
        render_element("sl-option", {"value": priority.value}, priority.value.capitalize()) for priority in Priority
    )
    priority = render_element(
        "sl-select",
        {"name": "priority", "placeholder": "Select priority", "value": task.priority.value},
        options,
    )
    cancel = render_button(
        ButtonOptions(label="Cancel", type="button", variant="neutral", hx=_swap_into(task, get=url))
    )
    save = render_button(ButtonOptions(label="Save", type="submit", variant="primary"))
    actions = render_element("div", {"class": "form-actions"}, cancel + save)

    attributes = {"class": "task-form edit-task-form"}
    attributes.update(_swap_into(task, put=url).to_attributes())
    return render_element("form", attributes, title + description + priority + actions)


def render_empty_state() -> str:
    return render_element(
        "sl-alert",
        {"variant": "neutral", "open": True},
        render_icon("info-circle", slot="icon") + EMPTY_STATE_MESSAGE,
    )


def render_error(message: str, severity: Severity = "danger") -> str:
    """Render a closable alert; ``severity`` only picks the look, not the status."""
    return render_element(
        "sl-alert",
        {"variant": severity, "open": True, "closable": True},
        render_icon(_SEVERITY_ICONS[severity], slot="icon") + escape(message),
    )
