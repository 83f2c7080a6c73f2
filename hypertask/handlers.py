"""Endpoint handlers for the task API.

Each handler reads the request, makes one repository call and renders the
outcome. Validation problems become 400s, unknown ids 404s, and anything
unexpected a generic 500 whose cause is only written to the log.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Awaitable, Callable

from fastapi import Request, status
from fastapi.responses import HTMLResponse, JSONResponse, Response

from hypertask.fragments import Severity, render_edit_form, render_error, render_task, render_task_list
from hypertask.repository import Invalid, NotFound, Ok, Outcome, TaskRepository
from hypertask.routing import Router

logger = logging.getLogger(__name__)

TASK_FIELDS = ("title", "description", "priority")
FORM_MEDIA_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

# ?status=... on the list endpoint; any other value lists everything.
STATUS_FILTERS = {"active": False, "completed": True}

TASK_NOT_FOUND = "Task not found."
ENDPOINT_NOT_FOUND = "API endpoint not found."

ResponseHandler = Callable[..., Awaitable[Response]]


class UnsupportedPayload(ValueError):
    """The request body is not form-encoded."""


def wants_json(request: Request) -> bool:
    """True when the client asked for JSON rather than an HTML fragment."""
    if request.headers.get("hx-request") == "true":
        return False
    accept = request.headers.get("accept", "")
    return "application/json" in accept and "text/html" not in accept


def error_response(
    request: Request,
    message: str,
    status_code: int,
    severity: Severity = "danger",
) -> Response:
    """Build an error in the envelope the client negotiated."""
    if wants_json(request):
        return JSONResponse({"error": message}, status_code=status_code)
    return HTMLResponse(render_error(message, severity), status_code=status_code)


def not_found_response(request: Request) -> Response:
    return error_response(request, ENDPOINT_NOT_FOUND, status.HTTP_404_NOT_FOUND)


def outcome_response(request: Request, outcome: Outcome, render: Callable[..., str]) -> Response:
    """Translate a repository outcome into a response."""
    if isinstance(outcome, Ok):
        return HTMLResponse(render(outcome.value))
    if isinstance(outcome, Invalid):
        return error_response(request, outcome.message, status.HTTP_400_BAD_REQUEST, "warning")
    if isinstance(outcome, NotFound):
        logger.debug("Task %s not found", outcome.task_id)
        return error_response(request, TASK_NOT_FOUND, status.HTTP_404_NOT_FOUND)
    raise TypeError(f"Unknown outcome: {outcome!r}")


def guarded(failure_message: str) -> Callable[[ResponseHandler], ResponseHandler]:
    """Answer any exception escaping the handler with a generic 500."""

    def decorator(func: ResponseHandler) -> ResponseHandler:
        @functools.wraps(func)
        async def wrapper(self: TaskHandlers, request: Request, **params: str) -> Response:
            try:
                return await func(self, request, **params)
            except Exception:
                logger.exception("%s failed for %s %s", func.__name__, request.method, request.url.path)
                return error_response(request, failure_message, status.HTTP_500_INTERNAL_SERVER_ERROR)

        return wrapper

    return decorator


async def read_task_fields(request: Request) -> dict[str, object]:
    """Collect the submitted task fields, leaving out the ones not sent.

    A request without a body counts as sending nothing. Any other body must be
    form-encoded.
    """
    content_type = request.headers.get("content-type")
    if content_type is None:
        return {}
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type not in FORM_MEDIA_TYPES:
        raise UnsupportedPayload(f"Expected a form body, got {media_type or 'an empty content type'}")
    async with request.form() as form:
        return {name: form[name] for name in TASK_FIELDS if name in form}


class TaskHandlers:
    """Handlers bound to one repository instance."""

    def __init__(self, repository: TaskRepository) -> None:
        self.repository = repository

    @guarded("Failed to list tasks due to an unexpected error.")
    async def list_tasks(self, request: Request) -> Response:
        completed = STATUS_FILTERS.get(request.query_params.get("status", ""))
        return HTMLResponse(render_task_list(self.repository.list(completed=completed)))

    @guarded("Failed to create task due to an unexpected error.")
    async def create_task(self, request: Request) -> Response:
        fields = await read_task_fields(request)
        return outcome_response(request, self.repository.create(fields), render_task)

    @guarded("Failed to load task due to an unexpected error.")
    async def get_task(self, request: Request, task_id: str) -> Response:
        return outcome_response(request, self.repository.get(task_id), render_task)

    @guarded("Failed to update task due to an unexpected error.")
    async def update_task(self, request: Request, task_id: str) -> Response:
        fields = await read_task_fields(request)
        return outcome_response(request, self.repository.update(task_id, fields), render_task)

    @guarded("Failed to delete task due to an unexpected error.")
    async def delete_task(self, request: Request, task_id: str) -> Response:
        if not self.repository.delete(task_id):
            return error_response(request, TASK_NOT_FOUND, status.HTTP_404_NOT_FOUND)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @guarded("Failed to load the edit form due to an unexpected error.")
    async def edit_form(self, request: Request, task_id: str) -> Response:
        return outcome_response(request, self.repository.get(task_id), render_edit_form)

    @guarded("Failed to toggle task due to an unexpected error.")
    async def toggle_task(self, request: Request, task_id: str) -> Response:
        return outcome_response(request, self.repository.toggle_completion(task_id), render_task)


def build_router(handlers: TaskHandlers) -> Router:
    """The task API route table, in match order."""
    router = Router()
    router.add("GET", "/api/tasks", handlers.list_tasks)
    router.add("POST", "/api/tasks", handlers.create_task)
    router.add("GET", "/api/tasks/{task_id}", handlers.get_task)
    router.add("PUT", "/api/tasks/{task_id}", handlers.update_task)
    router.add("DELETE", "/api/tasks/{task_id}", handlers.delete_task)
    router.add("GET", "/api/tasks/{task_id}/edit", handlers.edit_form)
    router.add("PUT", "/api/tasks/{task_id}/toggle", handlers.toggle_task)
    return router
