"""FastAPI application entry point."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from hypertask import __version__
from hypertask.config import Settings
from hypertask.handlers import TaskHandlers, build_router, not_found_response
from hypertask.models import HealthResponse
from hypertask.repository import TaskRepository

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

# Every standard method except OPTIONS, which the CORS middleware answers.
# FastAPI routes do not add HEAD on their own.
API_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "TRACE"]


def create_app(settings: Settings | None = None, repository: TaskRepository | None = None) -> FastAPI:
    """Build the application around one task repository.

    A repository passed in is used as-is; otherwise a new one is created and
    seeded when ``settings.seed`` is set.
    """
    settings = settings or Settings()
    if repository is None:
        repository = TaskRepository()
        if settings.seed:
            repository.seed()

    app = FastAPI(
        title="Hypertask",
        description="Task tracker that answers htmx requests with HTML fragments.",
        version=__version__,
    )
    app.state.settings = settings
    app.state.repository = repository
    app.state.router = build_router(TaskHandlers(repository))

    @app.middleware("http")
    async def cors(request: Request, call_next) -> Response:
        # Pre-flight never reaches routing.
        if request.method == "OPTIONS":
            response = Response(status_code=status.HTTP_204_NO_CONTENT)
        else:
            response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(StarletteHTTPException)
    async def plain_http_error(request: Request, exc: StarletteHTTPException) -> Response:
        # Only the static mount raises these; API errors are rendered by the handlers.
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    @app.get("/api/health", response_model=HealthResponse, tags=["System"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse()

    @app.api_route("/api/{rest:path}", methods=API_METHODS, include_in_schema=False)
    async def dispatch(request: Request) -> Response:
        """Hand every other ``/api`` request to the task route table."""
        matched = app.state.router.match(request.method, request.url.path)
        if matched is None:
            logger.debug("No API route for %s %s", request.method, request.url.path)
            return not_found_response(request)
        return await matched.route.handler(request, **matched.params)

    app.mount("/", StaticFiles(directory=settings.static_dir, html=True, check_dir=False), name="static")
    return app
