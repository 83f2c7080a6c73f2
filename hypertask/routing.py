"""Ordered route table for the task API.

Routes are tried in the order they were added and the first one whose
method and path both match wins. Paths use Starlette's template syntax, so
a plain ``{name}`` segment matches any run of characters other than ``/``.
"""

from __future__ import annotations

import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from starlette.convertors import Convertor
from starlette.routing import compile_path

Handler = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class Route:
    method: str
    path: str
    handler: Handler
    pattern: re.Pattern[str] = field(compare=False)
    convertors: dict[str, Convertor] = field(compare=False)

    @classmethod
    def build(cls, method: str, path: str, handler: Handler) -> Route:
        pattern, _, convertors = compile_path(path)
        return cls(method=method.upper(), path=path, handler=handler, pattern=pattern, convertors=convertors)

    def match_path(self, path: str) -> dict[str, Any] | None:
        """Return the converted path parameters, or None when ``path`` doesn't fit."""
        found = self.pattern.match(path)
        if found is None:
            return None
        return {name: self.convertors[name].convert(value) for name, value in found.groupdict().items()}


@dataclass(frozen=True)
class RouteMatch:
    route: Route
    params: dict[str, Any]


class Router:
    """First-match-wins dispatch over (method, path pattern, handler)."""

    def __init__(self) -> None:
        self._routes: list[Route] = []

    @property
    def routes(self) -> tuple[Route, ...]:
        return tuple(self._routes)

    def add(self, method: str, path: str, handler: Handler) -> Route:
        route = Route.build(method, path, handler)
        self._routes.append(route)
        return route

    def match(self, method: str, path: str) -> RouteMatch | None:
        method = method.upper()
        for route in self._routes:
            if route.method != method:
                continue
            params = route.match_path(path)
            if params is not None:
                return RouteMatch(route=route, params=params)
        return None
