"""Framework-neutral route registration.

A request handler is a callable taking (response, request); what those two
objects are is up to the RouteRegister and RouteHandler in use.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

HTTPHandler = Callable[[Any, Any], None]


class RouteRegister(ABC):
    """Something routes can be registered on."""

    @abstractmethod
    def handle(self, method: str, path: str, handler: HTTPHandler) -> None:
        """Register handler for method and path."""


class RouteHandler(ABC):
    """Turns requests into parameters and results into responses."""

    @abstractmethod
    def parse(self, request: Any) -> Any:
        """Return the parameter carried by request; raise if it cannot be read."""

    @abstractmethod
    def write(self, response: Any, result: Any, error: Exception | None) -> None:
        """Write result, or error when it is not None, to response."""


def register_router(
    register: RouteRegister,
    route_handler: RouteHandler,
    method: str,
    path: str,
    func: Callable[[Any], Any],
) -> None:
    """Register a handler that parses the request, calls func and writes the outcome.

    An exception from parsing or from func is passed to write as the error,
    with a result of None.
    """

    def handler(response: Any, request: Any) -> None:
        result: Any = None
        error: Exception | None = None
        try:
            param = route_handler.parse(request)
            result = func(param)
        except Exception as exc:
            error = exc
        route_handler.write(response, result, error)

    register.handle(method, path, handler)


def http_handler_func(handler: Callable[[Any], Any] | None, value: Any) -> HTTPHandler:
    """Return a request handler that calls handler(value), or does nothing if handler is None."""

    def wrapped(response: Any, request: Any) -> None:
        if handler is None:
            return
        handler(value)

    return wrapped


@dataclass
class RouteOption:
    """Per-route settings."""

    need_login: bool = False
    param_format: str = ""  # json | xml
    result_format: str = ""  # json | xml
    use_body: bool = False


@dataclass
class Route:
    """A route with optional child routes."""

    method: str
    path: str
    comment: str = ""
    opt: RouteOption | None = None
    handler: Callable[[Any], Any] | None = None
    childs: list["Route"] = field(default_factory=list)

    def with_childs(self, *args: "Route") -> "Route":
        """Append child routes and return self."""
        self.childs.extend(args)
        return self

    def set_childs(self, *args: "Route") -> "Route":
        """Replace the child routes and return self."""
        self.childs = list(args)
        return self

    def with_option(self, opt: RouteOption | None) -> "Route":
        """Set the option and return self."""
        self.opt = opt
        return self


def new_route(
    method: str,
    path: str,
    comment: str,
    handler: Callable[[Any], Any] | None,
    *args: Route,
) -> Route:
    """Return a route that needs login, with the given children."""
    return Route(
        method=method,
        path=path,
        comment=comment,
        opt=RouteOption(need_login=True),
        handler=handler,
        childs=list(args),
    )