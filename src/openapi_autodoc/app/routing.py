"""Route table contract consumed by the generator."""

import inspect
from typing import Callable, Iterable, Iterator, Protocol

from pydantic import BaseModel, ConfigDict

HTTP_METHODS = ("GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS")


class Route(BaseModel):
    """A registered route.

    ``controller`` is None for dynamic handlers (lambdas, closures, plain
    functions), which cannot be documented.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    uri: str
    methods: tuple[str, ...]
    controller: type | None = None
    action: str
    name: str | None = None

    @property
    def is_dynamic(self) -> bool:
        return self.controller is None

    @property
    def handler(self) -> Callable | None:
        if self.controller is None:
            return None
        return getattr(self.controller, self.action, None)

    @property
    def path(self) -> str:
        return "/" + self.uri.strip("/")


class Router(Protocol):
    def routes(self) -> Iterable[Route]: ...


class RouteTable:
    """In-memory router.

    Handlers are either ``(ControllerClass, "method")`` pairs or callables.
    Registering GET also registers HEAD.
    """

    def __init__(self) -> None:
        self._routes: list[Route] = []

    def routes(self) -> Iterator[Route]:
        return iter(self._routes)

    def add(self, methods: Iterable[str], uri: str, handler, name: str | None = None) -> Route:
        methods = tuple(dict.fromkeys(m.upper() for m in methods))
        unknown = [m for m in methods if m not in HTTP_METHODS]
        if unknown:
            raise ValueError(f"Unsupported HTTP method(s): {', '.join(unknown)}")
        controller, action = _resolve_handler(handler)
        route = Route(uri=uri, methods=methods, controller=controller, action=action, name=name)
        self._routes.append(route)
        return route

    def get(self, uri: str, handler, name: str | None = None) -> Route:
        return self.add(["GET", "HEAD"], uri, handler, name)

    def post(self, uri: str, handler, name: str | None = None) -> Route:
        return self.add(["POST"], uri, handler, name)

    def put(self, uri: str, handler, name: str | None = None) -> Route:
        return self.add(["PUT"], uri, handler, name)

    def patch(self, uri: str, handler, name: str | None = None) -> Route:
        return self.add(["PATCH"], uri, handler, name)

    def delete(self, uri: str, handler, name: str | None = None) -> Route:
        return self.add(["DELETE"], uri, handler, name)


def _resolve_handler(handler) -> tuple[type | None, str]:
    if isinstance(handler, tuple):
        controller, action = handler
        if not inspect.isclass(controller):
            raise TypeError(f"Controller must be a class, got {controller!r}")
        if not callable(getattr(controller, action, None)):
            raise AttributeError(f"{controller.__qualname__} has no action '{action}'")
        return controller, action
    if callable(handler):
        return None, getattr(handler, "__name__", "Closure")
    raise TypeError(f"Cannot route to {handler!r}")
