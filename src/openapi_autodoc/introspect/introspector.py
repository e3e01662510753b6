"""Reads request/response types and documentation off route handlers."""

import builtins
import importlib
import inspect
import sys
import typing

import structlog

from openapi_autodoc.app.requests import FormRequest
from openapi_autodoc.app.routing import Route

from .docstrings import Docstring, parse_docstring

logger = structlog.get_logger()


class RouteIntrospector:
    """Type and docstring metadata for a route's controller action."""

    def request_type(self, route: Route) -> type[FormRequest] | None:
        """The first handler parameter annotated with a FormRequest subclass."""
        handler = route.handler
        if handler is None:
            return None
        hints = _type_hints(handler)
        for name in inspect.signature(handler).parameters:
            annotation = hints.get(name)
            if inspect.isclass(annotation) and issubclass(annotation, FormRequest):
                return annotation
        return None

    def response_type(self, route: Route) -> type | None:
        handler = route.handler
        if handler is None:
            return None
        annotation = _type_hints(handler).get("return")
        if annotation is None or annotation is type(None):
            return None
        return annotation

    def docstring(self, route: Route) -> Docstring:
        handler = route.handler
        return parse_docstring(inspect.getdoc(handler) if handler is not None else None)

    def controller_summary(self, route: Route) -> str:
        return self.docstring(route).summary

    def controller_description(self, route: Route) -> str:
        return self.docstring(route).description

    def controller_name(self, route: Route) -> str:
        """``UserController`` -> ``User``"""
        name = route.controller.__name__ if route.controller else route.action
        head, sep, tail = name.rpartition("Controller")
        return head + tail if sep and head else name

    def declared_error_types(self, route: Route) -> list[type[BaseException]]:
        """Exception classes listed under ``Raises:`` in the handler docstring.

        Short names are looked up in the controller module's namespace, so
        imports and aliases there apply. Names that do not resolve to an
        exception class are dropped.
        """
        errors: list[type[BaseException]] = []
        for name in self.docstring(route).raises:
            error = self._resolve(route, name)
            if error is None:
                logger.info("Declared error type could not be resolved", route=route.uri, error=name)
                continue
            if error not in errors:
                errors.append(error)
        return errors

    def _resolve(self, route: Route, name: str) -> type[BaseException] | None:
        candidate = None
        if "." in name:
            candidate = _import_dotted(name)
        if candidate is None:
            namespace = dict(vars(builtins))
            handler = route.handler
            if handler is not None:
                namespace.update(getattr(handler, "__globals__", {}))
            module = sys.modules.get(route.controller.__module__) if route.controller else None
            if module is not None:
                namespace.update(vars(module))
            candidate = _lookup(namespace, name)
        if inspect.isclass(candidate) and issubclass(candidate, BaseException):
            return candidate
        return None


def _type_hints(func) -> dict:
    try:
        return typing.get_type_hints(func)
    except (NameError, TypeError):
        return dict(getattr(func, "__annotations__", {}))


def _lookup(namespace: dict, name: str):
    head, *rest = name.split(".")
    value = namespace.get(head)
    for part in rest:
        if value is None:
            return None
        value = getattr(value, part, None)
    return value


def _import_dotted(name: str):
    module_name, _, attribute = name.rpartition(".")
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    return getattr(module, attribute, None)
