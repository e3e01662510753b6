"""Resolve a handler's response type, or a declared error, into a documented response."""

import inspect
from enum import Enum
from http import HTTPStatus
from typing import Any

from pydantic import BaseModel, ConfigDict

from openapi_autodoc.app.factories import SampleFactory
from openapi_autodoc.app.handlers import ErrorRenderer
from openapi_autodoc.app.resources import (
    JSONResponse,
    RedirectResponse,
    Resource,
    ResourceCollection,
    first_annotated_parameter,
)
from openapi_autodoc.errors import ErrorNotInstantiable, MissingTypeAnnotation, UnsupportedResponseType
from openapi_autodoc.introspect.docstrings import parse_docstring
from openapi_autodoc.rules.descriptor import TYPE_ARRAY, TYPE_OBJECT
from openapi_autodoc.schema.builder import SchemaBuilder
from openapi_autodoc.schema.models import SchemaNode

from .cache import ShapeCache


class ResponseKind(str, Enum):
    SINGLE_RESOURCE = "single_resource"
    RESOURCE_COLLECTION = "resource_collection"
    RAW_RESPONSE = "raw_response"
    REDIRECT = "redirect"
    DECLARED_ERROR = "declared_error"


class ResolvedResponse(BaseModel):
    """One documented response: status, description and optional body."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: ResponseKind
    response_type: type
    status_code: int
    description: str
    body: SchemaNode | None = None


class ResponseResolver:
    """Synthesises samples for response types and walks them into schemas."""

    def __init__(
        self,
        factory: SampleFactory,
        error_renderer: ErrorRenderer,
        cache: ShapeCache,
        builder: SchemaBuilder | None = None,
    ):
        self.factory = factory
        self.error_renderer = error_renderer
        self.cache = cache
        self.builder = builder or SchemaBuilder()

    def resolve(self, response_type: Any, has_body: bool = True, route: str | None = None) -> ResolvedResponse:
        """Document the default response of a handler returning ``response_type``."""
        if not inspect.isclass(response_type):
            raise UnsupportedResponseType(response_type, route)
        if issubclass(response_type, ResourceCollection):
            resolved = self._from_collection(response_type)
        elif issubclass(response_type, Resource):
            resolved = self._from_resource(response_type)
        elif issubclass(response_type, JSONResponse):
            resolved = self._from_raw_response(response_type)
        elif issubclass(response_type, RedirectResponse):
            resolved = ResolvedResponse(
                kind=ResponseKind.REDIRECT,
                response_type=response_type,
                status_code=302,
                description=_describe(response_type, 302),
            )
        else:
            raise UnsupportedResponseType(response_type, route)

        if not has_body:
            resolved.body = None
        return resolved

    def resolve_error(self, error_type: type[BaseException], route: str | None = None) -> ResolvedResponse:
        """Document a declared error as the application would render it."""
        try:
            error = error_type()
        except TypeError as e:
            raise ErrorNotInstantiable(error_type, route) from e
        rendered = self.error_renderer.render(error)
        data = rendered.get_data()
        return ResolvedResponse(
            kind=ResponseKind.DECLARED_ERROR,
            response_type=error_type,
            status_code=rendered.status_code,
            description=_describe(error_type, rendered.status_code),
            body=self.builder.from_value(None, data, self._nested) if data is not None else None,
        )

    def resource_schema(self, resource_type: type[Resource]) -> SchemaNode:
        """Schema of one rendered ``resource_type``, computed once per run."""
        entity_type = resource_type.entity_type()
        if entity_type is None:
            raise MissingTypeAnnotation(resource_type)

        def compute() -> SchemaNode:
            sample = self.factory.make(entity_type, 1)[0]
            return self.builder.from_value(None, resource_type(sample).to_dict(), self._nested)

        return self.cache.get_or_compute(resource_type, compute)

    def collection_schema(self, collection_type: type[ResourceCollection]) -> SchemaNode:
        resource_type = collection_type.collects
        if resource_type is None:
            raise MissingTypeAnnotation(
                collection_type,
                f"The resource collection {collection_type.__qualname__} needs a "
                f"'collects' resource in order to document it",
            )
        entity_type = resource_type.entity_type()
        if entity_type is None:
            raise MissingTypeAnnotation(resource_type)

        def compute() -> SchemaNode:
            samples = self.factory.make(entity_type, 2)
            rendered = collection_type(samples).to_list()
            if not rendered:
                return SchemaNode(type=TYPE_ARRAY, items=self.resource_schema(resource_type))
            item = self.cache.get_or_compute(
                resource_type, lambda: self.builder.from_value(None, rendered[0], self._nested)
            )
            return SchemaNode(type=TYPE_ARRAY, items=item)

        return self.cache.get_or_compute(collection_type, compute)

    def _nested(self, name: str | None, value: Any) -> SchemaNode | None:
        """Resources inside a rendered value reuse their cached schemas."""
        if isinstance(value, ResourceCollection):
            node = self.collection_schema(type(value))
        elif isinstance(value, Resource):
            node = self.resource_schema(type(value))
        else:
            return None
        return node.model_copy(update={"name": name})

    def _from_resource(self, resource_type: type[Resource]) -> ResolvedResponse:
        node = self.resource_schema(resource_type)
        return ResolvedResponse(
            kind=ResponseKind.SINGLE_RESOURCE,
            response_type=resource_type,
            status_code=resource_type.status_code,
            description=_describe(resource_type, resource_type.status_code),
            body=_wrap(node, resource_type.wrap),
        )

    def _from_collection(self, collection_type: type[ResourceCollection]) -> ResolvedResponse:
        node = self.collection_schema(collection_type)
        return ResolvedResponse(
            kind=ResponseKind.RESOURCE_COLLECTION,
            response_type=collection_type,
            status_code=collection_type.status_code,
            description=_describe(collection_type, collection_type.status_code),
            body=_wrap(node, collection_type.wrap),
        )

    def _from_raw_response(self, response_type: type[JSONResponse]) -> ResolvedResponse:
        entity_type = first_annotated_parameter(response_type.__init__)
        if entity_type is not None:
            response = response_type(self.factory.make(entity_type, 1)[0])
        else:
            response = response_type()
        data = response.get_data()
        return ResolvedResponse(
            kind=ResponseKind.RAW_RESPONSE,
            response_type=response_type,
            status_code=response.status_code,
            description=_describe(response_type, response.status_code),
            body=self.builder.from_value(None, data, self._nested) if data is not None else None,
        )


def _wrap(node: SchemaNode, key: str | None) -> SchemaNode:
    if not key:
        return node
    return SchemaNode(type=TYPE_OBJECT, children=[node.model_copy(update={"name": key})])


def _describe(cls: type, status_code: int) -> str:
    # Docstrings of this package's base classes describe the library, not the API.
    own = cls.__module__.split(".")[0] == __name__.split(".")[0]
    summary = "" if own else parse_docstring(cls.__doc__).summary
    if summary:
        return summary
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return cls.__name__
