"""Walks the route table and assembles the API document."""

import re

import structlog
from faker import Faker

from openapi_autodoc.app.application import Application
from openapi_autodoc.app.requests import FormRequest, body_rules, query_rules
from openapi_autodoc.app.routing import Route
from openapi_autodoc.config import GeneratorConfig
from openapi_autodoc.introspect.introspector import RouteIntrospector
from openapi_autodoc.responses.cache import ShapeCache
from openapi_autodoc.responses.resolver import ResolvedResponse, ResponseResolver
from openapi_autodoc.rules.descriptor import TYPE_FILE, TYPE_STRING, FieldDescriptor
from openapi_autodoc.rules.enricher import DescriptorEnricher
from openapi_autodoc.rules.parser import RuleParser
from openapi_autodoc.schema.builder import SchemaBuilder
from openapi_autodoc.schema.models import SchemaNode

from .models import (
    JSON_MEDIA_TYPE,
    MULTIPART_MEDIA_TYPE,
    Document,
    Info,
    Operation,
    Parameter,
    PathItem,
    RequestBody,
    Response,
    Tag,
)

logger = structlog.get_logger()

PATH_PARAM_RE = re.compile(r"\{(\w+)(\?)?\}")

# Methods whose responses carry no body.
BODILESS_METHODS = {"HEAD"}


def query_name(field_name: str) -> str:
    """``tags.*`` -> ``tags[]``, ``address.city`` -> ``address[city]``"""
    first, *rest = field_name.split(".")
    return first + "".join("[]" if part == "*" else f"[{part}]" for part in rest)


class DocumentAssembler:
    """Produces one Document per ``generate()`` call."""

    def __init__(
        self,
        app: Application,
        config: GeneratorConfig | None = None,
        introspector: RouteIntrospector | None = None,
    ):
        self.app = app
        self.config = config or GeneratorConfig()
        self.introspector = introspector or RouteIntrospector()
        self.builder = SchemaBuilder()

        faker = Faker(self.config.faker_locale)
        if self.config.faker_seed is not None:
            faker.seed_instance(self.config.faker_seed)
        self.rule_parser = RuleParser(faker=faker, custom_messages=self.config.message_overrides())
        self.enricher = DescriptorEnricher(faker=faker)

    def generate(self) -> Document:
        resolver = ResponseResolver(
            factory=self.app.factory,
            error_renderer=self.app.error_renderer,
            cache=ShapeCache(),
            builder=self.builder,
        )
        document = Document(
            openapi=self.config.openapi_version,
            info=Info(
                title=self.config.title,
                version=self.config.version,
                description=self.config.description,
            ),
            servers=list(self.config.servers),
        )

        for route in self.app.router.routes():
            if route.is_dynamic:
                logger.debug("Skipping dynamic route", uri=route.uri, action=route.action)
                continue
            self.add_route(document, route, resolver)

        logger.info("Document generated", paths=len(document.paths), tags=len(document.tags))
        return document

    def add_route(self, document: Document, route: Route, resolver: ResponseResolver) -> None:
        """Add one Operation per HTTP method of ``route`` to its path item."""
        docstring = self.introspector.docstring(route)
        request = self._request(route)
        request_body = self.request_body(request) if request else None
        parameters = self.path_parameters(route.uri)
        if request:
            parameters.extend(self.query_parameters(request))
        tag = self._tag(document, route)

        response_type = self.introspector.response_type(route)
        default = resolver.resolve(response_type, route=route.uri) if response_type is not None else None
        errors = [
            resolver.resolve_error(e, route=route.uri) for e in self.introspector.declared_error_types(route)
        ]

        path = PATH_PARAM_RE.sub(r"{\1}", route.path)
        item = document.paths.setdefault(path, PathItem(path=path))
        for method in route.methods:
            if method in item.operations:
                logger.warning("Duplicate operation ignored", path=path, method=method)
                continue
            has_body = method not in BODILESS_METHODS
            responses = [_response(default, has_body)] if default else []
            responses.extend(_response(error, has_body) for error in errors)
            item.operations[method] = Operation(
                method=method,
                summary=docstring.summary,
                description=docstring.description,
                operation_id=_operation_id(route, method),
                tags=[tag.name],
                request_body=request_body,
                parameters=parameters,
                responses=responses,
            )

    def descriptor(self, field_name: str, rules) -> FieldDescriptor:
        return self.enricher.enrich(self.rule_parser.parse(field_name, rules))

    def request_body(self, request: FormRequest) -> RequestBody | None:
        descriptors = [self.descriptor(name, rules) for name, rules in body_rules(request).items()]
        if not descriptors:
            return None
        schema = self.builder.from_descriptors(descriptors)
        has_file = any(d.type == TYPE_FILE for d in descriptors)
        return RequestBody(
            schema_node=schema,
            media_type=MULTIPART_MEDIA_TYPE if has_file else JSON_MEDIA_TYPE,
        )

    def query_parameters(self, request: FormRequest) -> list[Parameter]:
        parameters = []
        for name, rules in query_rules(request).items():
            descriptor = self.descriptor(name, rules)
            node = self.builder.from_descriptor(descriptor)
            node.type = node.type or TYPE_STRING
            parameters.append(
                Parameter(
                    name=query_name(descriptor.name),
                    location="query",
                    required=descriptor.required,
                    description=node.description or "",
                    example=descriptor.example,
                    schema_node=node,
                )
            )
        return parameters

    def path_parameters(self, uri: str) -> list[Parameter]:
        return [
            Parameter(
                name=name,
                location="path",
                required=not optional,
                schema_node=SchemaNode(name=name, type=TYPE_STRING),
            )
            for name, optional in PATH_PARAM_RE.findall(uri)
        ]

    def _request(self, route: Route) -> FormRequest | None:
        request_type = self.introspector.request_type(route)
        return request_type() if request_type is not None else None

    def _tag(self, document: Document, route: Route) -> Tag:
        name = self.introspector.controller_name(route)
        key = name.lower()
        if key not in document.tags:
            document.tags[key] = Tag(
                name=name[:1].upper() + name[1:],
                description=f"All {key} related endpoints",
            )
        return document.tags[key]


def _response(resolved: ResolvedResponse, has_body: bool) -> Response:
    return Response(
        status_code=resolved.status_code,
        description=resolved.description,
        content=resolved.body if has_body else None,
    )


def _operation_id(route: Route, method: str) -> str:
    base = route.name or f"{route.controller.__name__}.{route.action}"
    return f"{base}.{method.lower()}"
