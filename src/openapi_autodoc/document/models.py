"""Generated API description.

``Document.to_openapi()`` renders the OpenAPI 3 dictionary.
"""

from typing import Any

from pydantic import BaseModel

from openapi_autodoc.schema.models import SchemaNode

JSON_MEDIA_TYPE = "application/json"
MULTIPART_MEDIA_TYPE = "multipart/form-data"


class Info(BaseModel):
    title: str = "API Specification"
    version: str = "v1"
    description: str = ""


class Tag(BaseModel):
    name: str
    description: str = ""


class Parameter(BaseModel):
    """A query or path parameter."""

    name: str
    location: str  # query / path
    required: bool = False
    description: str = ""
    example: Any = None
    schema_node: SchemaNode

    def to_openapi(self) -> dict:
        data: dict[str, Any] = {"name": self.name, "in": self.location, "required": self.required}
        if self.description:
            data["description"] = self.description
        if self.example is not None:
            data["example"] = self.example
        schema = self.schema_node.to_openapi()
        schema.pop("description", None)
        schema.pop("example", None)
        data["schema"] = schema
        return data


class RequestBody(BaseModel):
    schema_node: SchemaNode
    media_type: str = JSON_MEDIA_TYPE
    required: bool = True

    def to_openapi(self) -> dict:
        return {
            "required": self.required,
            "content": {self.media_type: {"schema": self.schema_node.to_openapi()}},
        }


class Response(BaseModel):
    status_code: int
    description: str
    content: SchemaNode | None = None

    def to_openapi(self) -> dict:
        data: dict[str, Any] = {"description": self.description}
        if self.content is not None:
            data["content"] = {JSON_MEDIA_TYPE: {"schema": self.content.to_openapi()}}
        return data


class Operation(BaseModel):
    method: str
    summary: str = ""
    description: str = ""
    operation_id: str
    tags: list[str] = []
    request_body: RequestBody | None = None
    parameters: list[Parameter] = []
    responses: list[Response] = []

    def to_openapi(self) -> dict:
        data: dict[str, Any] = {"operationId": self.operation_id}
        if self.tags:
            data["tags"] = list(self.tags)
        if self.summary:
            data["summary"] = self.summary
        if self.description:
            data["description"] = self.description
        if self.parameters:
            data["parameters"] = [p.to_openapi() for p in self.parameters]
        if self.request_body is not None:
            data["requestBody"] = self.request_body.to_openapi()
        responses: dict[str, dict] = {}
        for response in self.responses:
            # First response documented for a status code wins.
            responses.setdefault(str(response.status_code), response.to_openapi())
        data["responses"] = responses or {"default": {"description": "Unspecified response"}}
        return data


class PathItem(BaseModel):
    """All operations sharing one URI."""

    path: str
    operations: dict[str, Operation] = {}

    def to_openapi(self) -> dict:
        return {method.lower(): op.to_openapi() for method, op in self.operations.items()}


class Document(BaseModel):
    openapi: str = "3.0.2"
    info: Info = Info()
    servers: list[str] = []
    paths: dict[str, PathItem] = {}
    tags: dict[str, Tag] = {}

    def operation(self, path: str, method: str) -> Operation | None:
        item = self.paths.get(path)
        return item.operations.get(method.upper()) if item else None

    def to_openapi(self) -> dict:
        data: dict[str, Any] = {
            "openapi": self.openapi,
            "info": self.info.model_dump(exclude_defaults=False),
        }
        if self.servers:
            data["servers"] = [{"url": url} for url in self.servers]
        data["paths"] = {path: item.to_openapi() for path, item in self.paths.items()}
        data["tags"] = [tag.model_dump() for tag in self.tags.values()]
        return data
