"""Documentation-facing schema tree."""

from typing import Any

from pydantic import BaseModel

from openapi_autodoc.rules.descriptor import (
    TYPE_ARRAY,
    TYPE_FILE,
    TYPE_INTEGER,
    TYPE_NUMBER,
    TYPE_OBJECT,
    TYPE_STRING,
)


class SchemaNode(BaseModel):
    """A field or body shape.

    Object nodes hold named ``children``; array nodes hold a single ``items``
    template.
    """

    name: str | None = None
    type: str | None = None
    required: bool = False
    nullable: bool = False
    enum: list[Any] | None = None
    example: Any = None
    description: str | None = None
    format: str | None = None
    pattern: str | None = None
    min: int | float | None = None
    max: int | float | None = None
    exclusive_min: bool = False
    exclusive_max: bool = False
    file_extensions: list[str] | None = None
    children: list["SchemaNode"] = []
    items: "SchemaNode | None" = None

    def child(self, name: str) -> "SchemaNode | None":
        for node in self.children:
            if node.name == name:
                return node
        return None

    def add_child(self, node: "SchemaNode") -> None:
        """Add ``node``, replacing a same-named child in its position."""
        for index, child in enumerate(self.children):
            if child.name == node.name:
                self.children[index] = node
                return
        self.children.append(node)

    def shape(self) -> dict:
        """Structure only (names, types, nesting), without example values."""
        data: dict[str, Any] = {"type": self.type}
        if self.children:
            data["properties"] = {c.name: c.shape() for c in self.children}
        if self.items is not None:
            data["items"] = self.items.shape()
        return data

    def to_openapi(self) -> dict:
        """Render as an OpenAPI 3 schema object."""
        schema: dict[str, Any] = {}
        if self.type == TYPE_FILE:
            schema["type"] = TYPE_STRING
            schema["format"] = "binary"
            if self.file_extensions:
                schema["x-extensions"] = list(self.file_extensions)
        elif self.type is not None:
            schema["type"] = self.type
        if self.format and self.type != TYPE_FILE:
            schema["format"] = self.format
        if self.description:
            schema["description"] = self.description
        if self.nullable:
            schema["nullable"] = True
        if self.enum:
            schema["enum"] = list(self.enum)
        if self.pattern:
            schema["pattern"] = self.pattern
        schema.update(self._bounds())

        if self.type == TYPE_OBJECT or self.children:
            schema.setdefault("type", TYPE_OBJECT)
            if self.children:
                schema["properties"] = {c.name: c.to_openapi() for c in self.children}
            required = [c.name for c in self.children if c.required]
            if required:
                schema["required"] = required
        if self.type == TYPE_ARRAY:
            schema["items"] = self.items.to_openapi() if self.items is not None else {}
        if self.example is not None and not self.children and self.type != TYPE_ARRAY:
            schema["example"] = self.example
        return schema

    def _bounds(self) -> dict:
        if self.min is None and self.max is None:
            return {}
        if self.type in (TYPE_INTEGER, TYPE_NUMBER):
            keys = ("minimum", "maximum")
        elif self.type == TYPE_ARRAY:
            keys = ("minItems", "maxItems")
        elif self.type in (TYPE_STRING, None):
            keys = ("minLength", "maxLength")
        else:
            return {}
        bounds: dict[str, Any] = {}
        if self.min is not None:
            bounds[keys[0]] = self.min
            if self.exclusive_min and keys[0] == "minimum":
                bounds["exclusiveMinimum"] = True
        if self.max is not None:
            bounds[keys[1]] = self.max
            if self.exclusive_max and keys[1] == "maximum":
                bounds["exclusiveMaximum"] = True
        return bounds


SchemaNode.model_rebuild()
