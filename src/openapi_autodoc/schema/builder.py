"""Build schema nodes from rule descriptors or from sampled values."""

from collections.abc import Mapping, Sequence
from typing import Any, Callable, Iterable

from openapi_autodoc.errors import EmptySequenceUnsupported, UnsupportedValueType
from openapi_autodoc.rules.descriptor import (
    TYPE_ARRAY,
    TYPE_BOOLEAN,
    TYPE_INTEGER,
    TYPE_NUMBER,
    TYPE_OBJECT,
    TYPE_STRING,
    FieldDescriptor,
)

from .models import SchemaNode

WILDCARD = "*"

# Returns a node for values it knows how to document, None to fall through.
ValueConverter = Callable[[str | None, Any], SchemaNode | None]


class SchemaBuilder:
    """Converts descriptors and sample data into SchemaNode trees."""

    def from_descriptor(self, descriptor: FieldDescriptor) -> SchemaNode:
        return SchemaNode(
            name=descriptor.name,
            type=descriptor.type,
            required=descriptor.required,
            nullable=descriptor.nullable,
            enum=list(descriptor.enum) if descriptor.enum else None,
            example=descriptor.example,
            description=describe(descriptor.messages),
            format=descriptor.format,
            pattern=descriptor.pattern,
            min=descriptor.min,
            max=descriptor.max,
            exclusive_min=descriptor.exclusive_min,
            exclusive_max=descriptor.exclusive_max,
            file_extensions=descriptor.file_extensions,
        )

    def from_descriptors(
        self, descriptors: Iterable[FieldDescriptor], default_type: str = TYPE_STRING
    ) -> SchemaNode:
        """Fold dotted/wildcard field paths into one object tree.

        ``address.city`` becomes child ``city`` of object ``address`` and
        ``tags.*`` becomes the item template of array ``tags``.
        """
        root = SchemaNode(type=TYPE_OBJECT)
        for descriptor in descriptors:
            segments = descriptor.name.split(".")
            node = self.from_descriptor(descriptor)
            node.name = None if segments[-1] == WILDCARD else segments[-1]
            parent = root
            for index, segment in enumerate(segments[:-1]):
                parent = _container(parent, segment)
                parent.type = parent.type or (TYPE_ARRAY if segments[index + 1] == WILDCARD else TYPE_OBJECT)
            _place(parent, node)
        _fill_types(root, default_type)
        return root

    def from_value(self, name: str | None, value: Any, convert: ValueConverter | None = None) -> SchemaNode:
        """Infer a schema from a sampled value tree.

        ``convert`` is tried first on every value, nested ones included.
        """
        if convert is not None:
            node = convert(name, value)
            if node is not None:
                return node
        # bool before int: bool is an int subclass.
        if isinstance(value, bool):
            return SchemaNode(name=name, type=TYPE_BOOLEAN, example=value)
        if isinstance(value, int):
            return SchemaNode(name=name, type=TYPE_INTEGER, example=value)
        if isinstance(value, float):
            return SchemaNode(name=name, type=TYPE_NUMBER, example=value)
        if isinstance(value, str):
            return SchemaNode(name=name, type=TYPE_STRING, example=value)
        if value is None:
            return SchemaNode(name=name, nullable=True)
        if isinstance(value, Mapping):
            return SchemaNode(
                name=name,
                type=TYPE_OBJECT,
                children=[self.from_value(str(key), item, convert) for key, item in value.items()],
            )
        if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
            if not value:
                raise EmptySequenceUnsupported(name)
            return SchemaNode(name=name, type=TYPE_ARRAY, items=self.from_value(None, value[0], convert))
        raise UnsupportedValueType(name, value)


def describe(messages: list[str]) -> str | None:
    """Join rule messages into one description with normalised whitespace."""
    parts = [" ".join(m.split()) for m in messages]
    text = " ".join(p for p in parts if p)
    return text or None


def _container(parent: SchemaNode, segment: str) -> SchemaNode:
    if segment == WILDCARD:
        if parent.items is None:
            parent.items = SchemaNode()
        return parent.items
    node = parent.child(segment)
    if node is None:
        node = SchemaNode(name=segment)
        parent.add_child(node)
    return node


def _place(parent: SchemaNode, node: SchemaNode) -> None:
    """Attach ``node``, keeping structure already created by deeper paths."""
    existing = parent.items if node.name is None else parent.child(node.name)
    if existing is not None:
        node.children = node.children or existing.children
        node.items = node.items or existing.items
        node.type = node.type or existing.type
    if node.name is None:
        parent.items = node
    else:
        parent.add_child(node)


def _fill_types(node: SchemaNode, default_type: str) -> None:
    for child in node.children:
        _fill_types(child, default_type)
    if node.items is not None:
        _fill_types(node.items, default_type)
    if node.type is None:
        if node.children:
            node.type = TYPE_OBJECT
        elif node.items is not None:
            node.type = TYPE_ARRAY
        else:
            node.type = default_type
