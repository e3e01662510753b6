"""Canonical summary of all the validation rules applied to one field."""

from typing import Any

from pydantic import BaseModel

TYPE_STRING = "string"
TYPE_BOOLEAN = "boolean"
TYPE_INTEGER = "integer"
TYPE_NUMBER = "number"
TYPE_OBJECT = "object"
TYPE_ARRAY = "array"
TYPE_FILE = "file"

TYPES = (TYPE_STRING, TYPE_BOOLEAN, TYPE_INTEGER, TYPE_NUMBER, TYPE_OBJECT, TYPE_ARRAY, TYPE_FILE)

NUMERIC_TYPES = (TYPE_INTEGER, TYPE_NUMBER)


class FieldDescriptor(BaseModel):
    """One validated field.

    Scalar attributes (type, min, max, ...) are last-write-wins, ``enum`` and
    ``valid_characters`` accumulate, ``required`` only ever turns on.
    """

    name: str
    type: str | None = None
    required: bool = False
    nullable: bool = False
    min: int | float | None = None
    max: int | float | None = None
    exclusive_min: bool = False
    exclusive_max: bool = False
    enum: list[Any] | None = None
    valid_characters: list[str] = []
    required_characters: list[str] = []
    starts_with: str | None = None
    ends_with: str | None = None
    file_extensions: list[str] | None = None
    pattern: str | None = None
    format: str | None = None
    example: Any = None
    messages: list[str] = []
    raw_rules: list[Any] = []

    def add_enum(self, values: list[Any]) -> None:
        """Union ``values`` into the enum, keeping first-seen order."""
        enum = list(self.enum or [])
        for value in values:
            if not any(_same_literal(value, known) for known in enum):
                enum.append(value)
        self.enum = enum

    def add_valid_characters(self, characters: list[str]) -> None:
        merged = list(self.valid_characters)
        merged.extend(c for c in characters if c not in merged)
        self.valid_characters = merged

    def add_required_character(self, character: str) -> None:
        if character not in self.required_characters:
            self.required_characters = [*self.required_characters, character]

    def add_file_extensions(self, extensions: list[str]) -> None:
        merged = list(self.file_extensions or [])
        merged.extend(e for e in extensions if e not in merged)
        self.file_extensions = merged

    def resolved_type(self) -> str:
        """The type to assume when no rule declared one."""
        return self.type or TYPE_STRING


def _same_literal(a: Any, b: Any) -> bool:
    # True == 1 in Python, but they are distinct enum literals.
    return type(a) is type(b) and a == b
