"""Contract for custom rule objects that can document themselves."""

from typing import Protocol, runtime_checkable

from .descriptor import FieldDescriptor


@runtime_checkable
class Parsable(Protocol):
    """A custom rule that applies its own constraints to a descriptor."""

    def parse(self, descriptor: FieldDescriptor) -> None: ...
