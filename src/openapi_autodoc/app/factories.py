"""Sample entity factories."""

from typing import Any, Protocol

from openapi_autodoc.errors import MissingFactory


class SampleFactory(Protocol):
    def make(self, entity_type: type, count: int = 1) -> list[Any]: ...


class ModelFactory:
    """Builds samples through the entity's own ``factory()`` hook.

    ``entity_type.factory()`` must return an object whose ``make(count)``
    returns ``count`` unsaved instances.
    """

    def __init__(self) -> None:
        self.calls = 0

    def make(self, entity_type: type, count: int = 1) -> list[Any]:
        hook = getattr(entity_type, "factory", None)
        if not callable(hook):
            raise MissingFactory(entity_type)
        self.calls += 1
        instances = hook().make(count)
        if not isinstance(instances, list):
            instances = list(instances) if isinstance(instances, (tuple, set)) else [instances]
        for instance in instances:
            _configure(instance)
        return instances


def _configure(instance: Any) -> None:
    init_state = getattr(instance, "init_state", None)
    if callable(init_state):
        init_state()
