"""Response kinds a handler may declare as its return type."""

import inspect
import typing
from typing import Any, ClassVar


class JSONResponse:
    """A raw structured response.

    Subclasses whose first constructor parameter is annotated with an entity
    type are documented from a sample of that entity.
    """

    status_code: int = 200

    def __init__(self, data: Any = None, status_code: int | None = None):
        self.data = data
        if status_code is not None:
            self.status_code = status_code

    def get_data(self) -> Any:
        return self.data


class RedirectResponse:
    """A redirect; documented as a 302 without a body."""

    status_code: int = 302

    def __init__(self, location: str = "/"):
        self.location = location


class Resource:
    """Transforms one domain entity into its public representation.

    The wrapped entity type comes from the ``model`` class attribute when
    set, otherwise from the annotation of the constructor's first
    parameter::

        class UserResource(Resource):
            def __init__(self, resource: User):
                super().__init__(resource)
    """

    model: ClassVar[type | None] = None
    status_code: ClassVar[int] = 200
    wrap: ClassVar[str | None] = None

    def __init__(self, resource: Any):
        self.resource = resource

    def to_dict(self) -> dict:
        if hasattr(self.resource, "model_dump"):
            return self.resource.model_dump(mode="json")
        return dict(vars(self.resource))

    def to_response(self) -> JSONResponse:
        data = self.to_dict()
        return JSONResponse({self.wrap: data} if self.wrap else data, self.status_code)

    @classmethod
    def entity_type(cls) -> type | None:
        if cls.model is not None:
            return cls.model
        return first_annotated_parameter(cls.__init__)


class ResourceCollection:
    """A list of entities rendered through the ``collects`` resource."""

    collects: ClassVar[type[Resource] | None] = None
    status_code: ClassVar[int] = 200
    wrap: ClassVar[str | None] = None

    def __init__(self, resources: list[Any]):
        self.resources = list(resources)

    def to_list(self) -> list:
        return [self.collects(item).to_dict() for item in self.resources]

    def to_response(self) -> JSONResponse:
        data = self.to_list()
        return JSONResponse({self.wrap: data} if self.wrap else data, self.status_code)


def first_annotated_parameter(func) -> type | None:
    """The first non-builtin class annotated on a parameter after ``self``."""
    if func is object.__init__:
        return None
    try:
        hints = typing.get_type_hints(func)
    except (NameError, TypeError):
        hints = getattr(func, "__annotations__", {})
    parameters = list(inspect.signature(func).parameters.values())[1:]
    for parameter in parameters:
        annotation = hints.get(parameter.name)
        if inspect.isclass(annotation) and annotation is not Any and annotation.__module__ != "builtins":
            return annotation
    return None
