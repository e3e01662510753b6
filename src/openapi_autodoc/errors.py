"""Exceptions raised while generating documentation.

Every fatal condition aborts the whole run; the CLI turns them into a
non-zero exit without writing any output.
"""


class AutodocError(Exception):
    """Base class for all documentation generation failures."""


class RuleArityError(AutodocError):
    """A rule was given fewer parameters than it needs."""

    def __init__(self, rule: str, count: int, field: str | None = None):
        self.rule = rule
        self.count = count
        self.field = field
        where = f" (field '{field}')" if field else ""
        super().__init__(f"Validation rule {rule} requires at least {count} parameters{where}.")


class UnknownRuleError(AutodocError):
    """A rule keyword has no registered handler and is not a rule object."""

    def __init__(self, rule: str, field: str | None = None):
        self.rule = rule
        self.field = field
        super().__init__(f"Unknown validation rule '{rule}' on field '{field}'.")


class MissingTypeAnnotation(AutodocError):
    """A resource cannot reveal the entity type it wraps."""

    def __init__(self, resource_type: type, hint: str | None = None):
        self.resource_type = resource_type
        name = resource_type.__qualname__
        message = hint or (
            f"The constructor of {name} needs a type in order to document it, "
            f"example: def __init__(self, resource: MyModel)"
        )
        super().__init__(message)


class MissingFactory(AutodocError):
    """A domain entity has no way to produce a sample instance."""

    def __init__(self, entity_type: type):
        self.entity_type = entity_type
        super().__init__(
            f"The model {entity_type.__qualname__} needs a factory() hook to be documented."
        )


class UnsupportedResponseType(AutodocError):
    """A handler's response type is none of the recognised kinds."""

    def __init__(self, response_type: object, route: str | None = None):
        self.response_type = response_type
        self.route = route
        name = getattr(response_type, "__qualname__", repr(response_type))
        where = f" (route {route})" if route else ""
        super().__init__(f"The response {name} is not yet supported and can't be documented{where}.")


class ErrorNotInstantiable(AutodocError):
    """A declared error type cannot be built without arguments."""

    def __init__(self, error_type: type, route: str | None = None):
        self.error_type = error_type
        self.route = route
        where = f" (route {route})" if route else ""
        super().__init__(
            f"The declared error {error_type.__qualname__} must be constructible "
            f"without arguments to be documented{where}."
        )


class UnsupportedValueType(AutodocError):
    """A sampled value is not a string, number, boolean, sequence or mapping."""

    def __init__(self, name: str | None, value: object):
        self.name = name
        self.value = value
        super().__init__(
            f"Value of type {type(value).__name__} for '{name}' can't be documented."
        )


class EmptySequenceUnsupported(AutodocError):
    """An empty sequence gives nothing to infer an item schema from."""

    def __init__(self, name: str | None):
        self.name = name
        super().__init__(f"Cannot infer the item schema of empty sequence '{name}'.")


class ConfigError(AutodocError):
    """The configuration file is missing, unreadable or invalid."""
