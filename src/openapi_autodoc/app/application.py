"""Bundle of the collaborators a documentation run needs."""

import importlib

from .factories import ModelFactory, SampleFactory
from .handlers import DefaultErrorRenderer, ErrorRenderer
from .routing import RouteTable, Router


class Application:
    """The host application as seen by the generator."""

    def __init__(
        self,
        router: Router | None = None,
        factory: SampleFactory | None = None,
        error_renderer: ErrorRenderer | None = None,
    ):
        self.router = router or RouteTable()
        self.factory = factory or ModelFactory()
        self.error_renderer = error_renderer or DefaultErrorRenderer()


def load_application(path: str) -> Application:
    """Import ``"package.module:attribute"``; a callable attribute is called."""
    module_name, _, attribute = path.partition(":")
    if not module_name or not attribute:
        raise ValueError(f"Expected 'module:attribute', got '{path}'")
    module = importlib.import_module(module_name)
    app = getattr(module, attribute)
    if callable(app) and not isinstance(app, Application):
        app = app()
    if not isinstance(app, Application):
        raise TypeError(f"'{path}' is not an Application")
    return app
