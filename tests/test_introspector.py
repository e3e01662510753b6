from structlog.testing import capture_logs

import sample_app
import shop_errors
from openapi_autodoc.app.routing import Route
from openapi_autodoc.introspect.docstrings import parse_docstring
from openapi_autodoc.introspect.introspector import RouteIntrospector


def _route(controller, action, uri="users"):
    return Route(uri=uri, methods=("GET",), controller=controller, action=action)


class TestParseDocstring:
    def test_empty(self):
        doc = parse_docstring(None)
        assert (doc.summary, doc.description, doc.raises) == ("", "", [])

    def test_summary_and_description(self):
        doc = parse_docstring("""List users.

        Users are returned
        in creation order.

        Deleted users are hidden.
        """)
        assert doc.summary == "List users."
        assert doc.description == "Users are returned\nin creation order.\n\nDeleted users are hidden."

    def test_google_raises_section(self):
        doc = parse_docstring("""Show one user.

        Args:
            id: The user id.

        Raises:
            UserNotFound: When no user has this id.
                Continuation lines are ignored.
            errors.Forbidden: When the caller may not see it.
        """)
        assert doc.summary == "Show one user."
        assert doc.description == ""
        assert doc.raises == ["UserNotFound", "errors.Forbidden"]

    def test_sphinx_raises(self):
        doc = parse_docstring("""Delete a user.

        :param id: The user id.
        :raises UserNotFound: When no user has this id.
        """)
        assert doc.raises == ["UserNotFound"]
        assert doc.description == ""


class TestRouteIntrospector:
    def setup_method(self):
        self.introspector = RouteIntrospector()

    def test_request_type(self):
        route = _route(sample_app.UserController, "update")
        assert self.introspector.request_type(route) is sample_app.StoreUserRequest

    def test_no_request_type(self):
        assert self.introspector.request_type(_route(sample_app.UserController, "show")) is None

    def test_response_type(self):
        route = _route(sample_app.UserController, "index")
        assert self.introspector.response_type(route) is sample_app.UserCollection

    def test_none_return_means_no_response_type(self):
        assert self.introspector.response_type(_route(sample_app.UserController, "avatar")) is None

    def test_summary_and_description(self):
        route = _route(sample_app.UserController, "index")
        assert self.introspector.controller_summary(route) == "List users."
        assert self.introspector.controller_description(route) == "Users are returned in creation order."

    def test_controller_name(self):
        assert self.introspector.controller_name(_route(sample_app.UserController, "index")) == "User"
        assert self.introspector.controller_name(_route(sample_app.StatusController, "health")) == "Status"

    def test_declared_errors_resolve_aliases_and_modules(self):
        route = _route(sample_app.UserController, "show", "users/{id}")
        errors = self.introspector.declared_error_types(route)
        assert errors == [shop_errors.UserNotFound, shop_errors.Forbidden]

    def test_unresolvable_error_is_logged_and_dropped(self):
        route = _route(sample_app.UserController, "show", "users/{id}")
        with capture_logs() as logs:
            self.introspector.declared_error_types(route)
        assert any(log.get("error") == "NotImportedAnywhere" for log in logs)

    def test_no_declared_errors(self):
        assert self.introspector.declared_error_types(_route(sample_app.UserController, "store")) == []
