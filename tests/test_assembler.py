import pytest

import sample_app
from openapi_autodoc.app.application import Application
from openapi_autodoc.app.requests import FormRequest
from openapi_autodoc.app.routing import RouteTable
from openapi_autodoc.config import GeneratorConfig
from openapi_autodoc.document.assembler import DocumentAssembler, query_name
from openapi_autodoc.document.models import MULTIPART_MEDIA_TYPE
from openapi_autodoc.errors import UnknownRuleError


@pytest.fixture
def app():
    return sample_app.build_app()


@pytest.fixture
def document(app):
    return DocumentAssembler(app).generate()


@pytest.fixture
def spec(document):
    return document.to_openapi()


class TestQueryName:
    def test_plain(self):
        assert query_name("page") == "page"

    def test_wildcard(self):
        assert query_name("tags.*") == "tags[]"

    def test_nested(self):
        assert query_name("address.city") == "address[city]"
        assert query_name("items.*.id") == "items[][id]"


class TestDocument:
    def test_info_from_config(self, app):
        config = GeneratorConfig(title="Shop", version="2.0", servers=["https://api.example.com"])
        spec = DocumentAssembler(app, config).generate().to_openapi()
        assert spec["openapi"] == "3.0.2"
        assert spec["info"]["title"] == "Shop"
        assert spec["info"]["version"] == "2.0"
        assert spec["servers"] == [{"url": "https://api.example.com"}]

    def test_paths(self, spec):
        assert list(spec["paths"]) == [
            "/users",
            "/users/{id}",
            "/users/{id}/avatar",
            "/posts/{id}",
            "/health",
        ]

    def test_dynamic_route_is_skipped(self, document):
        assert "/ping" not in document.paths

    def test_methods_share_one_path_item(self, spec):
        assert list(spec["paths"]["/users/{id}"]) == ["get", "head", "put", "patch", "delete"]
        assert list(spec["paths"]["/users"]) == ["get", "head", "post"]

    def test_tags_are_unique_per_controller(self, spec):
        assert spec["tags"] == [
            {"name": "User", "description": "All user related endpoints"},
            {"name": "Post", "description": "All post related endpoints"},
            {"name": "Status", "description": "All status related endpoints"},
        ]
        assert spec["paths"]["/users"]["post"]["tags"] == ["User"]

    def test_operation_ids(self, spec):
        assert spec["paths"]["/users"]["get"]["operationId"] == "users.index.get"
        assert spec["paths"]["/users"]["head"]["operationId"] == "users.index.head"
        assert spec["paths"]["/users/{id}/avatar"]["post"]["operationId"] == "UserController.avatar.post"

    def test_summary_and_description(self, spec):
        operation = spec["paths"]["/users"]["get"]
        assert operation["summary"] == "List users."
        assert operation["description"] == "Users are returned in creation order."

    def test_resources_sampled_once_per_run(self, app):
        DocumentAssembler(app).generate()
        # users collection, post resource and health response
        assert app.factory.calls == 3


class TestRequestBody:
    def test_json_body_from_rules(self, spec):
        body = spec["paths"]["/users"]["post"]["requestBody"]
        schema = body["content"]["application/json"]["schema"]
        assert schema["type"] == "object"
        assert schema["required"] == ["email", "name"]
        assert list(schema["properties"]) == ["email", "name", "code", "tags", "address"]

    def test_field_schemas(self, spec):
        properties = spec["paths"]["/users"]["post"]["requestBody"]["content"]["application/json"]["schema"]["properties"]
        assert properties["email"]["format"] == "email"
        assert "@" in properties["email"]["example"]
        assert properties["name"]["maxLength"] == 255
        assert properties["name"]["description"] == "The name field is required. The name must be a string. The name must not be greater than 255 characters."
        assert properties["code"]["pattern"] == "^[A-Z]+$"
        assert properties["tags"]["type"] == "array"
        assert properties["tags"]["items"]["type"] == "string"
        assert properties["address"]["properties"]["city"]["type"] == "string"

    def test_file_upload_is_multipart(self, spec):
        body = spec["paths"]["/users/{id}/avatar"]["post"]["requestBody"]
        schema = body["content"][MULTIPART_MEDIA_TYPE]["schema"]
        assert schema["properties"]["avatar"]["type"] == "string"
        assert schema["properties"]["avatar"]["format"] == "binary"
        assert "png" in schema["properties"]["avatar"]["x-extensions"]

    def test_no_rules_no_body(self, spec):
        assert "requestBody" not in spec["paths"]["/users"]["get"]

    def test_custom_messages(self, app):
        config = GeneratorConfig(custom_messages={"email": {"required": "Give us an :attribute."}})
        spec = DocumentAssembler(app, config).generate().to_openapi()
        email = spec["paths"]["/users"]["post"]["requestBody"]["content"]["application/json"]["schema"]["properties"]["email"]
        assert email["description"].startswith("Give us an email.")

    def test_unknown_rule_aborts_the_run(self):
        class BrokenRequest(FormRequest):
            def rules(self):
                return {"name": "required|frobnicate"}

        class BrokenController:
            def store(self, request: BrokenRequest) -> None:
                pass

        router = RouteTable()
        router.post("broken", (BrokenController, "store"))
        with pytest.raises(UnknownRuleError):
            DocumentAssembler(Application(router=router)).generate()


class TestParameters:
    def test_path_parameter(self, spec):
        parameters = spec["paths"]["/users/{id}"]["get"]["parameters"]
        assert parameters == [{"name": "id", "in": "path", "required": True, "schema": {"type": "string"}}]

    def test_optional_path_parameter(self, spec):
        parameters = spec["paths"]["/posts/{id}"]["get"]["parameters"]
        assert parameters[0]["required"] is False

    def test_query_parameters(self, spec):
        parameters = spec["paths"]["/users"]["get"]["parameters"]
        assert [p["name"] for p in parameters] == ["page", "tags[]", "address[city]"]
        assert all(p["in"] == "query" for p in parameters)
        page = parameters[0]
        assert page["schema"] == {"type": "integer", "minimum": 1}
        assert page["required"] is False
        assert page["example"] >= 1
        assert page["description"] == "The page must be an integer. The page must be at least 1."


class TestResponses:
    def test_collection_response(self, spec):
        response = spec["paths"]["/users"]["get"]["responses"]["200"]
        assert response["description"] == "A page of users."
        schema = response["content"]["application/json"]["schema"]
        assert schema["type"] == "array"
        assert schema["items"]["properties"]["email"]["type"] == "string"

    def test_head_has_no_body(self, spec):
        response = spec["paths"]["/users"]["head"]["responses"]["200"]
        assert "content" not in response

    def test_declared_errors(self, spec):
        responses = spec["paths"]["/users/{id}"]["get"]["responses"]
        assert list(responses) == ["200", "404", "403"]
        error = responses["404"]
        assert error["description"] == "The user does not exist."
        properties = error["content"]["application/json"]["schema"]["properties"]
        assert properties["error"]["properties"]["message"]["example"] == "User not found"

    def test_errors_only_on_their_route(self, spec):
        assert list(spec["paths"]["/users/{id}"]["put"]["responses"]) == ["200"]

    def test_wrapped_resource(self, spec):
        response = spec["paths"]["/posts/{id}"]["get"]["responses"]["201"]
        schema = response["content"]["application/json"]["schema"]
        assert schema["properties"]["data"]["properties"]["title"]["type"] == "string"

    def test_redirect(self, spec):
        response = spec["paths"]["/users/{id}"]["delete"]["responses"]["302"]
        assert response == {"description": "Found"}

    def test_no_response_type(self, spec):
        responses = spec["paths"]["/users/{id}/avatar"]["post"]["responses"]
        assert list(responses) == ["default"]

    def test_raw_response(self, spec):
        response = spec["paths"]["/health"]["get"]["responses"]["200"]
        assert response["description"] == "Service health."
        assert response["content"]["application/json"]["schema"]["properties"]["status"]["example"] == "ok"
