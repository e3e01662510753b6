"""Validated request classes that handlers declare as parameters."""


class FormRequest:
    """A request whose body is validated by ``rules()``.

    Subclasses may define ``documentation_rules()`` to document a body that
    differs from what ``rules()`` validates.
    """

    def rules(self) -> dict:
        return {}


class DocumentableRequest(FormRequest):
    """A request that splits its rules between query string and body."""

    def query_rules(self) -> dict:
        return {}

    def body_rules(self) -> dict:
        return self.rules()


def body_rules(request: FormRequest) -> dict:
    documentation_rules = getattr(request, "documentation_rules", None)
    if callable(documentation_rules):
        return documentation_rules()
    if isinstance(request, DocumentableRequest):
        return request.body_rules()
    return request.rules()


def query_rules(request: FormRequest) -> dict:
    if isinstance(request, DocumentableRequest):
        return request.query_rules()
    return {}
