"""Exception rendering contract used to document declared errors."""

from typing import Protocol

from .resources import JSONResponse


class ErrorRenderer(Protocol):
    def render(self, exc: BaseException) -> JSONResponse: ...


class DefaultErrorRenderer:
    """Renders ``{"message": ...}`` with the exception's ``status_code`` (500 otherwise)."""

    def render(self, exc: BaseException) -> JSONResponse:
        status_code = getattr(exc, "status_code", 500)
        message = str(exc) or getattr(exc, "message", None) or type(exc).__name__
        return JSONResponse({"message": message}, status_code)
