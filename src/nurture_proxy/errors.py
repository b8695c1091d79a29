"""Proxy error taxonomy and JSON error responses."""

from typing import Any

from starlette.responses import JSONResponse

from nurture_proxy.models.proxy import ErrorEnvelope


class ProxyError(Exception):
    """Base class for errors surfaced to proxy callers."""

    status_code = 500

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ConfigurationError(ProxyError):
    """Raised when a required secret or config value is absent."""

    status_code = 500


class BadRequestError(ProxyError):
    """Raised when caller input is malformed."""

    status_code = 400


class UpstreamError(ProxyError):
    """Raised when the upstream call fails."""

    def __init__(self, message: str, status_code: int = 500, details: Any = None):
        super().__init__(message, details)
        self.status_code = status_code


def make_error_response(
    status_code: int, message: str, details: Any = None
) -> JSONResponse:
    """Create an ``{error, details}`` envelope response."""
    envelope = ErrorEnvelope(error=message, details=details)
    return JSONResponse(
        status_code=status_code,
        content=envelope.model_dump(exclude_none=True),
    )


def error_response_from(exc: ProxyError) -> JSONResponse:
    return make_error_response(exc.status_code, exc.message, exc.details)
