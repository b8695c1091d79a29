"""Secure forwarding endpoint for generative-AI calls."""

import json
import logging
from typing import Any

import httpx
from fastapi import APIRouter, Request
from fastapi.responses import Response
from pydantic import ValidationError

from nurture_proxy.errors import (
    BadRequestError,
    ConfigurationError,
    ProxyError,
    error_response_from,
)
from nurture_proxy.models.config import ServerConfig
from nurture_proxy.models.proxy import ProxyRequest
from nurture_proxy.upstream.forwarder import check_allowed_host, forward_request

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "API key not configured on server."
MISSING_FIELDS_MESSAGE = "Missing apiUrl or payload"


def is_missing_payload(payload: Any) -> bool:
    """Null, empty string, false and zero count as missing; empty objects do not."""
    if isinstance(payload, (dict, list)):
        return False
    return not payload


def parse_proxy_request(raw: bytes) -> ProxyRequest:
    """Parse and validate a POST /api/proxy body.

    Raises:
        BadRequestError: If the body is not an object with a non-empty
            ``apiUrl`` string and a present ``payload``.
    """
    try:
        body = json.loads(raw) if raw else None
    except ValueError:
        raise BadRequestError(MISSING_FIELDS_MESSAGE) from None

    if not isinstance(body, dict):
        raise BadRequestError(MISSING_FIELDS_MESSAGE)

    try:
        request = ProxyRequest.model_validate(body)
    except ValidationError:
        raise BadRequestError(MISSING_FIELDS_MESSAGE) from None

    if not request.api_url or is_missing_payload(request.payload):
        raise BadRequestError(MISSING_FIELDS_MESSAGE)

    return request


def create_proxy_router(
    config: ServerConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> APIRouter:
    """Create proxy router.

    Args:
        config: Startup configuration holding the secret key.
        transport: Optional httpx transport for outbound calls.
    """
    router = APIRouter()

    @router.post("/api/proxy")
    async def proxy(request: Request):
        """Handle POST /api/proxy."""
        try:
            if not config.gemini_api_key:
                raise ConfigurationError(MISSING_KEY_MESSAGE)

            proxy_request = parse_proxy_request(await request.body())
            check_allowed_host(
                proxy_request.api_url, config.server.allowed_upstream_hosts
            )

            upstream = await forward_request(
                proxy_request.api_url,
                proxy_request.payload,
                config.gemini_api_key,
                transport=transport,
            )
        except ProxyError as e:
            if isinstance(e, ConfigurationError):
                logger.error(e.message)
            else:
                logger.warning(f"Proxy request failed status={e.status_code} error={e.message}")
            return error_response_from(e)

        return Response(
            content=upstream.content,
            status_code=200,
            media_type="application/json",
        )

    return router
