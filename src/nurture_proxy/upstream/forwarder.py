"""Forward a payload to the upstream API with the server-held key."""

import json
import logging
from typing import Any

import httpx

from nurture_proxy.errors import BadRequestError, UpstreamError

logger = logging.getLogger(__name__)

UPSTREAM_FAILURE_MESSAGE = "Failed to fetch from upstream API"

# Keys of the upstream ``error`` object relayed to callers
RELAYED_ERROR_KEYS = ("code", "message", "status")

MAX_DETAIL_TEXT = 500

REDACTED = "[redacted]"


def build_upstream_url(api_url: str, secret: str) -> httpx.URL:
    """Append ``key=<secret>`` to the caller-supplied URL.

    Raises:
        BadRequestError: If ``api_url`` is not an absolute http(s) URL.
    """
    try:
        url = httpx.URL(api_url)
    except httpx.InvalidURL as e:
        raise BadRequestError(f"Invalid apiUrl: {e}") from e

    if url.scheme not in ("http", "https") or not url.host:
        raise BadRequestError("apiUrl must be an absolute http(s) URL")

    return url.copy_add_param("key", secret)


def check_allowed_host(api_url: str, allowed_hosts: list[str]) -> None:
    """Reject URLs whose host is not allowlisted. Empty list allows any."""
    if not allowed_hosts:
        return
    try:
        host = httpx.URL(api_url).host
    except httpx.InvalidURL as e:
        raise BadRequestError(f"Invalid apiUrl: {e}") from e
    if host not in allowed_hosts:
        raise BadRequestError(f"Upstream host '{host}' is not allowed")


def scrub(value: Any, secret: str) -> Any:
    """Replace every occurrence of ``secret`` in nested strings."""
    if isinstance(value, str):
        return value.replace(secret, REDACTED) if secret else value
    if isinstance(value, dict):
        return {k: scrub(v, secret) for k, v in value.items()}
    if isinstance(value, list):
        return [scrub(v, secret) for v in value]
    return value


def redact_details(body: bytes, secret: str) -> dict[str, Any] | None:
    """Reduce an upstream error body to relayable detail fields."""
    if not body:
        return None

    try:
        data = json.loads(body)
    except ValueError:
        text = body.decode("utf-8", errors="replace")[:MAX_DETAIL_TEXT]
        return {"message": scrub(text, secret)}

    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict):
        details = {k: error[k] for k in RELAYED_ERROR_KEYS if k in error}
    elif isinstance(error, str):
        details = {"message": error}
    else:
        return None

    return scrub(details, secret) or None


def describe_url(url: httpx.URL) -> str:
    """Loggable form of an upstream URL, without the query string."""
    return f"{url.scheme}://{url.host}{url.path}"


async def forward_request(
    api_url: str,
    payload: Any,
    secret: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.Response:
    """POST ``payload`` to ``api_url`` with the key appended.

    One attempt, httpx default timeout.

    Returns:
        The successful (2xx) upstream response.

    Raises:
        BadRequestError: If ``api_url`` is unusable.
        UpstreamError: On a non-2xx status or transport failure.
    """
    url = build_upstream_url(api_url, secret)
    target = describe_url(url)

    async with httpx.AsyncClient(transport=transport) as client:
        try:
            response = await client.post(
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Upstream transport failure target={target} error={type(e).__name__}")
            raise UpstreamError(
                UPSTREAM_FAILURE_MESSAGE,
                status_code=500,
                details={"message": type(e).__name__},
            ) from None

    if not response.is_success:
        details = redact_details(response.content, secret)
        logger.error(
            f"Upstream error target={target} status={response.status_code} details={details}"
        )
        raise UpstreamError(
            UPSTREAM_FAILURE_MESSAGE,
            status_code=response.status_code,
            details=details,
        )

    logger.info(f"Upstream ok target={target} status={response.status_code}")
    return response
