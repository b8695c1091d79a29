"""Client for the credential proxy. Holds no secrets."""

import logging
from typing import Any

import httpx

from nurture_proxy.models.config import ProviderConfig

logger = logging.getLogger(__name__)

# Upstream model endpoints; the proxy appends the key.
GEMINI_URLS = {
    "flash": "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.5-flash-preview-09-2025:generateContent",
}

DEFAULT_PROXY_URL = "http://127.0.0.1:3000"


class ConfigurationFetchError(Exception):
    """Raised when the provider config cannot be fetched from the proxy."""

    pass


class UpstreamCallError(Exception):
    """Raised when a proxied upstream call fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _envelope_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.reason_phrase


class ProxyClient:
    """Calls the proxy's two endpoints on behalf of client code."""

    def __init__(
        self,
        base_url: str = DEFAULT_PROXY_URL,
        http_client: httpx.Client | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Proxy base URL, used when no ``http_client`` is given.
            http_client: Preconfigured client whose base URL points at the proxy.
        """
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.Client(base_url=base_url)

    def close(self) -> None:
        if self._owns_client:
            self.http_client.close()

    def __enter__(self) -> "ProxyClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def fetch_client_config(self) -> ProviderConfig:
        """Fetch the provider config. Callers should treat failure as fatal.

        Raises:
            ConfigurationFetchError: On a non-success status, network failure
                or an unparsable body.
        """
        try:
            response = self.http_client.get("/api/config")
        except httpx.HTTPError as e:
            logger.error(f"Could not reach proxy for config: {e}")
            raise ConfigurationFetchError(
                "Could not fetch provider config from server."
            ) from e

        if not response.is_success:
            logger.error(f"Config fetch failed status={response.status_code}")
            raise ConfigurationFetchError(
                f"Could not fetch provider config from server: {_envelope_message(response)}"
            )

        try:
            return ProviderConfig.model_validate(response.json())
        except ValueError as e:
            logger.error(f"Config response was not a provider config: {e}")
            raise ConfigurationFetchError(
                "Server returned an invalid provider config."
            ) from e

    def call_upstream(self, url: str, payload: Any) -> Any:
        """Send ``payload`` to the upstream ``url`` through the proxy.

        Returns:
            The parsed upstream response body.

        Raises:
            UpstreamCallError: On a non-success status, network failure or a
                body that is not JSON.
        """
        try:
            response = self.http_client.post(
                "/api/proxy", json={"apiUrl": url, "payload": payload}
            )
        except httpx.HTTPError as e:
            logger.error(f"Error calling proxy: {e}")
            raise UpstreamCallError(f"Proxy error: {e}") from e

        if not response.is_success:
            message = _envelope_message(response)
            logger.error(f"Error from proxy server status={response.status_code} error={message}")
            raise UpstreamCallError(
                f"Proxy error: {message}", status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Upstream returned a non-JSON body status={response.status_code}")
            raise UpstreamCallError(
                "Proxy error: upstream returned a non-JSON response",
                status_code=response.status_code,
            ) from e
