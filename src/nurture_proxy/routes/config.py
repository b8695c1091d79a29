"""Client configuration endpoint."""

import logging

from fastapi import APIRouter

from nurture_proxy.errors import ConfigurationError, error_response_from
from nurture_proxy.models.config import ServerConfig

logger = logging.getLogger(__name__)

CONFIG_ERROR_MESSAGE = "Server configuration error."


def get_client_config(config: ServerConfig) -> dict[str, str | None]:
    """Return the full provider config for the client.

    Raises:
        ConfigurationError: If any provider field is unset or empty.
    """
    missing = config.provider.missing_fields()
    if missing:
        raise ConfigurationError(CONFIG_ERROR_MESSAGE)
    return config.provider.to_client_dict()


def create_config_router(config: ServerConfig) -> APIRouter:
    """Create config router bound to the startup configuration."""
    router = APIRouter()

    @router.get("/api/config")
    async def read_config():
        """Handle GET /api/config."""
        try:
            return get_client_config(config)
        except ConfigurationError as e:
            logger.error(
                f"Provider config keys missing: {config.provider.missing_fields()}"
            )
            return error_response_from(e)

    return router
