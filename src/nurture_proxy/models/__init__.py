"""Pydantic models for Nurture Proxy."""

from nurture_proxy.models.config import ProviderConfig, ServerConfig, ServerSettings
from nurture_proxy.models.proxy import ErrorEnvelope, ProxyRequest

__all__ = [
    "ErrorEnvelope",
    "ProviderConfig",
    "ProxyRequest",
    "ServerConfig",
    "ServerSettings",
]
