"""Pydantic models for the proxy wire format."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProxyRequest(BaseModel):
    """Request body for POST /api/proxy."""

    model_config = ConfigDict(populate_by_name=True)

    api_url: str = Field(alias="apiUrl")
    payload: Any


class ErrorEnvelope(BaseModel):
    """Error body returned by every failing proxy endpoint."""

    error: str
    details: Any = None
