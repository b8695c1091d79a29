"""Configuration models for Nurture Proxy."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProviderConfig(BaseModel):
    """Public identifiers for the managed auth/database provider.

    Serialised to clients with camelCase keys (``apiKey``, ``authDomain``...).
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    api_key: str | None = None
    auth_domain: str | None = None
    project_id: str | None = None
    storage_bucket: str | None = None
    messaging_sender_id: str | None = None
    app_id: str | None = None
    measurement_id: str | None = None

    def missing_fields(self) -> list[str]:
        """Names of fields that are unset or empty."""
        return [
            name
            for name in type(self).model_fields
            if not getattr(self, name)
        ]

    def to_client_dict(self) -> dict[str, str | None]:
        return self.model_dump(by_alias=True)


class ServerSettings(BaseModel):
    """HTTP server settings."""

    model_config = ConfigDict(frozen=True)

    host: str = "0.0.0.0"
    port: int = 3000
    static_dir: str | None = None
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    allowed_upstream_hosts: list[str] = Field(default_factory=list)


class ServerConfig(BaseModel):
    """Root configuration, read once at startup and never mutated."""

    model_config = ConfigDict(frozen=True)

    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    gemini_api_key: str | None = Field(default=None, repr=False)
    server: ServerSettings = Field(default_factory=ServerSettings)
