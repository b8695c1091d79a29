"""Configuration loading from the environment and an optional YAML file."""

import logging
import os
import re
from pathlib import Path

import yaml
from dotenv import load_dotenv

from nurture_proxy.models.config import ProviderConfig, ServerConfig, ServerSettings

logger = logging.getLogger(__name__)

ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

DEFAULT_SETTINGS_PATH = "config.yaml"

# Provider field name -> environment variable
PROVIDER_ENV_VARS = {
    "api_key": "FB_API_KEY",
    "auth_domain": "FB_AUTH_DOMAIN",
    "project_id": "FB_PROJECT_ID",
    "storage_bucket": "FB_STORAGE_BUCKET",
    "messaging_sender_id": "FB_MESSAGING_SENDER_ID",
    "app_id": "FB_APP_ID",
    "measurement_id": "FB_MEASUREMENT_ID",
}

GEMINI_KEY_ENV_VAR = "GEMINI_API_KEY"


def substitute_env_vars(value: str) -> str:
    """Replace ${VAR} patterns with environment variable values."""
    if not isinstance(value, str):
        return value

    def replace_match(match: re.Match) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is None:
            raise ValueError(f"Environment variable '{var_name}' not set")
        return env_value

    return ENV_VAR_PATTERN.sub(replace_match, value)


def substitute_env_vars_recursive(obj: dict | list | str) -> dict | list | str:
    """Recursively substitute env vars in a nested structure."""
    if isinstance(obj, dict):
        return {k: substitute_env_vars_recursive(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [substitute_env_vars_recursive(item) for item in obj]
    elif isinstance(obj, str):
        return substitute_env_vars(obj)
    return obj


def load_server_settings(path: Path | None) -> ServerSettings:
    """Load the ``server:`` section of a YAML settings file.

    A missing file yields defaults. ``HOST`` and ``PORT`` environment
    variables override the file.
    """
    data: dict = {}
    if path is not None and path.is_file():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        data = substitute_env_vars_recursive(raw.get("server") or {})
        logger.info(f"Loaded server settings from {path}")

    if os.environ.get("HOST"):
        data["host"] = os.environ["HOST"]
    if os.environ.get("PORT"):
        data["port"] = int(os.environ["PORT"])

    return ServerSettings(**data)


def load_provider_config() -> ProviderConfig:
    """Read provider fields from the environment; unset fields stay None."""
    return ProviderConfig(
        **{field: os.environ.get(var) for field, var in PROVIDER_ENV_VARS.items()}
    )


def load_server_config(settings_path: Path | None = None) -> ServerConfig:
    """Build the process-wide configuration.

    Reads ``.env`` if present (real environment variables win), then the
    provider fields, the generative-AI key and the server settings.
    """
    load_dotenv(override=False)

    if settings_path is None:
        settings_path = Path(
            os.environ.get("NURTURE_PROXY_CONFIG", DEFAULT_SETTINGS_PATH)
        )

    config = ServerConfig(
        provider=load_provider_config(),
        gemini_api_key=os.environ.get(GEMINI_KEY_ENV_VAR) or None,
        server=load_server_settings(settings_path),
    )

    missing = config.provider.missing_fields()
    if missing:
        logger.warning(f"Provider config incomplete, missing: {missing}")
    if not config.gemini_api_key:
        logger.warning(f"{GEMINI_KEY_ENV_VAR} is not set; /api/proxy will fail")

    return config
