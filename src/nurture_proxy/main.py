"""FastAPI application entry point."""

import logging
import os
from pathlib import Path

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from nurture_proxy.config import load_server_config
from nurture_proxy.models.config import ServerConfig
from nurture_proxy.routes.config import create_config_router
from nurture_proxy.routes.proxy import create_proxy_router

logger = logging.getLogger(__name__)


def create_app(
    config: ServerConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Loads config from the environment (and NURTURE_PROXY_CONFIG) unless one
    is given. Registers the config and proxy routers, a health endpoint and,
    when ``server.static_dir`` exists, the client bundle.

    Args:
        config: Startup configuration; loaded from the environment if None.
        transport: Optional httpx transport for outbound upstream calls.

    Returns:
        Configured FastAPI application.
    """
    if config is None:
        config = load_server_config()

    app = FastAPI(
        title="Nurture Proxy",
        description="Credential proxy for the maternal-wellness client",
        version="0.1.0",
    )
    app.state.config = config

    if config.server.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.server.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(create_config_router(config))
    app.include_router(create_proxy_router(config, transport=transport))

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    # Mounted last so API routes take precedence
    static_dir = config.server.static_dir
    if static_dir:
        if Path(static_dir).is_dir():
            app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
            logger.info(f"Serving client bundle from {static_dir}")
        else:
            logger.warning(f"Static directory {static_dir} not found; not serving files")

    return app


# Module-level app for uvicorn (e.g., uvicorn nurture_proxy.main:app)
# Left as None when settings cannot be loaded at import time
app: FastAPI | None = None
try:
    app = create_app()
except Exception as e:
    logger.warning(f"Module-level app not created: {e}; use create_app() directly")


def main():
    """Run the application with uvicorn."""
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = load_server_config()
    logger.info(f"Server running on port {config.server.port}")
    uvicorn.run(
        create_app,
        host=config.server.host,
        port=config.server.port,
        reload=False,
        factory=True,
    )


if __name__ == "__main__":
    main()
