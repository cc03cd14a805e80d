import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from pydantic import ValidationError

from . import __version__
from .api import health
from .config import Settings, get_settings
from .logging_config import setup_logging
from .middleware import McpPathMiddleware, RequestLoggingMiddleware
from .providers import Upstreams, build_upstreams
from .server import SERVER_NAME, create_server

logger = logging.getLogger(__name__)


def create_app(settings: Settings, upstreams: Optional[Upstreams] = None) -> FastAPI:
    """HTTP transport: ``/health`` plus the streamable MCP endpoint at ``settings.mcp_http_path``."""
    mcp = create_server(upstreams or build_upstreams(settings))
    mcp_app = mcp.http_app(path=settings.mcp_http_path)

    app = FastAPI(
        title=SERVER_NAME,
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=mcp_app.lifespan,
    )
    app.state.settings = settings
    app.add_middleware(McpPathMiddleware, mcp_path=settings.mcp_http_path)
    # Outermost, so rejected paths are logged too
    app.add_middleware(RequestLoggingMiddleware)

    # Routes must be registered before the catch-all mount
    app.include_router(health.router, tags=["Health"])
    app.mount("/", mcp_app)
    return app


def run_stdio(settings: Settings) -> None:
    # stdout carries the MCP protocol stream
    setup_logging(settings.log_level, stream=sys.stderr)
    mcp = create_server(build_upstreams(settings))
    logger.info("mcp_server_starting", extra={"transport": "stdio"})
    mcp.run(transport="stdio")


def run_http(settings: Settings) -> None:
    setup_logging(settings.log_level)
    app = create_app(settings)
    logger.info(
        "mcp_server_starting",
        extra={
            "transport": "http",
            "url": f"http://{settings.mcp_http_host}:{settings.mcp_http_port}{settings.mcp_http_path}",
        },
    )
    uvicorn.run(
        app,
        host=settings.mcp_http_host,
        port=settings.mcp_http_port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )


def main() -> None:
    try:
        settings = get_settings()
    except ValidationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        sys.exit(1)

    try:
        if settings.mcp_transport == "stdio":
            run_stdio(settings)
        else:
            run_http(settings)
    except Exception as exc:
        print(f"Failed to start {SERVER_NAME}: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
