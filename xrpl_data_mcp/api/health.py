from typing import Any, Dict

from fastapi import APIRouter, Request

from ..server import SERVER_NAME

router = APIRouter()


@router.get("/health")
async def health_check(request: Request) -> Dict[str, Any]:
    """Liveness probe for the HTTP transport; never touches upstreams."""
    settings = request.app.state.settings
    return {
        "ok": True,
        "name": SERVER_NAME,
        "transport": "streamable-http",
        "endpoint": settings.mcp_http_path,
    }
