"""Answer unknown paths with a JSON hint pointing at the MCP endpoint."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

HEALTH_PATH = "/health"


class McpPathMiddleware(BaseHTTPMiddleware):
    """404 with ``{"error", "message"}`` for anything but /health and the MCP path."""

    def __init__(self, app: ASGIApp, mcp_path: str) -> None:
        super().__init__(app)
        self.mcp_path = mcp_path
        self.allowed = {HEALTH_PATH, mcp_path, mcp_path.rstrip("/") + "/"}

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path not in self.allowed:
            return JSONResponse(
                status_code=404,
                content={"error": "Not Found", "message": f"Use {self.mcp_path} for MCP requests."},
            )
        return await call_next(request)
