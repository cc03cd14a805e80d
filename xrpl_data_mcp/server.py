"""FastMCP server assembly."""

from fastmcp import FastMCP

from .api import register_composite_tools, register_passthrough_tools
from .providers import Upstreams

SERVER_NAME = "xrpl-data-mcp"

INSTRUCTIONS = (
    "Read-only XRPL data. Start with resolve_entities when unsure what an identifier is; "
    "composite tools return {data, sources, freshness, warnings} envelopes."
)


def create_server(upstreams: Upstreams) -> FastMCP:
    """Build a server with every tool bound to ``upstreams``."""
    mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS)
    register_passthrough_tools(mcp, upstreams)
    register_composite_tools(mcp, upstreams)
    return mcp
