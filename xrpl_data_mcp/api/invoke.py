"""Single conversion point from handler outcomes to MCP tool results."""

import inspect
import logging
from time import perf_counter
from typing import Any, Callable

from fastmcp.exceptions import ToolError

from ..types import ToolEnvelope

_logger = logging.getLogger(__name__)


def supplied(**arguments: Any) -> dict:
    """Keep only the arguments the caller actually provided."""
    return {key: value for key, value in arguments.items() if value is not None}


async def invoke(tool: str, handler: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Run ``handler`` and return its JSON-ready result.

    Any exception becomes a ``ToolError`` whose text is the exception message,
    which FastMCP reports as an ``isError`` result.
    """
    started = perf_counter()
    try:
        result = handler(*args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
    except Exception as exc:
        _logger.warning(
            "tool_error",
            extra={"tool": tool, "error": str(exc), "duration_ms": round((perf_counter() - started) * 1000, 1)},
        )
        raise ToolError(str(exc)) from exc

    _logger.info("tool_call", extra={"tool": tool, "duration_ms": round((perf_counter() - started) * 1000, 1)})
    if isinstance(result, ToolEnvelope):
        return result.to_payload()
    return result
