"""Naming helpers for MCP tool registration."""

from __future__ import annotations

import functools
import json
import logging
import time
from typing import Any, Callable

from mcp.server.fastmcp import FastMCP
from mcp.types import TextContent

logger = logging.getLogger(__name__)


def _minify_response(result: dict[str, Any]) -> TextContent:
    """Convert dict to TextContent with minified JSON."""
    return TextContent(
        type="text",
        text=json.dumps(result, separators=(",", ":"), ensure_ascii=False, default=str),
    )


def canonical_tool(
    mcp: FastMCP,
    *,
    canonical_name: str,
    **tool_kwargs: Any,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator that registers a tool under its canonical name.

    Tool names use dashes (``analyze-project``), which are not valid Python
    identifiers, so the function name and the MCP name differ. The wrapper
    also logs call duration and failures, and serializes dict results as
    minified JSON.

    Args:
        mcp: FastMCP instance
        canonical_name: The canonical name for the tool
        **tool_kwargs: Additional kwargs passed to mcp.tool()

    Returns:
        Decorated function registered as an MCP tool
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.warning(
                    f"Tool {canonical_name} failed after {duration_ms:.1f}ms: {e}",
                    extra={
                        "tool": canonical_name,
                        "error_type": type(e).__name__,
                        "duration_ms": round(duration_ms, 2),
                    },
                )
                raise
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.debug(
                f"Tool {canonical_name} completed in {duration_ms:.1f}ms",
                extra={"tool": canonical_name, "duration_ms": round(duration_ms, 2)},
            )
            if isinstance(result, dict):
                return _minify_response(result)
            return result

        return mcp.tool(name=canonical_name, **tool_kwargs)(wrapper)

    return decorator
