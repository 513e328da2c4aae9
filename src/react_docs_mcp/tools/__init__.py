"""MCP tools exposed by react-docs-mcp."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .react import TOOL_NAMES, register_react_tools


if TYPE_CHECKING:  # pragma: no cover - import-time typing only
    from mcp.server.fastmcp import FastMCP
    from react_docs_mcp.config import ServerConfig
    from react_docs_mcp.core.docs import ProjectDocumenter


def register_tools(
    mcp: "FastMCP",
    config: "ServerConfig",
    documenter: Optional["ProjectDocumenter"] = None,
) -> None:
    """Register all tools."""
    register_react_tools(mcp, config, documenter)


__all__ = [
    "TOOL_NAMES",
    "register_tools",
    "register_react_tools",
]
