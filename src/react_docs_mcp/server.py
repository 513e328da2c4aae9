"""FastMCP server for react-docs-mcp.

Exposes the React documentation pipeline as three MCP tools:
`analyze-react`, `analyze-project`, and `list-projects`.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP
from mcp.shared.exceptions import McpError
from mcp.types import METHOD_NOT_FOUND, CallToolRequest, ErrorData, ServerResult

from react_docs_mcp.config import ServerConfig, get_config
from react_docs_mcp.core.docs import ProjectDocumenter
from react_docs_mcp.tools import register_tools

logger = logging.getLogger(__name__)


class ReactDocsMCP(FastMCP):
    """FastMCP server that reports unknown tools as a protocol error.

    The low-level ``tools/call`` handler turns every exception raised by a
    tool into an ``isError`` result, so the name check runs in a request
    handler wrapped around it. An ``McpError`` raised there reaches the
    client as a JSON-RPC error with code ``METHOD_NOT_FOUND``.
    """

    def _setup_handlers(self) -> None:
        super()._setup_handlers()
        handlers = self._mcp_server.request_handlers
        handle_call_tool = handlers[CallToolRequest]

        async def call_tool_request(req: CallToolRequest) -> ServerResult:
            self._ensure_tool(req.params.name)
            return await handle_call_tool(req)

        handlers[CallToolRequest] = call_tool_request

    def _ensure_tool(self, name: str) -> None:
        if self._tool_manager.get_tool(name) is None:
            logger.warning("Unknown tool requested: %s", name)
            raise McpError(
                ErrorData(code=METHOD_NOT_FOUND, message=f"Tool not found: {name}")
            )

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> Any:
        self._ensure_tool(name)
        return await super().call_tool(name, arguments)


def create_server(
    config: Optional[ServerConfig] = None,
    documenter: Optional[ProjectDocumenter] = None,
) -> ReactDocsMCP:
    """Create and configure the FastMCP server instance."""

    if config is None:
        config = get_config()

    config.setup_logging()

    mcp = ReactDocsMCP(name=config.server_name)
    register_tools(mcp, config, documenter)

    logger.info(
        "Server created: %s v%s (project root: %s)",
        config.server_name,
        config.server_version,
        config.project_root,
    )
    return mcp


def main() -> None:
    """Main entry point for the react-docs-mcp server."""

    try:
        config = get_config()
        server = create_server(config)

        logger.info("Starting %s v%s", config.server_name, config.server_version)

        server.run()

    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
        sys.exit(0)
    except BaseException as exc:
        logger.error("Server error: %s: %s", type(exc).__name__, exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
