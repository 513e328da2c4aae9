"""React Docs MCP - MCP server that documents React components and their props."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("react-docs-mcp")
except PackageNotFoundError:
    # Package not installed (development mode without editable install)
    __version__ = "0.1.0"

from react_docs_mcp.server import create_server, main

__all__ = ["__version__", "create_server", "main"]
