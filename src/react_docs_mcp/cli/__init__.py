"""Command-line interface for react-docs-mcp."""

from react_docs_mcp.cli.main import cli

__all__ = ["cli"]
