"""Allow `python -m react_docs_mcp` to start the MCP server."""

from react_docs_mcp.server import main

if __name__ == "__main__":
    main()
