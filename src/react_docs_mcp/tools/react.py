"""React documentation tools.

Registers the three MCP tools of the server:

* ``analyze-react``   - analyze a snippet of component source text
* ``analyze-project`` - markdown documentation for one project directory
* ``list-projects``   - project directories under the configured root
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from react_docs_mcp.config import ServerConfig, log_call
from react_docs_mcp.core.analyzer import SNIPPET_FILE_NAME
from react_docs_mcp.core.docs import ProjectDocumenter
from react_docs_mcp.core.errors import AnalyzerError
from react_docs_mcp.core.naming import canonical_tool
from react_docs_mcp.core.scanner import HIDDEN_PREFIX

logger = logging.getLogger(__name__)

TOOL_NAMES = ("analyze-react", "analyze-project", "list-projects")


def validate_project_name(project_name: Any) -> str:
    """Return the project name if it names a direct child of the root.

    Raises:
        ToolError: If the name is empty, hidden, or contains a path separator.
    """
    if not isinstance(project_name, str) or not project_name.strip():
        raise ToolError("projectName is required and must be a non-empty string")
    if "\x00" in project_name:
        raise ToolError("projectName must not contain NUL characters")
    if "/" in project_name or "\\" in project_name:
        raise ToolError(
            f"projectName must be a single directory name, got '{project_name}'"
        )
    if project_name.startswith(HIDDEN_PREFIX):
        raise ToolError(f"projectName must not be hidden, got '{project_name}'")
    return project_name


def perform_analyze_react(
    documenter: ProjectDocumenter,
    files: Any,
    file_name: Optional[str] = None,
) -> Dict[str, Any]:
    """Analyze raw component source text."""
    if not isinstance(files, str) or not files.strip():
        raise ToolError("files is required and must contain component source text")
    try:
        analysis = documenter.analyze_source(files, file_name or SNIPPET_FILE_NAME)
    except AnalyzerError as exc:
        logger.warning(f"analyze-react failed: {exc}")
        raise ToolError(f"Analysis failed: {exc}") from exc
    return analysis.to_dict()


def perform_analyze_project(documenter: ProjectDocumenter, project_name: Any) -> str:
    """Generate the markdown document for one project."""
    return documenter.generate_docs(validate_project_name(project_name))


def perform_list_projects(documenter: ProjectDocumenter) -> Dict[str, Any]:
    return {"projects": documenter.list_projects()}


def register_react_tools(
    mcp: FastMCP,
    config: ServerConfig,
    documenter: Optional[ProjectDocumenter] = None,
) -> None:
    """Register the React documentation tools."""

    documenter = documenter or ProjectDocumenter.from_config(config)

    @canonical_tool(mcp, canonical_name="analyze-react")
    @log_call()
    def analyze_react(files: str, fileName: Optional[str] = None) -> dict:  # noqa: N803
        """Analyze given React component, extract its components and props.

        Args:
            files: Component source text.
            fileName: Optional file name used for the analysis (default MyComponent.tsx).
        """
        return perform_analyze_react(documenter, files, fileName)

    @canonical_tool(mcp, canonical_name="analyze-project")
    @log_call()
    def analyze_project(projectName: str) -> str:  # noqa: N803
        """Generate documentation for all React components in a project folder.

        It'll output markdown string, directly render it to user.

        Args:
            projectName: Name of a project directory under the project root.
        """
        return perform_analyze_project(documenter, projectName)

    @canonical_tool(mcp, canonical_name="list-projects")
    @log_call()
    def list_projects() -> dict:
        """List all projects under the root folder."""
        return perform_list_projects(documenter)

    logger.debug("Registered React documentation tools")


__all__ = [
    "TOOL_NAMES",
    "perform_analyze_project",
    "perform_analyze_react",
    "perform_list_projects",
    "register_react_tools",
    "validate_project_name",
]
