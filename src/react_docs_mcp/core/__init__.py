"""Core documentation pipeline: discovery, analysis, and markdown rendering."""

from react_docs_mcp.core.analyzer import (
    Analyzer,
    CallableAnalyzer,
    NodeReactAnalyzer,
    analyze_file,
)
from react_docs_mcp.core.docs import ProjectDocumenter, generate_project_docs
from react_docs_mcp.core.errors import (
    AnalyzerError,
    AnalyzerTimeoutError,
    AnalyzerUnavailableError,
)
from react_docs_mcp.core.formatting import format_prop_type, render_component_markdown
from react_docs_mcp.core.models import (
    ArrayProp,
    Component,
    ComponentAnalysis,
    FunctionProp,
    ObjectProp,
    PropDescriptor,
    ScalarProp,
)
from react_docs_mcp.core.scanner import (
    list_projects,
    scan_component_files,
    scan_component_files_with_diagnostics,
)

__all__ = [
    "Analyzer",
    "AnalyzerError",
    "AnalyzerTimeoutError",
    "AnalyzerUnavailableError",
    "ArrayProp",
    "CallableAnalyzer",
    "Component",
    "ComponentAnalysis",
    "FunctionProp",
    "NodeReactAnalyzer",
    "ObjectProp",
    "ProjectDocumenter",
    "PropDescriptor",
    "ScalarProp",
    "analyze_file",
    "format_prop_type",
    "generate_project_docs",
    "list_projects",
    "render_component_markdown",
    "scan_component_files",
    "scan_component_files_with_diagnostics",
]
