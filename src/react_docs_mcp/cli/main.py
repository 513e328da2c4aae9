"""react-docs CLI entry point.

Runs the same documentation pipeline as the MCP server without a client:

    react-docs --project-root ~/code projects
    react-docs --project-root ~/code docs my-app --output my-app.md
    react-docs analyze src/Button.tsx
"""

import time
from pathlib import Path
from typing import Optional

import click
from mcp.server.fastmcp.exceptions import ToolError

from react_docs_mcp.cli.output import emit_error, emit_success
from react_docs_mcp.config import ServerConfig
from react_docs_mcp.core.analyzer import analysis_summary
from react_docs_mcp.core.docs import ProjectDocumenter
from react_docs_mcp.core.errors import (
    AnalyzerError,
    AnalyzerTimeoutError,
    AnalyzerUnavailableError,
)
from react_docs_mcp.core.responses import ErrorCode, ErrorType
from react_docs_mcp.tools.react import validate_project_name


def _get_config(ctx: click.Context) -> ServerConfig:
    return ctx.obj["config"]


@click.group()
@click.option(
    "--project-root",
    envvar="REACT_DOCS_MCP_PROJECT_ROOT",
    type=click.Path(file_okay=False),
    help="Directory whose subdirectories are documented as projects.",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    help="Path to a react-docs-mcp TOML config file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    project_root: Optional[str],
    config_file: Optional[str],
    verbose: bool,
) -> None:
    """Generate markdown documentation for React components."""
    config = ServerConfig.from_env(config_file)
    if project_root:
        config.project_root = Path(project_root).expanduser()
    config.log_level = "DEBUG" if verbose else "WARNING"
    config.structured_logging = False
    config.setup_logging()

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@cli.command("projects")
@click.pass_context
def projects_cmd(ctx: click.Context) -> None:
    """List projects under the project root."""
    config = _get_config(ctx)
    documenter = ProjectDocumenter.from_config(config)
    projects = documenter.list_projects()
    emit_success(
        {"projects": projects},
        meta={"project_root": str(config.project_root)},
    )


@cli.command("docs")
@click.argument("project_name")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Write the markdown to a file instead of stdout.",
)
@click.option(
    "--workers",
    type=int,
    help="Analyze this many files in parallel.",
)
@click.pass_context
def docs_cmd(
    ctx: click.Context,
    project_name: str,
    output: Optional[str],
    workers: Optional[int],
) -> None:
    """Print markdown documentation for PROJECT_NAME."""
    config = _get_config(ctx)
    try:
        validate_project_name(project_name)
    except ToolError as exc:
        emit_error(
            str(exc),
            code=ErrorCode.VALIDATION_ERROR.value,
            error_type=ErrorType.VALIDATION.value,
            remediation="Pass a directory name listed by `react-docs projects`",
            details={"project_name": project_name},
        )

    if workers is not None:
        if workers <= 0:
            emit_error(
                "Workers must be greater than zero",
                code=ErrorCode.VALIDATION_ERROR.value,
                error_type=ErrorType.VALIDATION.value,
                remediation="Pass --workers with a positive integer",
                details={"workers": workers},
            )
        config.docs.max_workers = workers

    if not (config.project_root / project_name).is_dir():
        emit_error(
            f"Project not found: {project_name}",
            code=ErrorCode.PROJECT_NOT_FOUND.value,
            error_type=ErrorType.NOT_FOUND.value,
            remediation="Run `react-docs projects` to see available projects",
            details={"project_root": str(config.project_root)},
        )

    markdown = ProjectDocumenter.from_config(config).generate_docs(project_name)

    if output:
        Path(output).write_text(markdown, encoding="utf-8")
        emit_success({"project": project_name, "output": output})
    else:
        click.echo(markdown)


@cli.command("analyze")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def analyze_cmd(ctx: click.Context, file: str) -> None:
    """Analyze a single component FILE and print its components as JSON."""
    config = _get_config(ctx)
    documenter = ProjectDocumenter.from_config(config)
    path = Path(file)
    start_time = time.perf_counter()

    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        emit_error(
            f"Could not read {file}: {exc}",
            code=ErrorCode.VALIDATION_ERROR.value,
            error_type=ErrorType.VALIDATION.value,
            remediation="Pass a readable UTF-8 source file",
        )

    try:
        analysis = documenter.analyze_source(source, path.name)
    except AnalyzerUnavailableError as exc:
        emit_error(
            str(exc),
            code=ErrorCode.ANALYZER_UNAVAILABLE.value,
            error_type=ErrorType.ANALYZER.value,
            remediation="Install Node.js or set REACT_DOCS_MCP_NODE_BINARY",
        )
    except AnalyzerTimeoutError as exc:
        emit_error(
            str(exc),
            code=ErrorCode.ANALYZER_TIMEOUT.value,
            error_type=ErrorType.ANALYZER.value,
            remediation="Raise REACT_DOCS_MCP_ANALYZER_TIMEOUT",
        )
    except AnalyzerError as exc:
        emit_error(
            str(exc),
            code=ErrorCode.ANALYZER_ERROR.value,
            error_type=ErrorType.ANALYZER.value,
            remediation="Check that react-analyzer is installed and the file is valid JSX/TSX",
            details={"file": file},
        )

    duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
    emit_success(
        analysis.to_dict(),
        telemetry={"duration_ms": duration_ms, **analysis_summary(analysis)},
    )


if __name__ == "__main__":
    cli()
