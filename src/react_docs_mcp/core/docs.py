"""Project documentation assembly.

Turns every component file of one project into a single markdown document:

    # <project> Components

    ---

    # File: <project>/src/Button.tsx

    ## Button
    ...

Per-file failures never abort the document; they render inline as
``*Error analyzing file*``. Files are analyzed sequentially by default, or on
a thread pool when ``max_workers > 1``. Either way the sections appear in scan
order.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, wait
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from react_docs_mcp.config import ServerConfig, timed
from react_docs_mcp.core.analyzer import (
    SNIPPET_FILE_NAME,
    Analyzer,
    NodeReactAnalyzer,
    analyze_file,
)
from react_docs_mcp.core.formatting import render_component_markdown
from react_docs_mcp.core.models import ComponentAnalysis
from react_docs_mcp.core.scanner import (
    COMPONENT_EXTENSIONS,
    list_projects,
    scan_component_files,
)

logger = logging.getLogger(__name__)

ERROR_MARKER = "*Error analyzing file*"


def _relative_path(path: Path, project_root: Path) -> str:
    try:
        return path.relative_to(project_root).as_posix()
    except ValueError:
        return path.as_posix()


def _analyze_all(
    files: Sequence[Path],
    analyzer: Analyzer,
    *,
    max_workers: int = 1,
    deadline_seconds: Optional[float] = None,
) -> List[Optional[ComponentAnalysis]]:
    """Analyze files, returning results indexed like ``files``.

    Files still pending when the deadline passes are reported as None.
    """
    results: List[Optional[ComponentAnalysis]] = [None] * len(files)
    started = time.monotonic()

    if max_workers <= 1:
        for index, path in enumerate(files):
            if (
                deadline_seconds is not None
                and time.monotonic() - started >= deadline_seconds
            ):
                logger.warning(
                    f"Deadline of {deadline_seconds}s reached; "
                    f"{len(files) - index} file(s) not analyzed"
                )
                break
            results[index] = analyze_file(path, analyzer)
        return results

    executor = ThreadPoolExecutor(max_workers=max_workers)
    try:
        future_to_index = {
            executor.submit(analyze_file, path, analyzer): index
            for index, path in enumerate(files)
        }
        done, pending = wait(future_to_index, timeout=deadline_seconds)
        for future in done:
            results[future_to_index[future]] = future.result()
        if pending:
            logger.warning(
                f"Deadline of {deadline_seconds}s reached; "
                f"{len(pending)} file(s) not analyzed"
            )
            for future in pending:
                future.cancel()
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    return results


def generate_project_docs(
    project_name: str,
    *,
    project_root: Union[str, Path],
    analyzer: Analyzer,
    extensions: Iterable[str] = COMPONENT_EXTENSIONS,
    max_workers: int = 1,
    deadline_seconds: Optional[float] = None,
) -> str:
    """Generate markdown documentation for every component file in a project."""
    root = Path(project_root)
    files = scan_component_files(root / project_name, extensions)

    if not files:
        return f"# {project_name}\n\nNo React components found."

    logger.info(f"Documenting {len(files)} component file(s) in {project_name}")
    analyses = _analyze_all(
        files,
        analyzer,
        max_workers=max_workers,
        deadline_seconds=deadline_seconds,
    )

    parts: List[str] = [f"# {project_name} Components\n\n"]
    for path, analysis in zip(files, analyses):
        parts.append(f"\n---\n\n# File: {_relative_path(path, root)}\n\n")
        if analysis is not None:
            parts.append(render_component_markdown(analysis))
        else:
            parts.append(f"{ERROR_MARKER}\n\n")

    return "".join(parts)


class ProjectDocumenter:
    """Documentation pipeline bound to one project root and analyzer."""

    def __init__(
        self,
        project_root: Union[str, Path],
        analyzer: Analyzer,
        *,
        extensions: Iterable[str] = COMPONENT_EXTENSIONS,
        max_workers: int = 1,
        deadline_seconds: Optional[float] = None,
    ) -> None:
        self.project_root = Path(project_root)
        self.analyzer = analyzer
        self.extensions = tuple(extensions)
        self.max_workers = max_workers
        self.deadline_seconds = deadline_seconds

    @classmethod
    def from_config(
        cls, config: ServerConfig, analyzer: Optional[Analyzer] = None
    ) -> "ProjectDocumenter":
        if analyzer is None:
            analyzer = NodeReactAnalyzer(
                binary=config.analyzer.node_binary,
                module=config.analyzer.module,
                timeout=config.analyzer.timeout,
            )
        return cls(
            config.project_root,
            analyzer,
            extensions=config.extensions,
            max_workers=config.docs.max_workers,
            deadline_seconds=config.docs.deadline_seconds,
        )

    def list_projects(self) -> List[str]:
        return list_projects(self.project_root)

    @timed("project_docs")
    def generate_docs(self, project_name: str) -> str:
        return generate_project_docs(
            project_name,
            project_root=self.project_root,
            analyzer=self.analyzer,
            extensions=self.extensions,
            max_workers=self.max_workers,
            deadline_seconds=self.deadline_seconds,
        )

    def analyze_source(
        self, source: str, file_name: str = SNIPPET_FILE_NAME
    ) -> ComponentAnalysis:
        """Analyze raw source text. Unlike file analysis, failures propagate."""
        return self.analyzer.analyze(file_name, source)
