"""
React analyzer bridge.

Component and prop extraction is delegated to the ``react-analyzer`` npm
package. ``NodeReactAnalyzer`` runs it through the ``node`` binary, passing the
request as JSON on stdin and reading the analysis back as JSON from stdout.

``analyze_file`` is the per-file entry point used by the documentation
assembler. It never raises: unreadable files and analyzer failures are logged
and reported as ``None`` so that one broken file cannot abort a project scan.
"""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Protocol, Sequence, Union

from react_docs_mcp.core.errors import (
    AnalyzerError,
    AnalyzerTimeoutError,
    AnalyzerUnavailableError,
)
from react_docs_mcp.core.models import ComponentAnalysis

logger = logging.getLogger(__name__)

DEFAULT_BINARY = "node"
DEFAULT_MODULE = "react-analyzer"
DEFAULT_TIMEOUT_SECONDS = 30.0

# File name used when analyzing source text that did not come from disk
SNIPPET_FILE_NAME = "MyComponent.tsx"

_BRIDGE_SCRIPT = """
const chunks = [];
process.stdin.on("data", (chunk) => chunks.push(chunk));
process.stdin.on("end", async () => {
  try {
    const request = JSON.parse(Buffer.concat(chunks).toString("utf8"));
    const mod = await import(request.module);
    const analyze = mod.analyzeReactFile || (mod.default && mod.default.analyzeReactFile);
    if (typeof analyze !== "function") {
      throw new Error(`${request.module} does not export analyzeReactFile`);
    }
    const result = await analyze(request.fileName, request.source);
    process.stdout.write(JSON.stringify(result === undefined ? null : result));
  } catch (err) {
    process.stderr.write(String((err && err.stack) || err));
    process.exit(1);
  }
});
"""


class Analyzer(Protocol):
    """Extracts components and props from one source file."""

    def analyze(self, file_name: str, source: str) -> ComponentAnalysis:
        raise NotImplementedError


class RunnerProtocol(Protocol):
    """Callable signature used for executing the Node bridge."""

    def __call__(
        self,
        command: Sequence[str],
        *,
        input: Optional[str] = None,
        timeout: Optional[float] = None,
        cwd: Optional[str] = None,
    ) -> subprocess.CompletedProcess[str]:
        raise NotImplementedError


def _default_runner(
    command: Sequence[str],
    *,
    input: Optional[str] = None,
    timeout: Optional[float] = None,
    cwd: Optional[str] = None,
) -> subprocess.CompletedProcess[str]:
    """Invoke the Node bridge via subprocess."""
    return subprocess.run(  # noqa: S603 - intentional CLI invocation
        list(command),
        input=input,
        capture_output=True,
        text=True,
        encoding="utf-8",
        timeout=timeout,
        cwd=cwd,
        check=False,
    )


class NodeReactAnalyzer:
    """Analyzer backed by the ``react-analyzer`` npm package."""

    def __init__(
        self,
        *,
        binary: Optional[str] = None,
        module: Optional[str] = None,
        timeout: Optional[float] = None,
        cwd: Optional[Union[str, Path]] = None,
        runner: Optional[RunnerProtocol] = None,
    ):
        self._binary = binary or DEFAULT_BINARY
        self._module = module or DEFAULT_MODULE
        self._timeout = timeout or DEFAULT_TIMEOUT_SECONDS
        self._cwd = str(cwd) if cwd is not None else None
        self._runner = runner or _default_runner

    def _build_command(self) -> list:
        return [self._binary, "-e", _BRIDGE_SCRIPT]

    def analyze(self, file_name: str, source: str) -> ComponentAnalysis:
        request = json.dumps(
            {"module": self._module, "fileName": file_name, "source": source}
        )
        try:
            completed = self._runner(
                self._build_command(),
                input=request,
                timeout=self._timeout,
                cwd=self._cwd,
            )
        except FileNotFoundError as exc:
            raise AnalyzerUnavailableError(
                f"Node.js binary not found: {self._binary}",
                file_name=file_name,
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise AnalyzerTimeoutError(
                f"Analyzer timed out after {self._timeout}s",
                file_name=file_name,
                timeout=self._timeout,
            ) from exc

        if completed.returncode != 0:
            stderr = (completed.stderr or "").strip()
            raise AnalyzerError(
                f"Analyzer exited with code {completed.returncode}: {stderr or 'no output'}",
                file_name=file_name,
            )

        try:
            payload = json.loads(completed.stdout or "null")
        except json.JSONDecodeError as exc:
            raise AnalyzerError(
                f"Analyzer returned invalid JSON: {exc}", file_name=file_name
            ) from exc

        return ComponentAnalysis.from_dict(payload)


class CallableAnalyzer:
    """Adapts a plain ``(file_name, source) -> analysis`` function.

    The function may return a ``ComponentAnalysis`` or the analyzer's raw
    dict payload.
    """

    def __init__(self, func: Callable[[str, str], Any]):
        self._func = func

    def analyze(self, file_name: str, source: str) -> ComponentAnalysis:
        result = self._func(file_name, source)
        if isinstance(result, ComponentAnalysis):
            return result
        return ComponentAnalysis.from_dict(result)


def analyze_file(path: Path, analyzer: Analyzer) -> Optional[ComponentAnalysis]:
    """Analyze one component file, returning None on any failure."""
    try:
        source = Path(path).read_text(encoding="utf-8")
        return analyzer.analyze(Path(path).name, source)
    except Exception as exc:
        logger.warning(f"Error analyzing file {path}: {exc}")
        return None


def analysis_summary(analysis: ComponentAnalysis) -> Dict[str, Any]:
    """Compact counts for logging and CLI metadata."""
    return {
        "component_count": len(analysis.components),
        "prop_count": sum(len(c.props) for c in analysis.components),
    }
