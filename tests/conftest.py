"""
Root pytest configuration and shared fixtures.

Provides a scripted analyzer and a helper that builds project trees on disk.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import pytest
from mcp.types import TextContent

from react_docs_mcp.core.errors import AnalyzerError
from react_docs_mcp.core.models import ComponentAnalysis


def extract_response_dict(result: Union[Dict[str, Any], TextContent]) -> Dict[str, Any]:
    """Extract dict from tool result, handling both dict and TextContent.

    Tools registered through canonical_tool return TextContent with minified
    JSON. This helper extracts the dict for test assertions.
    """
    if isinstance(result, dict):
        return result
    if isinstance(result, TextContent):
        return json.loads(result.text)
    raise TypeError(
        f"Expected dict or TextContent, got {type(result).__name__}"
    )


class FakeAnalyzer:
    """Analyzer returning canned results keyed by file name.

    Values may be a raw analyzer dict, a ComponentAnalysis, or an exception
    instance to raise. Unknown file names produce an empty analysis.
    """

    def __init__(self, results: Optional[Mapping[str, Any]] = None):
        self.results = dict(results or {})
        self.calls: List[Tuple[str, str]] = []

    def analyze(self, file_name: str, source: str) -> ComponentAnalysis:
        self.calls.append((file_name, source))
        result = self.results.get(file_name)
        if isinstance(result, Exception):
            raise result
        if isinstance(result, ComponentAnalysis):
            return result
        return ComponentAnalysis.from_dict(result)


@pytest.fixture
def fake_analyzer() -> FakeAnalyzer:
    return FakeAnalyzer(
        {
            "Button.tsx": {
                "components": [
                    {
                        "name": "Button",
                        "wrapperFn": "forwardRef",
                        "props": {
                            "label": {"type": "string", "optional": False},
                            "size": {
                                "type": "string",
                                "optional": True,
                                "defaultValue": "'md'",
                            },
                            "onClick": {"type": "function", "optional": True},
                        },
                    }
                ]
            },
            "Broken.jsx": AnalyzerError("Unexpected token"),
        }
    )


def _write_tree(root: Path, files: Mapping[str, str]) -> Path:
    """Create files (and parent directories) under root."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_tree():
    """Factory fixture: ``make_tree(root, {"a/B.tsx": "source"})``."""
    return _write_tree


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A project root with two projects, a hidden directory, and a stray file."""
    root = tmp_path / "code"
    _write_tree(
        root,
        {
            "web-app/src/components/Button.tsx": "export const Button = () => null;",
            "web-app/src/components/Broken.jsx": "export default <",
            "web-app/src/index.ts": "export {};",
            "web-app/README.md": "# web app",
            "empty-app/src/index.js": "console.log('no components');",
            ".cache/stale/Old.tsx": "export const Old = () => null;",
            "notes.txt": "not a project",
        },
    )
    return root
