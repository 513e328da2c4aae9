"""Tests for ServerConfig loading: env vars over TOML over defaults."""

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from react_docs_mcp.config import (
    DEFAULT_EXTENSIONS,
    AnalyzerConfig,
    DocsConfig,
    ServerConfig,
    get_config,
    log_call,
    set_config,
    timed,
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path: Path):
    """Run with no REACT_DOCS_MCP_* variables and an empty working directory."""
    monkeypatch.chdir(tmp_path)
    with patch.dict(os.environ, {}, clear=True):
        yield tmp_path


def _write_toml(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


class TestDefaults:
    def test_defaults(self, clean_env: Path):
        config = ServerConfig.from_env()
        assert config.project_root == Path.cwd()
        assert config.extensions == DEFAULT_EXTENSIONS
        assert config.log_level == "INFO"
        assert config.analyzer == AnalyzerConfig()
        assert config.docs == DocsConfig()
        assert config.server_name == "react-docs-mcp"

    def test_instances_do_not_share_nested_config(self):
        first, second = ServerConfig(), ServerConfig()
        first.analyzer.timeout = 1.0
        assert second.analyzer.timeout == 30.0


class TestTomlLoading:
    def test_default_file_in_working_directory(self, clean_env: Path):
        _write_toml(
            clean_env / "react-docs-mcp.toml",
            """
[workspace]
project_root = "/srv/code"
extensions = ["jsx", ".tsx", ".mdx"]

[logging]
level = "debug"
structured = false

[analyzer]
node_binary = "/usr/local/bin/node"
timeout = 12

[docs]
max_workers = 4
deadline_seconds = 90
""",
        )

        config = ServerConfig.from_env()

        assert config.project_root == Path("/srv/code")
        assert config.extensions == (".jsx", ".tsx", ".mdx")
        assert config.log_level == "DEBUG"
        assert config.structured_logging is False
        assert config.analyzer.node_binary == "/usr/local/bin/node"
        assert config.analyzer.module == "react-analyzer"
        assert config.analyzer.timeout == 12.0
        assert config.docs.max_workers == 4
        assert config.docs.deadline_seconds == 90.0

    def test_explicit_config_file(self, clean_env: Path):
        path = _write_toml(clean_env / "custom.toml", '[server]\nname = "docs"\n')
        assert ServerConfig.from_env(str(path)).server_name == "docs"

    def test_config_file_env_var(self, clean_env: Path):
        path = _write_toml(clean_env / "other.toml", '[analyzer]\nmodule = "@acme/rx"\n')
        os.environ["REACT_DOCS_MCP_CONFIG_FILE"] = str(path)
        assert ServerConfig.from_env().analyzer.module == "@acme/rx"

    def test_missing_file_keeps_defaults(self, clean_env: Path, caplog):
        with caplog.at_level(logging.WARNING):
            config = ServerConfig.from_env(str(clean_env / "absent.toml"))
        assert config.log_level == "INFO"
        assert "Config file not found" in caplog.text

    def test_malformed_file_keeps_defaults(self, clean_env: Path, caplog):
        path = _write_toml(clean_env / "broken.toml", "[workspace\nproject_root = 1")
        with caplog.at_level(logging.ERROR):
            config = ServerConfig.from_env(str(path))
        assert config.extensions == DEFAULT_EXTENSIONS
        assert "Error loading config file" in caplog.text

    def test_max_workers_floor(self):
        assert DocsConfig.from_toml_dict({"max_workers": 0}).max_workers == 1


class TestEnvOverrides:
    def test_env_beats_toml(self, clean_env: Path):
        _write_toml(
            clean_env / "react-docs-mcp.toml",
            '[workspace]\nproject_root = "/from/toml"\n[docs]\nmax_workers = 2\n',
        )
        os.environ.update(
            {
                "REACT_DOCS_MCP_PROJECT_ROOT": "/from/env",
                "REACT_DOCS_MCP_MAX_WORKERS": "6",
                "REACT_DOCS_MCP_EXTENSIONS": "tsx, .vue",
                "REACT_DOCS_MCP_LOG_LEVEL": "warning",
                "REACT_DOCS_MCP_NODE_BINARY": "nodejs",
                "REACT_DOCS_MCP_ANALYZER_TIMEOUT": "2.5",
                "REACT_DOCS_MCP_DEADLINE": "30",
            }
        )

        config = ServerConfig.from_env()

        assert config.project_root == Path("/from/env")
        assert config.docs.max_workers == 6
        assert config.extensions == (".tsx", ".vue")
        assert config.log_level == "WARNING"
        assert config.analyzer.node_binary == "nodejs"
        assert config.analyzer.timeout == 2.5
        assert config.docs.deadline_seconds == 30.0

    def test_invalid_numbers_are_ignored(self, clean_env: Path, caplog):
        os.environ.update(
            {
                "REACT_DOCS_MCP_MAX_WORKERS": "many",
                "REACT_DOCS_MCP_ANALYZER_TIMEOUT": "soon",
            }
        )
        with caplog.at_level(logging.WARNING):
            config = ServerConfig.from_env()
        assert config.docs.max_workers == 1
        assert config.analyzer.timeout == 30.0
        assert "REACT_DOCS_MCP_MAX_WORKERS" in caplog.text

    def test_blank_extensions_fall_back_to_default(self, clean_env: Path):
        os.environ["REACT_DOCS_MCP_EXTENSIONS"] = " , "
        assert ServerConfig.from_env().extensions == DEFAULT_EXTENSIONS


class TestGlobalConfig:
    def test_set_and_get(self):
        config = ServerConfig(server_name="pinned")
        set_config(config)
        try:
            assert get_config() is config
        finally:
            set_config(None)


class TestLogCall:
    def test_reraises_and_logs(self, caplog):
        @log_call("react_docs_mcp.tests")
        def fail():
            raise ValueError("nope")

        with caplog.at_level(logging.ERROR, logger="react_docs_mcp.tests"):
            with pytest.raises(ValueError):
                fail()
        assert "Error in fail: nope" in caplog.text


class TestTimed:
    def test_logs_duration_even_on_failure(self, caplog):
        @timed("render")
        def fail():
            raise RuntimeError("late")

        with caplog.at_level(logging.INFO, logger=__name__):
            with pytest.raises(RuntimeError):
                fail()
        record = next(r for r in caplog.records if r.getMessage().startswith("render took"))
        assert record.success is False


class TestSetupLogging:
    def test_repeated_setup_keeps_one_handler(self, monkeypatch):
        package_logger = logging.getLogger("react_docs_mcp")
        monkeypatch.setattr(package_logger, "handlers", [])
        previous_level = package_logger.level
        config = ServerConfig(log_level="ERROR", structured_logging=False)

        try:
            config.setup_logging()
            config.setup_logging()

            assert len(package_logger.handlers) == 1
            assert package_logger.level == logging.ERROR
        finally:
            package_logger.setLevel(previous_level)
