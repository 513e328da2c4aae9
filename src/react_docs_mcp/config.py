"""
Server configuration for react-docs-mcp.

Supports configuration via:
1. Environment variables (highest priority)
2. TOML config file (react-docs-mcp.toml)
3. Default values (lowest priority)

Environment variables:
- REACT_DOCS_MCP_PROJECT_ROOT: Directory whose subdirectories are projects
- REACT_DOCS_MCP_EXTENSIONS: Comma-separated component file suffixes (default: .jsx,.tsx)
- REACT_DOCS_MCP_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
- REACT_DOCS_MCP_NODE_BINARY: Node.js executable used by the analyzer
- REACT_DOCS_MCP_ANALYZER_MODULE: npm module exporting analyzeReactFile
- REACT_DOCS_MCP_ANALYZER_TIMEOUT: Per-file analyzer timeout in seconds
- REACT_DOCS_MCP_MAX_WORKERS: Files analyzed in parallel per project (default: 1)
- REACT_DOCS_MCP_DEADLINE: Seconds before remaining files are marked as errors
- REACT_DOCS_MCP_CONFIG_FILE: Path to TOML config file
"""

import os
import logging
import functools
import time
from dataclasses import dataclass, field
from importlib.metadata import version as get_package_version, PackageNotFoundError
from pathlib import Path
from typing import Optional, Dict, Any, Callable, TypeVar

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # Python < 3.11 fallback


logger = logging.getLogger(__name__)


def _get_version() -> str:
    """Get package version from metadata (single source of truth: pyproject.toml)."""
    try:
        return get_package_version("react-docs-mcp")
    except PackageNotFoundError:
        return "0.1.0"  # Fallback for dev without install


_PACKAGE_VERSION = _get_version()

DEFAULT_EXTENSIONS = (".jsx", ".tsx")

T = TypeVar("T")

_JSON_LOG_FORMAT = (
    '{"time":"%(asctime)s","level":"%(levelname)s",'
    '"logger":"%(name)s","message":"%(message)s"}'
)
_TEXT_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Handler installed by the last ServerConfig.setup_logging() call
_log_handler: Optional[logging.Handler] = None


@dataclass
class AnalyzerConfig:
    """Settings for the external React analyzer.

    Attributes:
        node_binary: Node.js executable (name on PATH or absolute path)
        module: npm module that exports ``analyzeReactFile``
        timeout: Seconds allowed for a single file analysis
    """

    node_binary: str = "node"
    module: str = "react-analyzer"
    timeout: float = 30.0

    @classmethod
    def from_toml_dict(cls, data: Dict[str, Any]) -> "AnalyzerConfig":
        """Create config from TOML dict (typically [analyzer] section)."""
        return cls(
            node_binary=str(data.get("node_binary", "node")),
            module=str(data.get("module", "react-analyzer")),
            timeout=float(data.get("timeout", 30.0)),
        )


@dataclass
class DocsConfig:
    """Settings for project documentation assembly.

    Attributes:
        max_workers: Number of files analyzed concurrently (1 = sequential)
        deadline_seconds: Optional budget for a whole project; files not
            analyzed in time are rendered as errors
    """

    max_workers: int = 1
    deadline_seconds: Optional[float] = None

    @classmethod
    def from_toml_dict(cls, data: Dict[str, Any]) -> "DocsConfig":
        """Create config from TOML dict (typically [docs] section)."""
        deadline = data.get("deadline_seconds")
        return cls(
            max_workers=max(1, int(data.get("max_workers", 1))),
            deadline_seconds=float(deadline) if deadline is not None else None,
        )


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"true", "1", "yes", "on"}


def _parse_extensions(value: Any) -> tuple:
    if isinstance(value, str):
        parts = [part.strip() for part in value.split(",")]
    else:
        parts = [str(part).strip() for part in value]
    normalized = []
    for part in parts:
        if not part:
            continue
        normalized.append(part if part.startswith(".") else f".{part}")
    return tuple(normalized) or DEFAULT_EXTENSIONS


@dataclass
class ServerConfig:
    """Server configuration with support for env vars and TOML overrides."""

    # Workspace configuration
    project_root: Path = field(default_factory=Path.cwd)
    extensions: tuple = DEFAULT_EXTENSIONS

    # Logging configuration
    log_level: str = "INFO"
    structured_logging: bool = True

    # Server configuration
    server_name: str = "react-docs-mcp"
    server_version: str = field(default_factory=lambda: _PACKAGE_VERSION)

    # Analyzer configuration
    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)

    # Documentation assembly configuration
    docs: DocsConfig = field(default_factory=DocsConfig)

    @classmethod
    def from_env(cls, config_file: Optional[str] = None) -> "ServerConfig":
        """
        Create configuration from environment variables and optional TOML file.

        Priority (highest to lowest):
        1. Environment variables
        2. TOML config file
        3. Default values
        """
        config = cls()

        # Load TOML config if available
        toml_path = config_file or os.environ.get("REACT_DOCS_MCP_CONFIG_FILE")
        if toml_path:
            config._load_toml(Path(toml_path))
        else:
            # Try default locations
            for default_path in ["react-docs-mcp.toml", ".react-docs-mcp.toml"]:
                if Path(default_path).exists():
                    config._load_toml(Path(default_path))
                    break

        # Override with environment variables
        config._load_env()

        return config

    def _load_toml(self, path: Path) -> None:
        """Load configuration from TOML file."""
        if not path.exists():
            logger.warning(f"Config file not found: {path}")
            return

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)

            # Workspace settings
            if "workspace" in data:
                ws = data["workspace"]
                if "project_root" in ws:
                    self.project_root = Path(ws["project_root"]).expanduser()
                if "extensions" in ws:
                    self.extensions = _parse_extensions(ws["extensions"])

            # Logging settings
            if "logging" in data:
                log = data["logging"]
                if "level" in log:
                    self.log_level = log["level"].upper()
                if "structured" in log:
                    self.structured_logging = _parse_bool(log["structured"])

            # Server settings
            if "server" in data:
                srv = data["server"]
                if "name" in srv:
                    self.server_name = srv["name"]
                if "version" in srv:
                    self.server_version = srv["version"]

            if "analyzer" in data:
                self.analyzer = AnalyzerConfig.from_toml_dict(data["analyzer"])

            if "docs" in data:
                self.docs = DocsConfig.from_toml_dict(data["docs"])

        except Exception as e:
            logger.error(f"Error loading config file {path}: {e}")

    def _load_env(self) -> None:
        """Load configuration from environment variables."""
        if root := os.environ.get("REACT_DOCS_MCP_PROJECT_ROOT"):
            self.project_root = Path(root).expanduser()

        if extensions := os.environ.get("REACT_DOCS_MCP_EXTENSIONS"):
            self.extensions = _parse_extensions(extensions)

        # Log level
        if level := os.environ.get("REACT_DOCS_MCP_LOG_LEVEL"):
            self.log_level = level.upper()

        # Analyzer settings
        if node_binary := os.environ.get("REACT_DOCS_MCP_NODE_BINARY"):
            self.analyzer.node_binary = node_binary
        if module := os.environ.get("REACT_DOCS_MCP_ANALYZER_MODULE"):
            self.analyzer.module = module
        if timeout := os.environ.get("REACT_DOCS_MCP_ANALYZER_TIMEOUT"):
            try:
                self.analyzer.timeout = float(timeout)
            except ValueError:
                logger.warning(f"Invalid REACT_DOCS_MCP_ANALYZER_TIMEOUT: {timeout}")

        # Documentation assembly settings
        if workers := os.environ.get("REACT_DOCS_MCP_MAX_WORKERS"):
            try:
                self.docs.max_workers = max(1, int(workers))
            except ValueError:
                logger.warning(f"Invalid REACT_DOCS_MCP_MAX_WORKERS: {workers}")
        if deadline := os.environ.get("REACT_DOCS_MCP_DEADLINE"):
            try:
                self.docs.deadline_seconds = float(deadline)
            except ValueError:
                logger.warning(f"Invalid REACT_DOCS_MCP_DEADLINE: {deadline}")

    def setup_logging(self) -> None:
        """Configure logging based on settings."""
        level = getattr(logging, self.log_level, logging.INFO)

        formatter = logging.Formatter(
            _JSON_LOG_FORMAT if self.structured_logging else _TEXT_LOG_FORMAT
        )

        global _log_handler

        # stdout carries the stdio transport, so logs go to stderr
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)

        root_logger = logging.getLogger("react_docs_mcp")
        root_logger.setLevel(level)
        if _log_handler is not None:
            root_logger.removeHandler(_log_handler)
        root_logger.addHandler(handler)
        _log_handler = handler


# Global configuration instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def set_config(config: ServerConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


# Logging decorators


def log_call(
    logger_name: Optional[str] = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator that logs entry at DEBUG and failures at ERROR, then re-raises.

    Args:
        logger_name: Optional logger name (defaults to function module)
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        log = logging.getLogger(logger_name or func.__module__)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            log.debug(
                f"Calling {func.__name__}",
                extra={"function": func.__name__, "arguments": sorted(kwargs)},
            )
            try:
                return func(*args, **kwargs)
            except Exception as e:
                log.error(
                    f"Error in {func.__name__}: {e}",
                    extra={"function": func.__name__, "error_type": type(e).__name__},
                )
                raise

        return wrapper

    return decorator


def timed(
    metric_name: Optional[str] = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator that logs a function's wall-clock duration at INFO.

    Args:
        metric_name: Optional metric name (defaults to function name)
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        name = metric_name or func.__name__
        log = logging.getLogger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            start = time.perf_counter()
            success = False
            try:
                result = func(*args, **kwargs)
                success = True
                return result
            finally:
                duration_ms = round((time.perf_counter() - start) * 1000, 2)
                log.info(
                    f"{name} took {duration_ms}ms",
                    extra={"metric": name, "duration_ms": duration_ms, "success": success},
                )

        return wrapper

    return decorator
