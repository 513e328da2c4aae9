"""
Response envelope for structured react-docs output.

Every JSON result the CLI prints has the same shape:

    {
        "success": bool,
        "data": {...},         # command payload, or error_code/error_type on failure
        "error": str | null,
        "meta": {
            "version": "response-v2",
            "request_id": "cli_abc123",
            "telemetry": {...}?
        }
    }

Markdown documents are not wrapped; they are printed as-is.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union


class ErrorCode(str, Enum):
    """Canonical error codes for machine-readable failures."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"
    ANALYZER_ERROR = "ANALYZER_ERROR"
    ANALYZER_UNAVAILABLE = "ANALYZER_UNAVAILABLE"
    ANALYZER_TIMEOUT = "ANALYZER_TIMEOUT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorType(str, Enum):
    """Error categories that tell a caller whether to retry."""

    VALIDATION = "validation"  # No retry, fix input
    NOT_FOUND = "not_found"  # No retry
    ANALYZER = "analyzer"  # Retry once the analyzer runtime is fixed
    INTERNAL = "internal"  # Yes, with backoff


@dataclass
class ToolResponse:
    """One structured command result; serialized with ``dataclasses.asdict``."""

    success: bool
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=lambda: {"version": "response-v2"})


def _build_meta(
    *,
    request_id: Optional[str] = None,
    telemetry: Optional[Mapping[str, Any]] = None,
    extra: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    meta: Dict[str, Any] = {"version": "response-v2"}
    if request_id:
        meta["request_id"] = request_id
    if telemetry:
        meta["telemetry"] = dict(telemetry)
    if extra:
        meta.update(extra)
    return meta


def _enum_value(value: Union[Enum, str]) -> str:
    return value.value if isinstance(value, Enum) else value


def success_response(
    data: Optional[Mapping[str, Any]] = None,
    *,
    telemetry: Optional[Mapping[str, Any]] = None,
    request_id: Optional[str] = None,
    meta: Optional[Mapping[str, Any]] = None,
) -> ToolResponse:
    """Wrap a command payload in a success envelope.

    Args:
        data: Command payload, copied into ``data``.
        telemetry: Timing and count metadata for ``meta.telemetry``.
        request_id: Correlation identifier shared with log lines.
        meta: Extra keys merged into ``meta`` (for example ``project_root``).
    """
    return ToolResponse(
        success=True,
        data=dict(data or {}),
        error=None,
        meta=_build_meta(request_id=request_id, telemetry=telemetry, extra=meta),
    )


def error_response(
    message: str,
    *,
    error_code: Union[ErrorCode, str] = ErrorCode.INTERNAL_ERROR,
    error_type: Union[ErrorType, str] = ErrorType.INTERNAL,
    remediation: Optional[str] = None,
    details: Optional[Mapping[str, Any]] = None,
    request_id: Optional[str] = None,
) -> ToolResponse:
    """Wrap a failure in an error envelope.

    ``data`` carries the machine-readable part: ``error_code``,
    ``error_type`` and, when given, ``remediation`` and ``details``.

    Example:
        >>> error_response(
        ...     "Project not found: shop",
        ...     error_code=ErrorCode.PROJECT_NOT_FOUND,
        ...     error_type=ErrorType.NOT_FOUND,
        ...     remediation="Run `react-docs projects` to see available projects",
        ... )
    """
    payload: Dict[str, Any] = {
        "error_code": _enum_value(error_code),
        "error_type": _enum_value(error_type),
    }
    if remediation is not None:
        payload["remediation"] = remediation
    if details:
        payload["details"] = dict(details)

    return ToolResponse(
        success=False,
        data=payload,
        error=message,
        meta=_build_meta(request_id=request_id),
    )
