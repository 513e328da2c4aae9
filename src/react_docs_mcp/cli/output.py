"""JSON output helpers for the react-docs CLI.

Structured command results are emitted as response-v2 envelopes built by
react_docs_mcp.core.responses, so CLI output matches the shape scripts
already parse. Markdown documents are printed verbatim by the commands
themselves.
"""

import json
import sys
import uuid
from contextvars import ContextVar
from dataclasses import asdict
from typing import Any, Mapping, NoReturn

from react_docs_mcp.core.responses import error_response, success_response

_request_id: ContextVar[str] = ContextVar("request_id", default="")


def generate_request_id() -> str:
    """Generate a short request ID for CLI log correlation."""
    return f"cli_{uuid.uuid4().hex[:12]}"


def _ensure_request_id() -> str:
    request_id = _request_id.get()
    if request_id:
        return request_id
    request_id = generate_request_id()
    _request_id.set(request_id)
    return request_id


def emit(data: Any) -> None:
    """Emit minified JSON to stdout."""
    print(json.dumps(data, separators=(",", ":"), ensure_ascii=False, default=str))


def emit_success(
    data: Mapping[str, Any],
    *,
    telemetry: Mapping[str, Any] | None = None,
    meta: Mapping[str, Any] | None = None,
) -> None:
    """Emit success response envelope to stdout.

    Args:
        data: The operation-specific payload.
        telemetry: Timing/performance metadata.
        meta: Additional metadata to merge into meta object.
    """
    response = success_response(
        data,
        telemetry=telemetry,
        meta=meta,
        request_id=_ensure_request_id(),
    )
    emit(asdict(response))


def emit_error(
    message: str,
    code: str = "INTERNAL_ERROR",
    *,
    error_type: str = "internal",
    remediation: str | None = None,
    details: Mapping[str, Any] | None = None,
) -> NoReturn:
    """Emit error JSON to stderr and exit with code 1.

    Args:
        message: Human-readable error description.
        code: Error code in SCREAMING_SNAKE_CASE (e.g., VALIDATION_ERROR, PROJECT_NOT_FOUND).
        error_type: Error category for routing (validation, not_found, internal, etc.).
        remediation: Actionable guidance for resolving the error.
        details: Optional additional error context.

    Raises:
        SystemExit: Always exits with code 1.
    """
    response = error_response(
        message,
        error_code=code,
        error_type=error_type,
        remediation=remediation,
        details=details,
        request_id=_ensure_request_id(),
    )
    print(
        json.dumps(asdict(response), separators=(",", ":"), ensure_ascii=False, default=str),
        file=sys.stderr,
    )
    sys.exit(1)
