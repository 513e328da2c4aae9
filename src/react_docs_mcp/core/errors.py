"""Exceptions raised by the analyzer collaborator."""

from __future__ import annotations

from typing import Optional


class AnalyzerError(RuntimeError):
    """Raised when a source file cannot be analyzed."""

    def __init__(self, message: str, *, file_name: Optional[str] = None):
        super().__init__(message)
        self.file_name = file_name


class AnalyzerUnavailableError(AnalyzerError):
    """Raised when the analyzer runtime (Node.js) cannot be started."""


class AnalyzerTimeoutError(AnalyzerError):
    """Raised when the analyzer exceeds its time budget."""

    def __init__(
        self,
        message: str,
        *,
        file_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__(message, file_name=file_name)
        self.timeout = timeout
