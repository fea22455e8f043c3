"""
Error types for quizforge.

Two kinds matter to callers:
- ValidationError: user-correctable problems (missing field, answer not among
  options, unsupported export type). Public operations also wrap unexpected
  internal exceptions into a ValidationError with a composite message.
- UnsupportedExportError: a ValidationError raised when a renderer has no
  encoding for a question.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


class QuizForgeError(Exception):
    """Base error carrying an HTTP-style status and a machine-readable code."""

    status_code: int = 500
    code: str | None = None

    def __init__(self, message: str, status_code: int | None = None, code: str | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": type(self).__name__,
            "message": self.message,
            "statusCode": self.status_code,
            "code": self.code,
            "timestamp": self.timestamp,
        }


class ValidationError(QuizForgeError):
    """Raised when quiz data fails a required check."""

    status_code = 400
    code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        errors: list[str] | None = None,
    ):
        super().__init__(message)
        self.field = field
        self.errors = list(errors) if errors else []

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.errors:
            result["errors"] = self.errors
        return result


class UnsupportedExportError(ValidationError):
    """Raised when a question cannot be encoded in the requested export format."""

    code = "UNSUPPORTED_EXPORT"
