"""Error models for Signaturit SDK."""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    """Machine-readable error codes carried by SDK exceptions."""

    UNKNOWN_ERROR = "SIGNATURIT_ERROR"
    SERIALIZATION_ERROR = "SERIALIZATION_ERROR"
    DESERIALIZATION_ERROR = "DESERIALIZATION_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    TIMEOUT = "TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"


class SignaturitError(Exception):
    """Base exception for Signaturit SDK."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or ErrorCode.UNKNOWN_ERROR.value
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


class SerializationError(SignaturitError):
    """Request parameters could not be turned into a parameter tree or request body."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(
            message,
            code=ErrorCode.SERIALIZATION_ERROR.value,
            details={"path": path} if path else None,
        )
        self.path = path


class TransportError(SignaturitError):
    """Network failure, timeout or non-2xx response.

    ``status_code`` is ``None`` when no response was received at all.
    ``body`` holds the raw response text so callers can still inspect
    API-level error payloads.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        code: Optional[str] = None,
    ):
        details: dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, code=code or ErrorCode.HTTP_ERROR.value, details=details)
        self.status_code = status_code
        self.body = body

    @classmethod
    def from_response(cls, status_code: int, body: str) -> "TransportError":
        """Create TransportError from an HTTP error response."""
        return cls(
            f"Request failed with status {status_code}",
            status_code=status_code,
            body=body,
        )


class DeserializationError(SignaturitError):
    """Response body is not the JSON document the caller asked for."""

    def __init__(self, message: str, body: Optional[str] = None):
        super().__init__(message, code=ErrorCode.DESERIALIZATION_ERROR.value)
        self.body = body
