"""
TxRep Error Model

This module provides the error handling framework for the TxRep transcoder.
Every decode failure carries the exact dotted key of the offending line so a
caller can point a user at it.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """TxRep error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Text decoding errors (100-199)
    MISSING_FIELD = 100
    INVALID_FIELD = 101
    BOUNDS_EXCEEDED = 102

    # Binary / model errors (200-299)
    INVALID_BINARY = 200
    UNSUPPORTED_OPERATION = 201


class TxRepError(Exception):
    """
    Base class for all TxRep errors.

    Provides structured error information including the dotted key the
    error refers to, when there is one.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 key: Optional[str] = None, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        """
        Initialize a TxRep error.

        Args:
            message: Error message
            code: Error code
            key: Dotted TxRep key the error refers to
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.key = key
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result: Dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.key is not None:
            result["key"] = self.key
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class MissingFieldError(TxRepError):
    """A required key is absent from the field map."""

    def __init__(self, key: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"missing {key}", ErrorCode.MISSING_FIELD, key, details)


class InvalidFieldError(TxRepError):
    """A key is present but its value fails validation."""

    def __init__(self, key: str, reason: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        message = f"invalid {key}: {reason}" if reason else f"invalid {key}"
        super().__init__(message, ErrorCode.INVALID_FIELD, key, details, cause)
        self.reason = reason


class BoundsExceededError(TxRepError):
    """A length-prefixed collection is larger than its cap."""

    def __init__(self, key: str, limit: int, actual: Optional[int] = None):
        details = {"limit": limit}
        if actual is not None:
            details["actual"] = actual
        super().__init__(f"{key} exceeds maximum of {limit}", ErrorCode.BOUNDS_EXCEEDED, key, details)
        self.limit = limit
        self.actual = actual


class UnsupportedOperationError(TxRepError):
    """The model holds something TxRep cannot represent."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message, ErrorCode.UNSUPPORTED_OPERATION, key)


class BinaryEncodingError(TxRepError):
    """XDR input could not be decoded, or a model could not be encoded."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_BINARY, cause=cause)


def map_exception(exc: Exception, key: str, reason: Optional[str] = None) -> TxRepError:
    """
    Map a collaborator exception to a TxRep error for the given key.

    Args:
        exc: Exception raised by a parser, by pydantic or by stellar_sdk
        key: Dotted key being decoded
        reason: Message to report instead of the exception text

    Returns:
        TxRepError instance; TxRep errors are returned unchanged
    """
    if isinstance(exc, TxRepError):
        return exc
    return InvalidFieldError(key, reason or str(exc) or exc.__class__.__name__, cause=exc)


__all__ = [
    "ErrorCode",
    "TxRepError",
    "MissingFieldError",
    "InvalidFieldError",
    "BoundsExceededError",
    "UnsupportedOperationError",
    "BinaryEncodingError",
    "map_exception",
]
