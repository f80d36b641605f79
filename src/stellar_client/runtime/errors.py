"""
Stellar Client Error Model

This module provides the error handling framework for the Stellar client,
covering the failures the XDR codec can report while decoding ledger results.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Client error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Decoding errors (100-199)
    DECODE_ERROR = 100
    TRUNCATED_INPUT = 101
    UNKNOWN_RESULT_CODE = 102
    UNKNOWN_OPERATION_TYPE = 103
    MALFORMED_COUNT = 104
    UNKNOWN_DISCRIMINANT = 105
    TRAILING_BYTES = 106
    INVALID_BASE64 = 107
    INVALID_PADDING = 108


class StellarError(Exception):
    """
    Base class for all Stellar client errors.

    Provides structured error information: a message, a code, free-form
    details and the underlying cause, if any.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a Stellar client error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
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
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StellarError':
        """Create error from dictionary representation."""
        code = ErrorCode(data.get("code", ErrorCode.UNKNOWN))
        message = data.get("message", "Unknown error")
        details = data.get("details")
        return StellarError(message, code, details)


class DecodeError(StellarError):
    """XDR decoding errors. The bytes could not be understood."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.DECODE_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class TruncatedInputError(DecodeError):
    """The buffer ended in the middle of a field."""

    def __init__(self, offset: int, needed: int, available: int, field: str = "field"):
        super().__init__(
            f"Truncated input: {field} needs {needed} bytes at offset {offset}, {available} available",
            ErrorCode.TRUNCATED_INPUT,
            {"offset": offset, "needed": needed, "available": available, "field": field},
        )
        self.offset = offset
        self.needed = needed
        self.available = available


class UnknownResultCodeError(DecodeError):
    """A result code tag outside its closed table."""

    def __init__(self, tag: int, scope: str = "transaction"):
        super().__init__(
            f"Unknown {scope} result code {tag}",
            ErrorCode.UNKNOWN_RESULT_CODE,
            {"tag": tag, "scope": scope},
        )
        self.tag = tag
        self.scope = scope


class UnknownOperationTypeError(DecodeError):
    """An operation type tag outside the closed operation table."""

    def __init__(self, tag: int):
        super().__init__(
            f"Unknown operation type {tag}",
            ErrorCode.UNKNOWN_OPERATION_TYPE,
            {"tag": tag},
        )
        self.tag = tag


class MalformedCountError(DecodeError):
    """A declared count or length that is negative or implausibly large."""

    def __init__(self, count: int, limit: int, field: str = "count"):
        super().__init__(
            f"Malformed {field} {count} (allowed 0..{limit})",
            ErrorCode.MALFORMED_COUNT,
            {"count": count, "limit": limit, "field": field},
        )
        self.count = count
        self.limit = limit


class UnknownDiscriminantError(DecodeError):
    """An unknown arm in an auxiliary XDR union (asset type, key type, ...)."""

    def __init__(self, tag: int, union: str):
        super().__init__(
            f"Unknown {union} discriminant {tag}",
            ErrorCode.UNKNOWN_DISCRIMINANT,
            {"tag": tag, "union": union},
        )
        self.tag = tag
        self.union = union


class ErrorHandler:
    """
    Utility class for handling and categorizing errors.
    """

    @staticmethod
    def is_retryable(error: Exception) -> bool:
        """
        Check if an error is retryable.

        Decode errors never are: the bytes are fixed, so decoding them again
        gives the same answer.

        Args:
            error: Exception to check

        Returns:
            True if the error should be retried
        """
        if isinstance(error, DecodeError):
            return False
        if isinstance(error, StellarError):
            return error.code == ErrorCode.INTERNAL
        return False

    @staticmethod
    def is_decode_error(error: Exception) -> bool:
        """True when the response could not be understood, as opposed to a rejected transaction."""
        return isinstance(error, DecodeError)


# Re-export key error types for convenience
__all__ = [
    "ErrorCode",
    "StellarError",
    "DecodeError",
    "TruncatedInputError",
    "UnknownResultCodeError",
    "UnknownOperationTypeError",
    "MalformedCountError",
    "UnknownDiscriminantError",
    "ErrorHandler",
]
