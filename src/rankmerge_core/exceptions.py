"""
Exception hierarchy for rankmerge.

Defines all exception types with error codes and correlation IDs.
Every error is reported synchronously to the immediate caller; fusion is
deterministic, so none of them is transient.

License: MIT
"""

import uuid
from typing import Any, Dict, Optional


class RankMergeError(Exception):
    """
    Base exception for all rankmerge errors.

    Provides standard error attributes: message, error_code, details,
    correlation_id.

    Attributes:
        message: Human-readable error message
        error_code: Programmatic error code (e.g., "LIST_001")
        details: Additional context (dict)
        correlation_id: UUID for tracing across layers
        original_exception: Wrapped exception (if any)

    Example:
        raise RankMergeError(
            message="Operation failed",
            error_code="ERR_UNKNOWN",
            details={"param": "value"},
        )
    """

    def __init__(
        self,
        message: str,
        error_code: str = "ERR_UNKNOWN",
        details: Optional[Dict[str, Any]] = None,
        correlation_id: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        """
        Initialize RankMergeError.

        Args:
            message: Error message
            error_code: Error code for programmatic handling
            details: Additional context dict
            correlation_id: UUID for request tracing
            original_exception: Original wrapped exception
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.correlation_id = correlation_id or str(uuid.uuid4())
        self.original_exception = original_exception

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for logging/serialization.

        Returns:
            Dictionary with all error information
        """
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
            "correlation_id": self.correlation_id,
            "original_error": str(self.original_exception) if self.original_exception else None,
        }


# === Core Layer Exceptions ===


class ValidationError(RankMergeError):
    """
    Raised when input validation fails.

    Error Codes:
        VAL_001: Missing required field
        VAL_002: Invalid field type
        VAL_003: Field value out of range
        VAL_004: Invalid field format
    """

    def __init__(self, message: str, error_code: str = "VAL_001", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)


class DuplicateDocumentError(ValidationError):
    """
    Raised when a single source list contains the same document twice.

    Error Codes:
        LIST_001: Duplicate document identifier
    """

    def __init__(self, message: str, error_code: str = "LIST_001", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)


class InconsistentOrderError(ValidationError):
    """
    Raised when explicit ranks contradict score order within one list.

    Error Codes:
        LIST_002: Score increases along rank order, or a rank is repeated
    """

    def __init__(self, message: str, error_code: str = "LIST_002", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)


class FusionError(RankMergeError):
    """
    Raised when a fusion invocation cannot proceed.

    Error Codes:
        FUSE_001: No input lists
        FUSE_002: Strategy produced a non-finite score
    """

    def __init__(self, message: str, error_code: str = "FUSE_001", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)


class EmptyInputError(FusionError):
    """Raised when fuse() is called with zero input lists."""

    def __init__(self, message: str = "no input lists to fuse", **kwargs):
        super().__init__(message=message, error_code="FUSE_001", **kwargs)


class UnknownStrategyError(RankMergeError):
    """
    Raised when a strategy name has no registered implementation.

    Error Codes:
        STRAT_001: Unknown strategy name
    """

    def __init__(self, message: str, error_code: str = "STRAT_001", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)
