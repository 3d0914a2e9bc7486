"""Custom exception hierarchy for content-preview."""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(str, Enum):
    """Standardized error codes attached to every preview error."""

    # Argument errors
    INVALID_ARGUMENT = "INVALID_ARGUMENT"

    # Document errors
    MALFORMED_DOCUMENT = "MALFORMED_DOCUMENT"


class PreviewError(Exception):
    """
    Base exception for all content-preview errors.

    Carries a machine-readable error code and a details mapping so a
    pipeline host can report the failure without parsing the message.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            details: Optional additional context/details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to a plain dictionary.

        Returns:
            Dictionary with error, message, and details fields
        """
        return {
            "error": self.error_code.value,
            "message": self.message,
            "details": self.details
        }


class InvalidArgumentError(PreviewError, ValueError):
    """A word or character count was not a positive integer."""

    def __init__(self, message: str, argument: str, value: Any):
        super().__init__(
            message,
            ErrorCode.INVALID_ARGUMENT,
            details={"argument": argument, "value": repr(value)}
        )


class MalformedDocumentError(PreviewError):
    """Document record has no readable ``contents`` field."""

    def __init__(self, reason: str):
        super().__init__(
            f"Malformed document: {reason}",
            ErrorCode.MALFORMED_DOCUMENT,
            details={"reason": reason}
        )
