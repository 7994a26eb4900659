"""
Error handling utilities for WhaleScope.

This module provides the exception hierarchy shared by the provider client,
the whale tracker and the API layer. Every error carries an ``ErrorCode`` and
the HTTP status the API layer should answer with.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Error codes for WhaleScope."""
    # General errors
    UNKNOWN_ERROR = 1000
    CONFIGURATION_ERROR = 1001
    VALIDATION_ERROR = 1002
    NOT_FOUND_ERROR = 1004

    # Upstream provider errors
    PROVIDER_ERROR = 3000
    PROVIDER_HTTP_ERROR = 3001
    PROVIDER_RPC_ERROR = 3002
    PROVIDER_NETWORK_ERROR = 3003
    PROVIDER_RESPONSE_ERROR = 3004


class WhaleScopeError(Exception):
    """Base exception class for all WhaleScope errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize a new WhaleScopeError.

        Args:
            message: Error message
            error_code: Error code from ErrorCode enum
            details: Additional error details
        """
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        formatted_message = f"[{error_code.name}] {message}"
        if details:
            formatted_message += f" - Details: {details}"

        super().__init__(formatted_message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to the API error body.

        Returns:
            Dictionary with error code name, message and status code
        """
        body: Dict[str, Any] = {
            "error": self.error_code.name,
            "message": self.message,
            "statusCode": self.status_code,
        }
        if self.details:
            body["details"] = self.details
        return body


class ConfigurationError(WhaleScopeError):
    """Error related to configuration issues."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


class ValidationError(WhaleScopeError):
    """Error related to validation failures."""

    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.VALIDATION_ERROR, details)


class NotFoundError(WhaleScopeError):
    """Raised when a requested resource does not exist."""

    status_code = 404

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.NOT_FOUND_ERROR, details)


class HeliusAPIError(WhaleScopeError):
    """Exception for failed Helius REST or JSON-RPC calls."""

    status_code = 502

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.PROVIDER_ERROR,
        http_status: Optional[int] = None,
        endpoint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the provider exception.

        Args:
            message: Error message
            error_code: Provider error code
            http_status: HTTP status code returned by the provider
            endpoint: The provider endpoint or RPC method that failed
            details: Additional error details
        """
        self.http_status = http_status
        self.endpoint = endpoint

        error_details = dict(details or {})
        if http_status:
            error_details["http_status"] = http_status
        if endpoint:
            error_details["endpoint"] = endpoint

        super().__init__(message, error_code, error_details)
