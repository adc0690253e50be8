"""
Custom exceptions for the application.
Provides a hierarchy of exceptions for different error scenarios.
"""

from typing import Optional, Dict, Any


class AppException(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        self.original_error = original_error
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details
            }
        }


class ConfigurationError(AppException):
    """Raised when there's a configuration issue."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
            details=details
        )


class LLMProviderError(AppException):
    """Raised when there's an error with the LLM provider."""

    def __init__(
        self,
        message: str,
        provider: str,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(
            message=message,
            code="LLM_PROVIDER_ERROR",
            details={"provider": provider, **(details or {})},
            original_error=original_error
        )


class ValidationError(AppException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={"field": field, **(details or {})}
        )


class AuthenticationError(AppException):
    """Raised when a request needs a logged-in user and there is none."""

    def __init__(
        self,
        message: str = "Not authenticated",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="AUTHENTICATION_ERROR",
            details=details
        )


class ResourceNotFoundError(AppException):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message or f"{resource_type} with id '{resource_id}' not found",
            code="RESOURCE_NOT_FOUND",
            details={"resource_type": resource_type,
                     "resource_id": resource_id, **(details or {})}
        )


class SessionNotFoundError(ResourceNotFoundError):
    """Raised when an interview session id is unknown or has expired."""

    def __init__(self, session_id: str):
        super().__init__(
            resource_type="InterviewSession",
            resource_id=session_id,
            message="Session not found"
        )
        self.code = "SESSION_NOT_FOUND"


class CallFlowError(AppException):
    """Raised when a call or meeting action cannot be applied."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(
            message=message,
            code="CALL_FLOW_ERROR",
            details=details,
            original_error=original_error
        )


class UploadError(AppException):
    """
    Raised when a file is rejected or its transfer fails.

    `error_type` is one of size, type, network or server. Only uploads
    carry a retry policy.
    """

    def __init__(
        self,
        message: str,
        error_type: str,
        retryable: bool = False,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(
            message=message,
            code="UPLOAD_ERROR",
            details={"type": error_type, "retryable": retryable,
                     **(details or {})},
            original_error=original_error
        )
        self.error_type = error_type
        self.retryable = retryable


HTTP_STATUS_BY_CODE = {
    "VALIDATION_ERROR": 400,
    "UPLOAD_ERROR": 400,
    "AUTHENTICATION_ERROR": 401,
    "RESOURCE_NOT_FOUND": 404,
    "SESSION_NOT_FOUND": 404,
    "CALL_FLOW_ERROR": 409,
}


def http_status_for(exc: AppException) -> int:
    """HTTP status for an application error; unknown codes are 500."""
    return HTTP_STATUS_BY_CODE.get(exc.code, 500)
