"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Front ends catch ApplicationError at the call site and print its message.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class ExternalServiceError(ApplicationError):
    """Raised when an external service call fails."""

    def __init__(self, message: str = "External service error", code: str = "SYS_EXTERNAL_SERVICE_ERROR") -> None:
        super().__init__(message, code=code)


class FileStoreAPIError(ExternalServiceError):
    """
    Raised when the File Search API answers with a non-2xx status.

    Carries the HTTP status code and the raw response body so callers
    can report exactly what the service said.
    """

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"HTTP Error {status_code}: {body}", code="API_HTTP_ERROR")
