"""Domain-specific exceptions for the Snehayog client."""

from typing import Optional


class SnehayogError(Exception):
    """Base exception for all Snehayog client errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConfigurationError(SnehayogError):
    """Raised when there are configuration-related errors."""

    pass


class AuthenticationError(SnehayogError):
    """Raised when sign-in, sign-out or session verification fails."""

    pass


class APIError(SnehayogError):
    """Raised when calls to the Snehayog backend fail."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, cause)
        self.status_code = status_code


class NotFoundError(APIError):
    """Raised when a backend resource does not exist."""

    def __init__(
        self, resource: str, resource_id: str, cause: Optional[Exception] = None
    ) -> None:
        message = f"{resource.capitalize()} not found: {resource_id}"
        super().__init__(message, 404, cause)
        self.resource = resource
        self.resource_id = resource_id


class ValidationError(SnehayogError):
    """Raised when input validation fails before any I/O is attempted."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        message = f"Validation failed for {field}='{value}': {reason}"
        super().__init__(message)
        self.field = field
        self.value = value
        self.reason = reason


class UploadError(SnehayogError):
    """Raised when a video upload is rejected."""

    pass


class FileTooLargeError(UploadError):
    """Raised when an upload exceeds the allowed file size."""

    def __init__(self, size_bytes: int, max_bytes: int) -> None:
        message = f"File too large: {size_bytes} bytes (maximum {max_bytes} bytes)"
        super().__init__(message)
        self.size_bytes = size_bytes
        self.max_bytes = max_bytes


class UnsupportedFileTypeError(UploadError):
    """Raised when an upload has an extension the backend does not accept."""

    def __init__(self, extension: str, allowed: list[str]) -> None:
        message = (
            f"Invalid file type '.{extension}'. "
            f"Allowed types: {', '.join(allowed)}"
        )
        super().__init__(message)
        self.extension = extension
        self.allowed = allowed
