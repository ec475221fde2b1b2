"""Custom exception classes for the recipe scanning pipeline."""


class RecipeScanError(Exception):
    """Base exception for recipe scanning errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(RecipeScanError):
    """Missing or invalid configuration."""
    pass


class EmptyInputError(RecipeScanError):
    """No input images were found at the given location."""

    def __init__(self, location: str):
        super().__init__(
            f"No images found in {location}",
            {"location": location}
        )
        self.location = location


class ItemReadError(RecipeScanError):
    """An input item could not be read."""
    pass


class ImageEncodingError(RecipeScanError):
    """An input item could not be decoded or re-encoded as an image."""
    pass


class ServiceError(RecipeScanError):
    """Error talking to the AI service."""

    def __init__(self, message: str, status_code: int = None, details: dict = None):
        super().__init__(message, details)
        self.status_code = status_code


class TransportError(ServiceError):
    """The request never produced an HTTP response (connection, timeout)."""
    pass


class RateLimitedError(ServiceError):
    """The service answered 429 Too Many Requests."""

    def __init__(self, message: str = "Rate limited by service", details: dict = None):
        super().__init__(message, status_code=429, details=details)


class ClientError(ServiceError):
    """The service answered with a non-retryable error status."""

    def __init__(self, status_code: int, message: str = None, details: dict = None):
        super().__init__(
            message or f"Service returned HTTP {status_code}",
            status_code=status_code,
            details=details
        )


class RetriesExhaustedError(ServiceError):
    """Every allowed attempt failed with a retryable error."""

    def __init__(self, attempts: int, last_error: Exception = None):
        super().__init__(
            f"Gave up after {attempts} attempts: {last_error}",
            status_code=getattr(last_error, "status_code", None),
            details={"attempts": attempts}
        )
        self.attempts = attempts
        self.last_error = last_error


class ResponseParseError(ServiceError):
    """The service response is not valid structured data."""
    pass


class SchemaError(ServiceError):
    """The structured response does not have the expected shape."""
    pass
