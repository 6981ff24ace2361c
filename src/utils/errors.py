"""Custom exception classes for Forex Sage."""


class ForexSageError(Exception):
    """Base exception for all Forex Sage errors."""
    pass


class ConfigurationError(ForexSageError):
    """Raised when there's a configuration error."""
    pass


class ValidationError(ForexSageError):
    """Raised when input validation fails (e.g. an unusable pair symbol)."""
    pass


class StorageError(ForexSageError):
    """Raised when the snapshot store cannot be read or written."""
    pass


class DataProviderError(ForexSageError):
    """Base exception for quote provider errors."""
    pass


class TransportError(DataProviderError):
    """Raised when the upstream API cannot be reached."""
    pass


class ServerError(DataProviderError):
    """Raised when the upstream API answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str = ""):
        self.status_code = status_code
        super().__init__(message or f"Server error: {status_code}")


class ResponseDecodeError(DataProviderError):
    """Raised when the upstream payload is not a JSON object."""
    pass


class RateLimitError(DataProviderError):
    """Raised when the upstream API reports call-frequency throttling."""
    pass


class UpstreamError(DataProviderError):
    """Raised when the upstream payload carries an explicit error message."""
    pass


class UpstreamNoteError(UpstreamError):
    """Raised for an advisory ``Note`` that is not a rate-limit notice."""
    pass
