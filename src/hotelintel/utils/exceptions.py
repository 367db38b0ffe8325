"""Custom exception classes for HotelIntel."""


class HotelIntelError(Exception):
    """Base exception for HotelIntel."""
    pass


class ConfigError(HotelIntelError):
    """Configuration-related errors."""
    pass


class NetworkError(HotelIntelError):
    """Network and API-related errors."""
    pass


class AnalysisRequestFailed(NetworkError):
    """The analysis backend call failed or returned an unusable body."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class LLMError(HotelIntelError):
    """LLM processing errors."""
    pass


# Retryable errors
class RetryableError(HotelIntelError):
    """Base class for errors that should trigger retry."""
    pass


class RetryableLLMError(RetryableError, LLMError):
    """LLM errors that can be retried."""
    pass
