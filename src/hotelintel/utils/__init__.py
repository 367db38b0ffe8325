"""Utility modules."""
from .logger import get_logger, set_location_context, get_app_home
from .exceptions import (
    HotelIntelError,
    ConfigError,
    NetworkError,
    AnalysisRequestFailed,
    LLMError,
    RetryableError,
    RetryableLLMError
)
from .retry import retry_with_backoff

__all__ = [
    "get_logger",
    "set_location_context",
    "get_app_home",
    "HotelIntelError",
    "ConfigError",
    "NetworkError",
    "AnalysisRequestFailed",
    "LLMError",
    "RetryableError",
    "RetryableLLMError",
    "retry_with_backoff"
]
