"""Logging infrastructure with market location context."""
import contextvars
import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional

# Scoped to the current thread or task
_location: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("location", default=None)


def get_app_home() -> Path:
    """Directory holding logs and the user config file."""
    return Path(os.getenv("HOTELINTEL_HOME", Path.home() / ".hotelintel"))


class LocationContextFilter(logging.Filter):
    """Add the active market location to log records."""

    def filter(self, record):
        """Add location to record."""
        record.location = _location.get() or "global"
        return True


class HotelIntelLogger:
    """Centralized logging manager."""

    def __init__(self, log_level: str = "INFO", max_bytes: int = 10 * 1024 * 1024, backup_count: int = 30):
        self.log_dir = get_app_home() / "logs"
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.log_file = self.log_dir / "hotelintel.log"
        self.location_filter = LocationContextFilter()
        self.logger = logging.getLogger("hotelintel")
        self.configure(log_level, max_bytes, backup_count)

    def configure(self, log_level: str, max_bytes: int, backup_count: int):
        """(Re)build handlers with the given level and rotation."""
        level = getattr(logging, log_level.upper(), None)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {log_level}")
        self.logger.setLevel(level)

        # Remove existing handlers
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        file_handler = RotatingFileHandler(
            self.log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [location:%(location)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

        file_handler.setFormatter(formatter)
        console_handler.setFormatter(formatter)

        file_handler.addFilter(self.location_filter)
        console_handler.addFilter(self.location_filter)

        self.logger.addHandler(file_handler)
        self.logger.addHandler(console_handler)

    def get_logger(self) -> logging.Logger:
        """Get the configured logger."""
        return self.logger


# Global logger instance
_logger_instance: Optional[HotelIntelLogger] = None


def get_logger(log_level: str = "INFO") -> logging.Logger:
    """Get or create global logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = HotelIntelLogger(log_level)
    return _logger_instance.get_logger()


def configure_logging(log_level: str = "INFO", max_file_size_mb: float = 10, backup_count: int = 30) -> logging.Logger:
    """
    Apply level and rotation to the global logger.

    Modules grab the logger at import time, so this reconfigures the
    existing instance in place rather than replacing it.
    """
    global _logger_instance
    max_bytes = int(max_file_size_mb * 1024 * 1024)
    if _logger_instance is None:
        _logger_instance = HotelIntelLogger(log_level, max_bytes, backup_count)
    else:
        _logger_instance.configure(log_level, max_bytes, backup_count)
    return _logger_instance.get_logger()


def set_location_context(location: Optional[str]):
    """Set market location context for logging."""
    _location.set(location)
