"""Configuration module."""
from .manager import Config, ConfigManager
from .settings import AppSettings, apply_logging_settings, get_settings

__all__ = ["Config", "ConfigManager", "AppSettings", "apply_logging_settings", "get_settings"]
