"""Configuration manager for secrets and user overrides."""
import json
import os
from dataclasses import dataclass, asdict
from typing import Optional

from hotelintel.utils.logger import get_app_home
from hotelintel.utils.exceptions import ConfigError


@dataclass
class Config:
    """User configuration."""
    gemini_api_key: str = ""
    analysis_endpoint: Optional[str] = None
    log_level: Optional[str] = None


class ConfigManager:
    """Manages the user configuration file and environment overrides."""

    def __init__(self):
        self.config_dir = get_app_home()
        self.config_file = self.config_dir / "config.json"
        self.config_dir.mkdir(parents=True, exist_ok=True)

    def load_config(self) -> Optional[Config]:
        """Load configuration from file, then apply environment overrides."""
        config = None
        if self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    config = Config(**json.load(f))
            except (OSError, ValueError, TypeError) as e:
                raise ConfigError(f"Failed to load configuration: {e}")

        api_key = os.getenv("GEMINI_API_KEY")
        endpoint = os.getenv("HOTELINTEL_ANALYSIS_ENDPOINT")
        if api_key or endpoint:
            config = config or Config()
            if api_key:
                config.gemini_api_key = api_key
            if endpoint:
                config.analysis_endpoint = endpoint

        return config

    def save_config(self, config: Config) -> None:
        """Save configuration to the user config file."""
        try:
            with open(self.config_file, "w", encoding="utf-8") as f:
                json.dump(asdict(config), f, indent=2)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration: {e}")

    def validate_config(self, config: Config, require_api_key: bool = True) -> tuple[bool, str]:
        """Validate configuration values."""
        if require_api_key and not config.gemini_api_key:
            return False, "Gemini API key is required"

        if config.analysis_endpoint and not config.analysis_endpoint.startswith(("http://", "https://")):
            return False, "Analysis endpoint must be an http(s) URL"

        if config.log_level and config.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            return False, f"Unknown log level: {config.log_level}"

        return True, "Configuration is valid"
