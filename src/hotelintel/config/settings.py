"""Application settings loader from YAML configuration."""
import logging
import os
import yaml
from pathlib import Path
from typing import Optional
from dataclasses import dataclass

from hotelintel.utils.logger import configure_logging

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "resources" / "config.yaml"


@dataclass
class AppSettings:
    """Application-wide settings loaded from config.yaml."""

    # App info
    app_name: str
    app_version: str

    # Logging
    log_level: str
    log_max_file_size_mb: int
    log_backup_count: int

    # Currency
    usd_to_inr: float
    inr_per_gbp: float

    # Timeline window
    timeline_start_year: int
    timeline_start_month: int
    timeline_months: int

    # Dashboard defaults
    default_location: str
    default_budget_inr: float
    default_target_monthly_profit: float
    default_target_roi: float
    default_display_currency: str
    default_selected_month: str

    # Analysis backend
    analysis_endpoint: str
    analysis_timeout_seconds: Optional[float]

    # LLM
    llm_model_name: str
    llm_max_retries: int
    llm_initial_delay_seconds: int
    llm_backoff_factor: int

    # Server
    server_host: str
    server_port: int

    @classmethod
    def load(cls, config_path: Path = None) -> "AppSettings":
        """Load settings from YAML file."""
        if config_path is None:
            env_path = os.getenv("HOTELINTEL_CONFIG")
            if env_path:
                config_path = Path(env_path)
            else:
                config_path = DEFAULT_CONFIG_PATH

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)

        return cls(
            app_name=config["app"]["name"],
            app_version=str(config["app"]["version"]),
            log_level=config["logging"]["level"],
            log_max_file_size_mb=config["logging"]["max_file_size_mb"],
            log_backup_count=config["logging"]["backup_count"],
            usd_to_inr=float(config["currency"]["usd_to_inr"]),
            inr_per_gbp=float(config["currency"]["inr_per_gbp"]),
            timeline_start_year=config["timeline"]["start_year"],
            timeline_start_month=config["timeline"]["start_month"],
            timeline_months=config["timeline"]["months"],
            default_location=config["dashboard"]["location"],
            default_budget_inr=config["dashboard"]["budget_inr"],
            default_target_monthly_profit=config["dashboard"]["target_monthly_profit"],
            default_target_roi=config["dashboard"]["target_roi"],
            default_display_currency=config["dashboard"]["display_currency"],
            default_selected_month=str(config["dashboard"]["selected_month"]),
            analysis_endpoint=config["analysis"]["endpoint"],
            analysis_timeout_seconds=config["analysis"].get("timeout_seconds"),
            llm_model_name=config["llm"]["model_name"],
            llm_max_retries=config["llm"]["max_retries"],
            llm_initial_delay_seconds=config["llm"]["initial_delay_seconds"],
            llm_backoff_factor=config["llm"]["backoff_factor"],
            server_host=config["server"]["host"],
            server_port=config["server"]["port"]
        )


# Global settings instance
_settings: AppSettings = None


def get_settings() -> AppSettings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings.load()
    return _settings


def apply_logging_settings(settings: AppSettings, config=None) -> logging.Logger:
    """Configure the logger from settings; a user config log level wins."""
    log_level = config.log_level if config and config.log_level else settings.log_level
    return configure_logging(log_level, settings.log_max_file_size_mb, settings.log_backup_count)
