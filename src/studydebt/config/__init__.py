"""Configuration package for studydebt."""

from studydebt.config.app_config import (
    ApiConfig,
    AppConfig,
    CliConfig,
    DatabaseConfig,
    clear_config_cache,
    load_app_config,
)

__all__ = [
    "ApiConfig",
    "AppConfig",
    "CliConfig",
    "DatabaseConfig",
    "clear_config_cache",
    "load_app_config",
]
