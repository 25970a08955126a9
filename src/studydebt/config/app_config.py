"""Application configuration loader.

Loads configuration from data/config/app_config_v1.yaml, merged over
built-in defaults. Missing file or missing keys fall back to defaults.

Usage:
    from studydebt.config.app_config import load_app_config

    config = load_app_config()
    db_path = config.database.path
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/app_config_v1.yaml")


@dataclass
class DatabaseConfig:
    """SQLite storage settings."""

    path: Path = Path("db/studydebt.db")


@dataclass
class ApiConfig:
    """Web API settings."""

    # Header set by the upstream identity proxy
    user_header: str = "X-User-Id"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class CliConfig:
    """CLI defaults."""

    default_user: str = "local"


@dataclass
class AppConfig:
    """Application-wide configuration."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    cli: CliConfig = field(default_factory=CliConfig)


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "database": {
            "path": "db/studydebt.db",
        },
        "api": {
            "user_header": "X-User-Id",
            "cors_origins": ["*"],
        },
        "cli": {
            "default_user": "local",
        },
    }


def _merge(defaults: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Merge one level of nested sections over defaults."""
    result = {k: dict(v) for k, v in defaults.items()}
    for section, values in (overrides or {}).items():
        if isinstance(values, dict) and section in result:
            result[section].update(values)
        else:
            result[section] = values
    return result


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    db_data = data.get("database", {})
    api_data = data.get("api", {})
    cli_data = data.get("cli", {})

    return AppConfig(
        database=DatabaseConfig(path=Path(db_data.get("path", "db/studydebt.db"))),
        api=ApiConfig(
            user_header=api_data.get("user_header", "X-User-Id"),
            cors_origins=list(api_data.get("cors_origins", ["*"])),
        ),
        cli=CliConfig(default_user=cli_data.get("default_user", "local")),
    )


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    data = _get_defaults()

    if CONFIG_FILE.exists():
        logger.debug("loading_app_config", source=str(CONFIG_FILE))
        file_data = yaml.safe_load(CONFIG_FILE.read_text(encoding="utf-8")) or {}
        data = _merge(data, file_data)
    else:
        logger.info("using_default_config")

    _cached_config = _parse_config(data)
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
