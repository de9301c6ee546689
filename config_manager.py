"""
Configuration management for the taste preference engine.
Handles loading, validating, and providing access to engine and web host settings.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass

from taste_engine.elo.settings import EngineConfig


@dataclass
class AppConfig:
    """Web host configuration settings."""
    host: str
    port: int
    debug: bool
    max_sessions: int


class ConfigManager:
    """Manages application configuration loading and access."""

    def __init__(self, config_file: str = "engine_config.json"):
        self.config_file = Path(config_file)
        self._config: Optional[Dict[str, Any]] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables."""
        # Start with default config
        self._config = self._get_default_config()

        # Load base config from file
        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                    self._merge_config(file_config)
            except (json.JSONDecodeError, FileNotFoundError):
                # Keep default config if file is invalid or not found
                pass

        # Override with environment variables
        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "engine": EngineConfig().to_dict(),
            "app": {
                "host": "0.0.0.0",
                "port": 22582,
                "debug": False,
                "max_sessions": 1000
            }
        }

    def _merge_config(self, file_config: Dict[str, Any]) -> None:
        """Merge file configuration with current config."""
        for section, values in file_config.items():
            if section in self._config and isinstance(values, dict):
                self._config[section].update(values)
            else:
                self._config[section] = values

    def _override_with_env(self) -> None:
        """Override configuration with environment variables."""
        # Engine settings
        if os.getenv("ELO_INITIAL_RATING"):
            self._config["engine"]["initial_rating"] = float(os.getenv("ELO_INITIAL_RATING"))

        if os.getenv("ELO_BASE_K"):
            self._config["engine"]["base_k"] = float(os.getenv("ELO_BASE_K"))

        if os.getenv("ELO_MIN_K"):
            self._config["engine"]["min_k"] = float(os.getenv("ELO_MIN_K"))

        if os.getenv("ELO_TOP_N"):
            self._config["engine"]["top_n"] = int(os.getenv("ELO_TOP_N"))

        if os.getenv("ELO_TOTAL_ROUNDS"):
            self._config["engine"]["total_rounds"] = int(os.getenv("ELO_TOTAL_ROUNDS"))

        if os.getenv("ELO_MIN_ROUNDS"):
            self._config["engine"]["min_rounds"] = int(os.getenv("ELO_MIN_ROUNDS"))

        # App settings
        if os.getenv("APP_HOST"):
            self._config["app"]["host"] = os.getenv("APP_HOST")

        if os.getenv("APP_PORT"):
            self._config["app"]["port"] = int(os.getenv("APP_PORT"))

        if os.getenv("APP_DEBUG"):
            self._config["app"]["debug"] = os.getenv("APP_DEBUG").lower() == "true"

        if os.getenv("MAX_SESSIONS"):
            self._config["app"]["max_sessions"] = int(os.getenv("MAX_SESSIONS"))

    def get_engine_config(self) -> EngineConfig:
        """Get engine configuration (raises ValueError on invalid values)."""
        return EngineConfig.from_dict(self._config["engine"])

    def get_app_config(self) -> AppConfig:
        """Get web host configuration."""
        app_config = self._config["app"]
        return AppConfig(
            host=app_config["host"],
            port=app_config["port"],
            debug=app_config["debug"],
            max_sessions=app_config["max_sessions"]
        )

    def get_config(self) -> Dict[str, Any]:
        """Get raw configuration dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    def save_config(self) -> None:
        """Save current configuration to file."""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)


# Global configuration instance
config_manager = ConfigManager()


def get_engine_config() -> EngineConfig:
    """Get engine configuration."""
    return config_manager.get_engine_config()


def get_app_config() -> AppConfig:
    """Get web host configuration."""
    return config_manager.get_app_config()


def reload_config() -> None:
    """Reload configuration."""
    config_manager.reload()


def save_config() -> None:
    """Save configuration to file."""
    config_manager.save_config()
