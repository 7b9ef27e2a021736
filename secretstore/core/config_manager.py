"""
Configuration management for SecretStore.

Handles loading, validation, and access to configuration settings.
"""

import os
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional
from enum import Enum

import yaml
from pydantic import BaseModel, Field, field_validator, ValidationError, ConfigDict

from secretstore.kv.store import KVStore

logger = logging.getLogger(__name__)

ENV_PREFIX = "SECRETSTORE_"


class LogLevel(str, Enum):
    """Valid log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Supported log output formats."""
    JSON = "json"
    TEXT = "text"


class StoreConfig(BaseModel):
    """KV store configuration."""
    max_secret_versions: int = Field(
        default=10,
        ge=1,
        description="Number of versions retained per secret path"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    file: Optional[str] = None
    rotation_size: str = "10MB"
    rotation_count: int = Field(default=5, ge=0)
    module_levels: Optional[Dict[str, str]] = Field(
        default=None,
        description="Per-module log levels, e.g., {'secretstore.kv.store': 'DEBUG'}"
    )


class SecretStoreConfig(BaseModel):
    """Main SecretStore configuration schema."""

    version: str = Field(default="0.1.0", description="Configuration version")

    store: StoreConfig = Field(default_factory=StoreConfig)

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Validate version format."""
        parts = v.split(".")
        if len(parts) != 3:
            raise ValueError("Version must be in format x.y.z")
        for part in parts:
            if not part.isdigit():
                raise ValueError("Version components must be numeric")
        return v

    model_config = ConfigDict(use_enum_values=True)


class ConfigManager:
    """
    Manages SecretStore configuration loading and validation.

    Configuration precedence (highest to lowest):
    1. CLI arguments
    2. Environment variables (SECRETSTORE_*)
    3. Configuration file (YAML/JSON)
    4. Defaults
    """

    def __init__(self):
        self._config: Optional[SecretStoreConfig] = None
        self._config_file: Optional[Path] = None

    def load(
        self,
        config_file: Optional[str] = None,
        cli_overrides: Optional[Dict[str, Any]] = None
    ) -> SecretStoreConfig:
        """
        Load and validate configuration from multiple sources.

        Args:
            config_file: Path to configuration file (YAML or JSON)
            cli_overrides: Dictionary of CLI argument overrides

        Returns:
            Validated SecretStoreConfig instance

        Raises:
            ValidationError: If configuration is invalid
            FileNotFoundError: If specified config file doesn't exist
        """
        logger.info("Loading SecretStore configuration")

        config_dict: Dict[str, Any] = {}

        if config_file:
            config_dict = load_mapping_file(config_file)
            self._config_file = Path(config_file)
            logger.info(f"Loaded configuration from file: {config_file}")

        env_config = self._load_from_env()
        config_dict = self._merge_configs(config_dict, env_config)
        if env_config:
            logger.info(f"Applied {len(env_config)} environment variable overrides")

        if cli_overrides:
            config_dict = self._merge_configs(config_dict, cli_overrides)
            logger.info(f"Applied {len(cli_overrides)} CLI argument overrides")

        try:
            self._config = SecretStoreConfig(**config_dict)
        except ValidationError as e:
            logger.error(f"Configuration validation failed: {e}")
            raise

        logger.info("Configuration validated successfully")
        logger.debug(f"Active configuration: {json.dumps(self._config.model_dump(), indent=2)}")
        return self._config

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config: Dict[str, Any] = {}

        if max_versions := os.getenv(f"{ENV_PREFIX}MAX_SECRET_VERSIONS"):
            # Left as a string so pydantic reports non-numeric values
            config.setdefault("store", {})["max_secret_versions"] = max_versions

        if log_level := os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            config.setdefault("logging", {})["level"] = log_level.upper()
        if log_format := os.getenv(f"{ENV_PREFIX}LOG_FORMAT"):
            config.setdefault("logging", {})["format"] = log_format.lower()
        if log_file := os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            config.setdefault("logging", {})["file"] = log_file

        return config

    def _merge_configs(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two configuration dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def get_config(self) -> SecretStoreConfig:
        """
        Get the loaded configuration.

        Raises:
            RuntimeError: If configuration hasn't been loaded
        """
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load() first.")
        return self._config

    def reload(self) -> SecretStoreConfig:
        """Reload configuration from the same sources."""
        config_file = str(self._config_file) if self._config_file else None
        return self.load(config_file=config_file)


def load_mapping_file(file_path: str) -> Dict[str, Any]:
    """
    Load a YAML or JSON file whose top level is a mapping.

    Args:
        file_path: Path to a .yaml, .yml or .json file

    Returns:
        Parsed mapping (empty for an empty YAML file)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the suffix is unsupported or the top level isn't a mapping
        yaml.YAMLError: If a YAML file is malformed
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    with open(path, 'r') as f:
        if path.suffix in ['.yaml', '.yml']:
            loaded = yaml.safe_load(f) or {}
        elif path.suffix == '.json':
            loaded = json.load(f)
        else:
            raise ValueError(f"Unsupported file format: {path.suffix}")

    if not isinstance(loaded, dict):
        raise ValueError(f"Expected a mapping at the top level of {file_path}")
    return loaded


def create_store(config: SecretStoreConfig) -> KVStore:
    """Build a KV store from a loaded configuration."""
    return KVStore(max_versions=config.store.max_secret_versions)
