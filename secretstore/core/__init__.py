"""Core module initialization."""

from .config_manager import (
    ConfigManager,
    SecretStoreConfig,
    StoreConfig,
    LoggingConfig,
    create_store,
    load_mapping_file,
)
from .logging_config import setup_logging

__all__ = [
    "ConfigManager",
    "SecretStoreConfig",
    "StoreConfig",
    "LoggingConfig",
    "create_store",
    "load_mapping_file",
    "setup_logging",
]
