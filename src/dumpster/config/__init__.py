"""Configuration management: TOML loading and config models.

Usage:
    >>> from dumpster.config import load_config, DatabaseProfile, DumpsterConfig
"""

from dumpster.config.loader import DEFAULT_CONFIG_NAME, load_config
from dumpster.config.models import (
    DatabaseProfile,
    DumpsterConfig,
    RetentionSettings,
    StorageSettings,
)

__all__ = [
    "load_config",
    "DEFAULT_CONFIG_NAME",
    "DumpsterConfig",
    "DatabaseProfile",
    "StorageSettings",
    "RetentionSettings",
]
