"""Configuration management module.

This module provides:
- Environment-based configuration with validation
- Registry-specific settings class
- Cached settings access via get_settings()
"""

from .settings import (
    ClusterRegistrySettings,
    DatabaseSettings,
    Environment,
    LogFormat,
    LogLevel,
    Settings,
    get_settings,
)

__all__ = [
    # Main settings
    "Settings",
    "get_settings",
    # Enums
    "Environment",
    "LogLevel",
    "LogFormat",
    # Component settings
    "DatabaseSettings",
    # Service-specific settings
    "ClusterRegistrySettings",
]
