"""Core crudmeta utilities.

This module exports core utilities for use throughout the application.
"""

from crudmeta.core.config import Settings, get_settings
from crudmeta.core.exceptions import ConfigurationError, CrudMetaError
from crudmeta.core.logging import (
    LoggingContext,
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "ConfigurationError",
    "CrudMetaError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "LoggingContext",
    "bind_correlation_id",
    "clear_context",
]
