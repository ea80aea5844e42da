"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides shared utilities, constants, and enums that are used
across multiple layers of the application:
- Environment names and log levels
- Logging configuration and logger access

Following Clean Architecture principles it must not depend on the
Infrastructure layer or on frameworks.
"""

from .consts import DEFAULT_LOG_FORMAT, EnumEnvironment, EnumLogLevel
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "DEFAULT_LOG_FORMAT",
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
