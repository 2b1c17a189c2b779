"""Application configuration utilities."""

from .logging_config import JSONFormatter, get_logger, setup_logging
from .settings import DEFAULT_API_BASE_URL, Settings, get_settings

__all__ = [
    "DEFAULT_API_BASE_URL",
    "JSONFormatter",
    "Settings",
    "get_logger",
    "get_settings",
    "setup_logging",
]
