"""Configuration module."""

from src.config.logging import bind_request_user, configure_logging, get_logger
from src.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "bind_request_user",
    "configure_logging",
    "get_logger",
    "get_settings",
]
