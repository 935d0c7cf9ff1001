from unistay.config.settings import settings, get_settings, Settings
from unistay.config.logging import setup_logging, get_logger

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "setup_logging",
    "get_logger",
]
