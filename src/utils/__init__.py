"""Utility modules."""

from .config import Settings, load_config, save_config
from .logging import get_logger, setup_logging
from .notifications import Notification, NotificationLevel, notify
from .validation import ValidationError

__all__ = [
    "Notification",
    "NotificationLevel",
    "Settings",
    "ValidationError",
    "get_logger",
    "load_config",
    "notify",
    "save_config",
    "setup_logging",
]
