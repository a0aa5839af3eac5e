"""User-facing notifications for vault operations.

Every failure, whatever its cause, reaches the user as a single notification
with a title and a description. Partial failures are reported at ``warning``
level so they stay distinguishable from outright errors.
"""

from dataclasses import dataclass
from enum import Enum

from rich.console import Console
from rich.markup import escape

from src.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationLevel(str, Enum):
    """Severity of a notification."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


LEVEL_STYLES = {
    NotificationLevel.SUCCESS: ("green", "✓"),
    NotificationLevel.WARNING: ("yellow", "!"),
    NotificationLevel.ERROR: ("red", "✗"),
}


@dataclass
class Notification:
    """A title/description pair shown to the user."""

    title: str
    description: str
    level: NotificationLevel = NotificationLevel.SUCCESS

    @classmethod
    def success(cls, description: str) -> "Notification":
        return cls("Success", description, NotificationLevel.SUCCESS)

    @classmethod
    def warning(cls, description: str) -> "Notification":
        return cls("Warning", description, NotificationLevel.WARNING)

    @classmethod
    def error(cls, description: str) -> "Notification":
        return cls("Error", description, NotificationLevel.ERROR)


def notify(notification: Notification, console: Console | None = None) -> None:
    """Render a notification on the console.

    Args:
        notification: Notification to show
        console: Console to print on (defaults to a stderr console for errors)
    """
    color, mark = LEVEL_STYLES[notification.level]
    if console is None:
        console = Console(stderr=notification.level is NotificationLevel.ERROR)

    console.print(
        f"[{color}]{mark}[/{color}] [bold]{escape(notification.title)}:[/bold] {escape(notification.description)}"
    )
    logger.debug(
        "notification_shown",
        level=notification.level.value,
        title=notification.title,
    )
