"""Tests for user-facing notifications."""

from io import StringIO

from rich.console import Console

from src.utils.notifications import Notification, NotificationLevel, notify


class TestNotifications:
    """Tests for Notification rendering."""

    def render(self, notification: Notification) -> str:
        buffer = StringIO()
        notify(notification, console=Console(file=buffer, no_color=True, width=120))
        return buffer.getvalue()

    def test_levels(self):
        assert Notification.success("ok").level is NotificationLevel.SUCCESS
        assert Notification.warning("hmm").level is NotificationLevel.WARNING
        assert Notification.error("no").level is NotificationLevel.ERROR

    def test_warning_is_distinct_from_error(self):
        warning = self.render(Notification.warning("Track uploaded but could not be added to the playlist"))
        error = self.render(Notification.error("Failed to upload audio file"))

        assert "Warning:" in warning
        assert "Error:" in error
        assert "could not be added" in warning

    def test_title_and_description(self):
        output = self.render(Notification("Saved", "Profile updated successfully"))

        assert "Saved: Profile updated successfully" in output

    def test_description_is_not_markup(self):
        """Test that bracketed names are printed literally."""
        output = self.render(Notification.success("Playlist '[/x] [demo] take' created"))

        assert "'[/x] [demo] take'" in output
