"""Display formatting for tracks and playlists."""

from datetime import datetime


def format_duration(seconds: float | None) -> str:
    """Format a duration in seconds as ``m:ss`` (``h:mm:ss`` past an hour)."""
    if not seconds or seconds < 0:
        return "0:00"

    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)

    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_date(value: datetime | None) -> str:
    """Format a timestamp as e.g. ``Mar 4, 2024``.

    A missing timestamp renders as the current date.
    """
    value = value or datetime.now()
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def format_track_count(count: int) -> str:
    return f"{count} track" if count == 1 else f"{count} tracks"
