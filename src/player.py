"""Playback state shared by the vault views."""

from src.utils.logging import get_logger
from src.vault_api.models import Track

logger = get_logger(__name__)


class Player:
    """Tracks what is loaded in the audio player and whether it is playing."""

    def __init__(self) -> None:
        self.current_track: Track | None = None
        self.is_playing = False

    def play(self, track: Track) -> None:
        self.current_track = track
        self.is_playing = True
        logger.info("playback_started", track_id=track.id, name=track.name)

    def toggle(self) -> bool:
        """Flip play/pause. Returns the new playing state."""
        if self.current_track is None:
            return False
        self.is_playing = not self.is_playing
        return self.is_playing

    def close(self) -> None:
        self.current_track = None
        self.is_playing = False
