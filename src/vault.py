"""Vault view logic: playlist browsing, playback and search."""

import asyncio

from src.player import Player
from src.search import search_library
from src.utils.config import COLOR_OPTIONS, PLAYLIST_ICON_OPTIONS, PlaylistDefaults
from src.utils.logging import get_logger
from src.utils.validation import ValidationError, require_name
from src.vault_api import Playlist, PlaylistDetail, SearchResults, Track, VaultClient

logger = get_logger(__name__)


def validate_appearance(color: str, icon: str, icons: dict[str, str]) -> None:
    """Reject colours and icons the creation dialog does not offer.

    Args:
        color: Display colour code
        icon: Icon identifier
        icons: Icons allowed for this kind of grouping
    """
    if color not in COLOR_OPTIONS:
        raise ValidationError(f"Unknown color {color!r}")
    if icon not in icons:
        raise ValidationError(f"Unknown icon {icon!r}")


class VaultSession:
    """State behind the vault landing view.

    Holds the selected playlist and its tracks, forwards playback to a
    ``Player`` and runs searches over the client's cached data.
    """

    def __init__(
        self,
        client: VaultClient,
        player: Player | None = None,
        defaults: PlaylistDefaults | None = None,
    ) -> None:
        self.client = client
        self.player = player or Player()
        self.defaults = defaults or PlaylistDefaults()
        self.selected: PlaylistDetail | None = None

    @property
    def tracks(self) -> list[Track]:
        return self.selected.tracks if self.selected else []

    @property
    def current_track(self) -> Track | None:
        return self.player.current_track

    async def load_playlists(self, refresh: bool = False) -> list[Playlist]:
        return await self.client.get_playlists(refresh=refresh)

    async def track_counts(self, playlists: list[Playlist]) -> dict[int, int]:
        """Count tracks per playlist from each playlist's real track list.

        Args:
            playlists: Playlists to count

        Returns:
            Mapping of playlist ID to number of tracks
        """
        details = await asyncio.gather(*(self.client.get_playlist(p.id) for p in playlists))
        return {detail.id: detail.track_count for detail in details}

    async def open_playlist(self, playlist_id: int) -> PlaylistDetail:
        """Select a playlist and load its tracks."""
        detail = await self.client.get_playlist(playlist_id)
        self.selected = detail
        logger.debug("playlist_opened", playlist_id=playlist_id, track_count=detail.track_count)
        return detail

    def close_playlist(self) -> None:
        """Go back to the playlist listing."""
        self.selected = None
        self.player.close()

    def play_track(self, track: Track) -> None:
        self.player.play(track)

    def play_all(self) -> Track | None:
        """Start playback at the first track of the open playlist.

        Returns:
            The track now playing, or None when the playlist is empty
        """
        if not self.tracks:
            return None

        first = self.tracks[0]
        self.play_track(first)
        return first

    async def create_playlist(
        self,
        name: str,
        color: str | None = None,
        icon: str | None = None,
    ) -> Playlist:
        """Create a playlist after validating the dialog input.

        Raises:
            ValidationError: If the name is blank or the colour/icon is unknown
        """
        require_name(name, "playlist")
        color = color or self.defaults.default_color
        icon = icon or self.defaults.default_icon
        validate_appearance(color, icon, PLAYLIST_ICON_OPTIONS)

        return await self.client.create_playlist(name, color, icon)

    async def search(self, query: str) -> SearchResults:
        """Search playlist and track names.

        All tracks are fetched once and reused for later searches.
        """
        playlists = await self.client.get_playlists()
        tracks = await self.client.get_tracks()
        return search_library(query, playlists, tracks)
