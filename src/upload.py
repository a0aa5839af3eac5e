"""Upload flow: send an audio file, then file it under a playlist."""

import mimetypes
from dataclasses import dataclass
from pathlib import Path

from src.utils.config import CATEGORY_ICON_OPTIONS, UploadConfig
from src.utils.logging import get_logger
from src.utils.validation import ValidationError, require_name
from src.vault import validate_appearance
from src.vault_api import Category, Track, VaultAPIError, VaultClient

logger = get_logger(__name__)


def detect_audio_type(file_path: Path) -> str:
    """Return the file's audio MIME type.

    Raises:
        ValidationError: If the file is missing or not audio
    """
    if not file_path.is_file():
        raise ValidationError(f"File not found: {file_path}")

    content_type, _ = mimetypes.guess_type(file_path.name)
    if not content_type or not content_type.startswith("audio/"):
        raise ValidationError("Please select an audio file")
    return content_type


def track_name_from_file(file_path: Path) -> str:
    """Derive a track name from the file name, dropping the extension."""
    return file_path.stem


@dataclass
class UploadResult:
    """Outcome of an upload.

    ``warning`` is set when the file was stored but could not be attached to
    its playlist. The track is not removed in that case.
    """

    track: Track
    playlist_id: int | None = None
    warning: str | None = None

    @property
    def associated(self) -> bool:
        return self.playlist_id is not None and self.warning is None


class Uploader:
    """Runs uploads against the vault backend."""

    def __init__(self, client: VaultClient, config: UploadConfig | None = None) -> None:
        self.client = client
        self.config = config or UploadConfig()

    async def _upload(
        self,
        file_path: Path,
        name: str | None,
        duration: float,
        category_id: int | None = None,
    ) -> Track:
        content_type = detect_audio_type(file_path)
        name = name or track_name_from_file(file_path)
        require_name(name, "track")

        return await self.client.upload_track(
            file_path,
            name=name,
            content_type=content_type,
            duration=duration,
            category_id=category_id,
        )

    async def upload_to_playlist(
        self,
        file_path: Path,
        playlist_id: int,
        name: str | None = None,
        duration: float = 0,
        category_id: int | None = None,
    ) -> UploadResult:
        """Upload a file and append the new track to a playlist.

        Args:
            file_path: Audio file to upload
            playlist_id: Playlist that receives the track
            name: Track name (defaults to the file name without extension)
            duration: Duration in seconds, if known
            category_id: Optional legacy category sent with the upload form

        Returns:
            UploadResult, carrying a warning if the playlist step failed

        Raises:
            ValidationError: If the file is rejected before upload
            VaultAPIError: If the upload itself fails
        """
        track = await self._upload(file_path, name, duration, category_id=category_id)

        try:
            await self.client.add_track_to_playlist(
                playlist_id,
                track.id,
                position=self.config.append_position,
            )
        except VaultAPIError as e:
            logger.warning(
                "track_association_failed",
                track_id=track.id,
                playlist_id=playlist_id,
                error=str(e),
            )
            return UploadResult(
                track=track,
                playlist_id=playlist_id,
                warning="Track uploaded but could not be added to the playlist",
            )

        return UploadResult(track=track, playlist_id=playlist_id)

    async def upload_to_category(
        self,
        file_path: Path,
        category_id: int,
        name: str | None = None,
        duration: float = 0,
    ) -> UploadResult:
        """Upload a file filed under a legacy category."""
        track = await self._upload(file_path, name, duration, category_id=category_id)
        return UploadResult(track=track)

    async def create_category(
        self,
        name: str,
        color: str | None = None,
        icon: str | None = None,
    ) -> Category:
        """Create an upload category after validating the dialog input."""
        require_name(name, "category")
        color = color or self.config.default_category_color
        icon = icon or self.config.default_category_icon
        validate_appearance(color, icon, CATEGORY_ICON_OPTIONS)

        return await self.client.create_category(name, color, icon)
