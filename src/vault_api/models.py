"""Pydantic models for SoundVault API resources."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class VaultModel(BaseModel):
    """Base model accepting both camelCase API keys and field names."""

    model_config = ConfigDict(populate_by_name=True)


class User(VaultModel):
    """The signed-in account. The password is write-only and never returned."""

    id: int
    username: str
    full_name: str | None = Field(None, alias="fullName")
    email: str | None = None
    phone: str | None = None
    avatar_color: str | None = Field(None, alias="avatarColor")


class Playlist(VaultModel):
    """A named, coloured, icon-tagged grouping of tracks."""

    id: int
    name: str
    color: str = "#1DB954"
    icon: str = "ri-music-fill"


class Category(VaultModel):
    """Legacy track grouping, superseded by playlists."""

    id: int
    name: str
    color: str = "#1DB954"
    icon: str = "ri-mic-fill"


class Track(VaultModel):
    """An audio recording."""

    id: int
    name: str
    duration: float = 0
    created_at: datetime | None = Field(None, alias="createdAt")
    category_id: int | None = Field(None, alias="categoryId")
    playlist_id: int | None = Field(None, alias="playlistId")


class PlaylistDetail(Playlist):
    """A playlist with its tracks, in the order the backend returned them."""

    tracks: list[Track] = Field(default_factory=list)

    @property
    def track_count(self) -> int:
        return len(self.tracks)


class SearchResults(BaseModel):
    """Search results container."""

    playlists: list[Playlist] = Field(default_factory=list)
    tracks: list[Track] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.playlists and not self.tracks
