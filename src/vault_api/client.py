"""SoundVault backend API client with async support."""

from pathlib import Path
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as ModelValidationError

from src.utils.config import APPEND_POSITION
from src.utils.logging import get_logger

from .auth import SessionStore
from .cache import ResultCache
from .models import Category, Playlist, PlaylistDetail, Track, User

logger = get_logger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"

USER_PATH = "/api/users/me"
PLAYLISTS_PATH = "/api/playlists"
CATEGORIES_PATH = "/api/categories"
TRACKS_PATH = "/api/tracks"

ModelT = TypeVar("ModelT", bound=BaseModel)


class VaultAPIError(Exception):
    """Base exception for SoundVault API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(VaultAPIError):
    """Session missing, expired or not allowed."""

    pass


def parse_model(model: type[ModelT], data: Any) -> ModelT:
    """Validate a response body against a model.

    Raises:
        VaultAPIError: If the body does not match the model
    """
    try:
        return model.model_validate(data)
    except ModelValidationError as e:
        logger.error("invalid_response_body", model=model.__name__, errors=e.error_count())
        raise VaultAPIError(f"Server returned malformed {model.__name__} data") from e


def parse_list(model: type[ModelT], data: Any) -> list[ModelT]:
    """Validate a JSON array response, item by item."""
    if not data:
        return []
    if not isinstance(data, list):
        logger.error("invalid_response_body", model=model.__name__, expected="list")
        raise VaultAPIError(f"Server returned malformed {model.__name__} list")
    return [parse_model(model, item) for item in data]


class VaultClient:
    """Async client for the SoundVault HTTP API.

    Reads go through a ``ResultCache`` keyed by API path; every mutation
    invalidates the paths it changes so the next read refetches.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: SessionStore | None = None,
        timeout: float = 30.0,
        cache: ResultCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Root URL of the SoundVault backend
            session: Session store supplying the credential cookie
            timeout: Request timeout in seconds
            cache: Result cache to share between callers
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.timeout = timeout
        self.cache = cache if cache is not None else ResultCache()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "VaultClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._client is None or self._client.is_closed:
            cookies = self.session.get_cookies() if self.session else {}
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                cookies=cookies,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> Any:
        """Make a credentialed API request.

        Args:
            method: HTTP method
            path: API path (relative to base URL)
            json: JSON body
            data: Form fields for multipart requests
            files: Files for multipart requests

        Returns:
            Decoded JSON response, or an empty dict for bodiless responses

        Raises:
            AuthenticationError: On 401/403
            VaultAPIError: On any other non-2xx status or transport failure
        """
        client = await self._ensure_client()

        try:
            response = await client.request(method, path, json=json, data=data, files=files)

            if response.status_code == 401:
                raise AuthenticationError("Not signed in or session expired", 401)

            if response.status_code == 403:
                raise AuthenticationError("Access forbidden", 403)

            response.raise_for_status()

        except httpx.HTTPStatusError as e:
            logger.error(
                "http_error",
                method=method,
                status_code=e.response.status_code,
                path=path,
            )
            raise VaultAPIError(str(e), e.response.status_code) from e

        except httpx.RequestError as e:
            logger.error("request_error", method=method, error=str(e), path=path)
            raise VaultAPIError(str(e)) from e

        if response.status_code == 204 or not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            logger.error(
                "invalid_json_response",
                method=method,
                path=path,
                content_type=response.headers.get("content-type"),
            )
            raise VaultAPIError("Server returned an unreadable response", response.status_code) from e

    # Users

    async def get_current_user(self, refresh: bool = False) -> User:
        """Get the signed-in user's account."""
        if refresh:
            self.cache.invalidate(USER_PATH)

        async def fetch() -> User:
            return parse_model(User, await self._request("GET", USER_PATH))

        return await self.cache.get_or_fetch(USER_PATH, fetch)

    async def update_current_user(self, payload: dict[str, Any]) -> User | None:
        """Update the signed-in user's account fields.

        Args:
            payload: camelCase field values; keys not present are left untouched

        Returns:
            Updated user when the backend echoes it back
        """
        data = await self._request("PATCH", USER_PATH, json=payload)
        self.cache.invalidate(USER_PATH)

        logger.info("profile_updated", fields=sorted(payload))
        return parse_model(User, data) if data else None

    # Playlists

    async def get_playlists(self, refresh: bool = False) -> list[Playlist]:
        """Get all playlists."""
        if refresh:
            self.cache.invalidate(PLAYLISTS_PATH)

        async def fetch() -> list[Playlist]:
            data = await self._request("GET", PLAYLISTS_PATH)
            return parse_list(Playlist, data)

        return await self.cache.get_or_fetch(PLAYLISTS_PATH, fetch)

    async def get_playlist(self, playlist_id: int, refresh: bool = False) -> PlaylistDetail:
        """Get a playlist with its tracks.

        Track order is whatever the backend returns.
        """
        path = f"{PLAYLISTS_PATH}/{playlist_id}"
        if refresh:
            self.cache.invalidate(path)

        async def fetch() -> PlaylistDetail:
            data = await self._request("GET", path)
            # Accept both {...playlist, tracks} and {playlist: {...}, tracks}
            if isinstance(data, dict) and isinstance(data.get("playlist"), dict):
                data = {**data["playlist"], "tracks": data.get("tracks") or []}
            return parse_model(PlaylistDetail, data)

        return await self.cache.get_or_fetch(path, fetch)

    async def create_playlist(self, name: str, color: str, icon: str) -> Playlist:
        """Create a new playlist.

        Args:
            name: Playlist name
            color: Display colour code
            icon: Symbolic icon identifier

        Returns:
            Created playlist
        """
        data = await self._request(
            "POST",
            PLAYLISTS_PATH,
            json={"name": name, "color": color, "icon": icon},
        )
        self.cache.invalidate(PLAYLISTS_PATH)

        playlist = parse_model(Playlist, data)
        logger.info("playlist_created", playlist_id=playlist.id, name=name)
        return playlist

    async def add_track_to_playlist(
        self,
        playlist_id: int,
        track_id: int,
        position: int = APPEND_POSITION,
    ) -> dict[str, Any]:
        """Attach a track to a playlist.

        Args:
            playlist_id: Target playlist ID
            track_id: Track to attach
            position: Ordering slot; the default sentinel appends to the end
        """
        path = f"{PLAYLISTS_PATH}/{playlist_id}/tracks"
        data = await self._request(
            "POST",
            path,
            json={"trackId": track_id, "position": position},
        )
        self.cache.invalidate(f"{PLAYLISTS_PATH}/{playlist_id}", prefix=True)

        logger.info(
            "track_added_to_playlist",
            playlist_id=playlist_id,
            track_id=track_id,
            position=position,
        )
        return data

    # Categories

    async def get_categories(self, refresh: bool = False) -> list[Category]:
        """Get all categories."""
        if refresh:
            self.cache.invalidate(CATEGORIES_PATH)

        async def fetch() -> list[Category]:
            data = await self._request("GET", CATEGORIES_PATH)
            return parse_list(Category, data)

        return await self.cache.get_or_fetch(CATEGORIES_PATH, fetch)

    async def create_category(self, name: str, color: str, icon: str) -> Category:
        """Create a new category."""
        data = await self._request(
            "POST",
            CATEGORIES_PATH,
            json={"name": name, "icon": icon, "color": color},
        )
        self.cache.invalidate(CATEGORIES_PATH)

        category = parse_model(Category, data)
        logger.info("category_created", category_id=category.id, name=name)
        return category

    # Tracks

    async def get_tracks(self, refresh: bool = False) -> list[Track]:
        """Get every track the user owns."""
        if refresh:
            self.cache.invalidate(TRACKS_PATH)

        async def fetch() -> list[Track]:
            data = await self._request("GET", TRACKS_PATH)
            return parse_list(Track, data)

        return await self.cache.get_or_fetch(TRACKS_PATH, fetch)

    async def upload_track(
        self,
        file_path: Path,
        name: str,
        content_type: str,
        duration: float = 0,
        category_id: int | None = None,
    ) -> Track:
        """Upload an audio file as a new track.

        Args:
            file_path: Audio file on disk
            name: Track name
            content_type: MIME type sent with the file part
            duration: Duration in seconds (0 lets the backend work it out)
            category_id: Optional legacy category to file the track under

        Returns:
            Created track
        """
        form: dict[str, Any] = {"name": name, "duration": str(duration)}
        if category_id is not None:
            form["categoryId"] = str(category_id)

        try:
            f = open(file_path, "rb")
        except OSError as e:
            logger.error("upload_file_unreadable", path=str(file_path), error=str(e))
            raise VaultAPIError(f"Cannot read {file_path.name}: {e.strerror}") from e

        with f:
            data = await self._request(
                "POST",
                f"{TRACKS_PATH}/upload",
                data=form,
                files={"audio": (file_path.name, f, content_type)},
            )
        self.cache.invalidate(TRACKS_PATH)

        track = parse_model(Track, data)
        logger.info("track_uploaded", track_id=track.id, name=name)
        return track
