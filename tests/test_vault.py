"""Tests for vault view logic."""

from unittest.mock import MagicMock

import pytest

from src.player import Player
from src.utils.validation import ValidationError
from src.vault import VaultSession
from src.vault_api.models import Track


def detail(playlist_id: int, tracks: list[dict]) -> dict:
    return {"id": playlist_id, "name": f"Playlist {playlist_id}", "tracks": tracks}


class TestPlayAll:
    """Tests for opening playlists and Play All."""

    @pytest.mark.asyncio
    async def test_play_all_starts_at_first_track(self, backend, track_data):
        backend.add("GET", "/api/playlists/1", body=detail(1, track_data))

        async with backend.client() as client:
            vault = VaultSession(client)
            await vault.open_playlist(1)
            first = vault.play_all()

        assert first.name == "Recording 1"
        assert vault.current_track.id == 10
        assert vault.player.is_playing

    @pytest.mark.asyncio
    async def test_play_all_empty_playlist_is_noop(self, backend):
        """Test that Play All on an empty playlist never reaches the player."""
        backend.add("GET", "/api/playlists/1", body=detail(1, []))
        player = MagicMock(spec=Player)

        async with backend.client() as client:
            vault = VaultSession(client, player=player)
            await vault.open_playlist(1)
            result = vault.play_all()

        assert result is None
        player.play.assert_not_called()

    def test_play_all_without_selection(self):
        player = MagicMock(spec=Player)
        vault = VaultSession(MagicMock(), player=player)

        assert vault.play_all() is None
        player.play.assert_not_called()

    @pytest.mark.asyncio
    async def test_tracks_keep_backend_order(self, backend):
        tracks = [{"id": 3, "name": "c"}, {"id": 1, "name": "a"}, {"id": 2, "name": "b"}]
        backend.add("GET", "/api/playlists/1", body=detail(1, tracks))

        async with backend.client() as client:
            vault = VaultSession(client)
            await vault.open_playlist(1)

        assert [t.id for t in vault.tracks] == [3, 1, 2]

    @pytest.mark.asyncio
    async def test_close_playlist_resets_state(self, backend, track_data):
        backend.add("GET", "/api/playlists/1", body=detail(1, track_data))

        async with backend.client() as client:
            vault = VaultSession(client)
            await vault.open_playlist(1)
            vault.play_all()
            vault.close_playlist()

        assert vault.selected is None
        assert vault.tracks == []
        assert vault.current_track is None

    def test_play_track(self):
        vault = VaultSession(MagicMock())
        track = Track(id=5, name="Song")

        vault.play_track(track)

        assert vault.current_track is track


class TestTrackCounts:
    """Tests for per-playlist track counts."""

    @pytest.mark.asyncio
    async def test_counts_come_from_track_lists(self, backend, playlist_data, track_data):
        backend.add("GET", "/api/playlists", body=playlist_data)
        backend.add("GET", "/api/playlists/1", body=detail(1, track_data))
        backend.add("GET", "/api/playlists/2", body=detail(2, track_data[:1]))
        backend.add("GET", "/api/playlists/3", body=detail(3, []))

        async with backend.client() as client:
            vault = VaultSession(client)
            playlists = await vault.load_playlists()
            counts = await vault.track_counts(playlists)

        assert counts == {1: 3, 2: 1, 3: 0}


class TestCreatePlaylist:
    """Tests for playlist creation."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["", "   "])
    async def test_blank_name_rejected_without_request(self, backend, name):
        async with backend.client() as client:
            with pytest.raises(ValidationError, match="playlist name"):
                await VaultSession(client).create_playlist(name)

        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_unknown_color_rejected(self, backend):
        async with backend.client() as client:
            with pytest.raises(ValidationError):
                await VaultSession(client).create_playlist("Demos", color="#000000")

        assert backend.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("icon", ["ri-folder-music-fill", "ri-unknown-fill"])
    async def test_icon_outside_playlist_dialog_rejected(self, backend, icon):
        async with backend.client() as client:
            with pytest.raises(ValidationError, match="icon"):
                await VaultSession(client).create_playlist("Demos", icon=icon)

        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_album_icon_allowed_for_playlists(self, backend):
        backend.add("POST", "/api/playlists", status=201, body={"id": 9, "name": "Demos", "icon": "ri-album-fill"})

        async with backend.client() as client:
            playlist = await VaultSession(client).create_playlist("Demos", icon="ri-album-fill")

        assert playlist.icon == "ri-album-fill"

    @pytest.mark.asyncio
    async def test_uses_defaults(self, backend):
        backend.add("POST", "/api/playlists", status=201, body={"id": 9, "name": "Demos"})

        async with backend.client() as client:
            await VaultSession(client).create_playlist("Demos")

        body = backend.json_body(backend.calls("POST", "/api/playlists")[0])
        assert body == {"name": "Demos", "color": "#1DB954", "icon": "ri-music-fill"}


class TestVaultSearch:
    """Tests for searching through the session."""

    @pytest.mark.asyncio
    async def test_search_loads_tracks_once(self, backend, playlist_data, track_data):
        backend.add("GET", "/api/playlists", body=playlist_data)
        backend.add("GET", "/api/tracks", body=track_data)

        async with backend.client() as client:
            vault = VaultSession(client)
            first = await vault.search("rec")
            second = await vault.search("song")

        assert [t.name for t in first.tracks] == ["Recording 1", "REC Demo"]
        assert [p.name for p in first.playlists] == ["Recordings 2024"]
        assert [t.name for t in second.tracks] == ["Song"]
        assert len(backend.calls("GET", "/api/tracks")) == 1

    @pytest.mark.asyncio
    async def test_blank_search(self, backend, playlist_data, track_data):
        backend.add("GET", "/api/playlists", body=playlist_data)
        backend.add("GET", "/api/tracks", body=track_data)

        async with backend.client() as client:
            results = await VaultSession(client).search("  ")

        assert results.is_empty
