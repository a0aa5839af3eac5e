"""Tests for name search."""

import pytest

from src.search import matches_name, search_library
from src.vault_api.models import Playlist, Track


@pytest.fixture
def playlists(playlist_data):
    return [Playlist(**p) for p in playlist_data]


@pytest.fixture
def tracks(track_data):
    return [Track(**t) for t in track_data]


class TestSearchLibrary:
    """Tests for search_library."""

    def test_case_insensitive_substring(self, playlists, tracks):
        """Test the "rec" example: matches Recording 1 and REC Demo, not Song."""
        results = search_library("rec", playlists, tracks)

        assert [t.name for t in results.tracks] == ["Recording 1", "REC Demo"]

    def test_matches_playlists_by_name(self, playlists, tracks):
        results = search_library("PRACTICE", playlists, tracks)

        assert [p.name for p in results.playlists] == ["Band Practice"]
        assert results.tracks == []

    def test_matches_both_sets(self, playlists, tracks):
        results = search_library("Rec", playlists, tracks)

        assert [p.name for p in results.playlists] == ["Recordings 2024"]
        assert len(results.tracks) == 2

    @pytest.mark.parametrize("query", ["", "   ", "\t\n"])
    def test_blank_query_returns_nothing(self, playlists, tracks, query):
        """Test that a blank query yields empty results, not everything."""
        results = search_library(query, playlists, tracks)

        assert results.playlists == []
        assert results.tracks == []

    def test_no_match(self, playlists, tracks):
        results = search_library("zzz", playlists, tracks)

        assert results.is_empty

    def test_is_pure_and_repeatable(self, playlists, tracks):
        """Test that repeated searches give identical results and leave inputs alone."""
        before = [t.model_dump() for t in tracks]

        first = search_library("o", playlists, tracks)
        second = search_library("o", playlists, tracks)

        assert first == second
        assert [t.model_dump() for t in tracks] == before

    def test_accepts_iterables(self, playlists, tracks):
        results = search_library("song", iter(playlists), (t for t in tracks))

        assert [t.name for t in results.tracks] == ["Song"]


class TestMatchesName:
    """Tests for matches_name."""

    def test_inner_whitespace_is_significant(self):
        assert matches_name("Band Practice", "d p") is True
        assert matches_name("BandPractice", "d p") is False
