"""Name search across cached playlists and tracks."""

from collections.abc import Iterable

from src.vault_api.models import Playlist, SearchResults, Track


def matches_name(name: str, query: str) -> bool:
    """Case-insensitive substring match."""
    return query.lower() in name.lower()


def search_library(
    query: str,
    playlists: Iterable[Playlist],
    tracks: Iterable[Track],
) -> SearchResults:
    """Filter playlists and tracks whose name contains the query.

    A blank query matches nothing rather than everything. Input order is
    preserved.

    Args:
        query: Search text as typed
        playlists: Cached playlists
        tracks: Cached tracks

    Returns:
        SearchResults with the matching playlists and tracks
    """
    if not query or not query.strip():
        return SearchResults()

    return SearchResults(
        playlists=[p for p in playlists if matches_name(p.name, query)],
        tracks=[t for t in tracks if matches_name(t.name, query)],
    )
