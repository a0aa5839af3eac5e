"""SoundVault backend API integration."""

from .auth import SessionStore
from .cache import ResultCache
from .client import AuthenticationError, VaultAPIError, VaultClient
from .models import Category, Playlist, PlaylistDetail, SearchResults, Track, User

__all__ = [
    "AuthenticationError",
    "Category",
    "Playlist",
    "PlaylistDetail",
    "ResultCache",
    "SearchResults",
    "SessionStore",
    "Track",
    "User",
    "VaultAPIError",
    "VaultClient",
]
