"""Result cache keyed by API resource path."""

from collections.abc import Awaitable, Callable
from typing import Any

from src.utils.logging import get_logger

logger = get_logger(__name__)


class ResultCache:
    """In-memory map of API path to the last fetched result.

    Mutations call ``invalidate`` for the paths they touch; the next read of
    a stale path goes back to the backend.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Any | None:
        return self._entries.get(key)

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = value

    async def get_or_fetch(self, key: str, fetch: Callable[[], Awaitable[Any]]) -> Any:
        """Return the cached value for ``key``, fetching it if missing.

        Args:
            key: API path identifying the resource
            fetch: Coroutine factory producing a fresh value

        Returns:
            Cached or freshly fetched value
        """
        if key in self._entries:
            logger.debug("cache_hit", key=key)
            return self._entries[key]

        logger.debug("cache_miss", key=key)
        value = await fetch()
        self._entries[key] = value
        return value

    def invalidate(self, key: str, prefix: bool = False) -> int:
        """Mark a path stale.

        Args:
            key: API path to drop
            prefix: Also drop every path nested under ``key``

        Returns:
            Number of entries removed
        """
        if prefix:
            stale = [k for k in self._entries if k == key or k.startswith(key.rstrip("/") + "/")]
        else:
            stale = [key] if key in self._entries else []

        for k in stale:
            del self._entries[k]

        if stale:
            logger.debug("cache_invalidated", key=key, removed=len(stale))
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()
