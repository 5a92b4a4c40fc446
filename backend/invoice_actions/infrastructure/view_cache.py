"""List View Cache — in-process cache of rendered read views, keyed by path.

Invariants:
    - invalidate(path) drops every entry for that path; the next read reloads from the store
    - A load that overlaps an invalidate(path) is returned to its caller but never cached
    - A loader failure caches nothing
    - Cache is per-process, in-memory (a single module-level instance in the app)

Design Decisions:
    - Plain dict over Redis/disk: single-process uvicorn, data is cheap to rebuild
    - Entries keyed by (path, variant) so query-string variants of a list share one
      invalidation path
    - Per-path generation counter over a lock: reads never wait on each other, a write
      only has to bump a number
    - Implements the ViewHost protocol: the invoice actions only ever call invalidate()
"""

import logging
from typing import Any, Awaitable, Callable, Hashable

logger = logging.getLogger(__name__)


class ListViewCache:
    """Path-keyed cache for read views."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._entries: dict[tuple[str, Hashable], Any] = {}
        self._generations: dict[str, int] = {}

    def generation(self, path: str) -> int:
        return self._generations.get(path, 0)

    async def get_or_load(
        self,
        path: str,
        loader: Callable[[], Awaitable[Any]],
        variant: Hashable = None,
    ) -> Any:
        """Return the cached view for (path, variant) or load and cache it."""
        key = (path, variant)
        if self.enabled and key in self._entries:
            return self._entries[key]
        started = self.generation(path)
        value = await loader()
        # the loader may have read rows from before a write that invalidated path
        if self.enabled and self.generation(path) == started:
            self._entries[key] = value
        return value

    def invalidate(self, path: str) -> None:
        self._generations[path] = self.generation(path) + 1
        stale = [key for key in self._entries if key[0] == path]
        for key in stale:
            del self._entries[key]
        logger.info(
            "Invalidated view %s (%d entr%s)",
            path, len(stale), "y" if len(stale) == 1 else "ies",
        )

    def is_cached(self, path: str, variant: Hashable = None) -> bool:
        return (path, variant) in self._entries

    def clear(self) -> None:
        self._entries.clear()


# Singleton (the app and the invoice actions share it)
list_view_cache = ListViewCache()


def get_view_cache() -> ListViewCache:
    """FastAPI dependency for the shared view cache."""
    return list_view_cache
