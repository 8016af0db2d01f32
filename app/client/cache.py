"""
Read cache keyed by resource path.

A key is a tuple: the resource path, further path segments, and optionally a
trailing mapping of query parameters, e.g. ``("/api/deals", deal_id, "buyers")``
or ``("/api/activities", {"entity_id": deal_id})``. Joining the path parts with
"/" gives the URL that is fetched.
"""
import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from app.client.api import ApiClient
from app.client.invalidation import Mutation, keys_for

logger = logging.getLogger(__name__)

QueryKey = tuple


def _freeze(part: Any) -> Any:
    if isinstance(part, Mapping):
        return tuple(sorted((str(k), str(v)) for k, v in part.items()))
    return str(part)


def freeze_key(key: QueryKey) -> tuple:
    """Hashable, order-independent form of a query key"""
    return tuple(_freeze(part) for part in key)


def split_key(key: QueryKey) -> tuple[str, dict[str, Any] | None]:
    """URL path and query parameters for a key"""
    params = None
    parts = list(key)
    if parts and isinstance(parts[-1], Mapping):
        params = {str(k): str(v) for k, v in parts.pop().items()}
    return "/".join(str(part) for part in parts), params


@dataclass
class CacheEntry:
    key: QueryKey
    data: Any
    fetched_at: float = field(default_factory=time.monotonic)
    stale: bool = False


class QueryCache:
    """
    Shared by the caller's thread and the notes autosave timer thread; every
    access to the entries goes through one lock.
    """

    def __init__(self):
        self._entries: dict[tuple, CacheEntry] = {}
        self._lock = threading.RLock()

    def __contains__(self, key: QueryKey) -> bool:
        with self._lock:
            return freeze_key(key) in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: QueryKey) -> CacheEntry | None:
        with self._lock:
            return self._entries.get(freeze_key(key))

    def set(self, key: QueryKey, data: Any) -> None:
        with self._lock:
            self._entries[freeze_key(key)] = CacheEntry(key=key, data=data)

    def fetch(self, key: QueryKey, loader: Callable[[], Any]) -> Any:
        """Return cached data for key, calling loader when missing or stale"""
        entry = self.get(key)
        if entry is not None and not entry.stale:
            return entry.data

        # The loader runs unlocked so a slow request does not block invalidation
        data = loader()
        self.set(key, data)
        return data

    def invalidate(self, key: QueryKey, exact: bool = False) -> int:
        """
        Mark entries stale so the next read refetches.

        Without ``exact``, every entry whose key starts with ``key`` is marked,
        so ``("/api/deals",)`` also covers ``("/api/deals", deal_id, "buyers")``.
        Returns the number of entries marked.
        """
        frozen = freeze_key(key)
        count = 0
        with self._lock:
            for stored, entry in self._entries.items():
                if stored == frozen or (not exact and stored[:len(frozen)] == frozen):
                    entry.stale = True
                    count += 1
        return count

    def stale_keys(self) -> list[QueryKey]:
        with self._lock:
            return [entry.key for entry in self._entries.values() if entry.stale]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


class QueryClient:
    """Cached reads and invalidating mutations over an ApiClient"""

    def __init__(self, api: ApiClient, cache: QueryCache | None = None):
        self.api = api
        self.cache = cache if cache is not None else QueryCache()

    def read(self, key: QueryKey) -> Any:
        path, params = split_key(key)
        return self.cache.fetch(key, lambda: self.api.get(path, params=params))

    def refetch(self, key: QueryKey) -> Any:
        self.cache.invalidate(key, exact=True)
        return self.read(key)

    def mutate(self, mutation: Mutation, request: Callable[[], Any], **ids: Any) -> Any:
        """
        Run a mutation request, then invalidate every read it can make stale.

        Invalidation happens only after the server confirmed the change; a
        failed request propagates and leaves the cache untouched.
        """
        result = request()
        for key in keys_for(mutation, **ids):
            self.cache.invalidate(key)
        logger.debug(f"{mutation.value} succeeded, invalidated {keys_for(mutation, **ids)}")
        return result
