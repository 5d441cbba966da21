"""
Query cache for client-side data fetching.

Results are stored under tuple query keys such as ``("menu", restaurant_id)``
so related entries can be invalidated together by key prefix.
"""

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Union

from menu_client.api import MenuApiClient

QueryKey = Tuple[Any, ...]


class _MenuQueryKeys:
    all: QueryKey = ("menu",)

    def by_restaurant(self, restaurant_id: str) -> QueryKey:
        return (*self.all, restaurant_id)


MENU_QUERY_KEYS = _MenuQueryKeys()


@dataclass
class _Entry:
    data: Any
    fetched_at: float


class QueryClient:
    """Caches query results by key until they go stale or are invalidated.

    ``stale_time`` is in seconds; ``None`` keeps results until invalidated.
    Failed fetches are not cached.
    """

    def __init__(
        self,
        stale_time: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.stale_time = stale_time
        self._clock = clock
        self._entries: Dict[QueryKey, _Entry] = {}
        self._lock = threading.Lock()

    def _is_fresh(self, entry: _Entry) -> bool:
        if self.stale_time is None:
            return True
        return self._clock() - entry.fetched_at < self.stale_time

    def get_query_data(self, key: QueryKey) -> Any:
        with self._lock:
            entry = self._entries.get(tuple(key))
        return entry.data if entry else None

    def fetch(self, key: QueryKey, fn: Callable[[], Any]) -> Any:
        key = tuple(key)
        with self._lock:
            entry = self._entries.get(key)
        if entry is not None and self._is_fresh(entry):
            return entry.data

        data = fn()
        with self._lock:
            self._entries[key] = _Entry(data=data, fetched_at=self._clock())
        return data

    def invalidate(self, prefix: QueryKey = ()) -> int:
        """Drop every entry whose key starts with ``prefix``; returns the count."""
        prefix = tuple(prefix)
        with self._lock:
            stale = [k for k in self._entries if k[: len(prefix)] == prefix]
            for k in stale:
                del self._entries[k]
        return len(stale)


def use_get_menu(
    restaurant_id: Union[str, Callable[[], str]],
    query_client: QueryClient,
    api: MenuApiClient,
) -> Any:
    """Load a menu through the query cache.

    ``restaurant_id`` may be a plain id or a callable returning the current id.
    """
    resolved = restaurant_id() if callable(restaurant_id) else restaurant_id
    return query_client.fetch(
        MENU_QUERY_KEYS.by_restaurant(resolved),
        lambda: api.get_menu(resolved),
    )
