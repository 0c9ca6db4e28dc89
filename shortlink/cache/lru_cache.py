"""Bounded in-memory LRU cache for token -> target resolutions

The cache fronts the persistent store on the redirect path. It holds at most
`capacity` entries and evicts the least recently used one on overflow. There
is no TTL and nothing survives a restart: a cold cache misses on everything
and the caller falls through to the store.

Classes:
    ResolutionCache:
        Thread-safe LRU mapping of tokens to target URLs.

Example:
    >>> cache = ResolutionCache(capacity=2)
    >>> cache.put('aaaaaaaaaaaa', 'https://example.com/a')
    >>> cache.put('bbbbbbbbbbbb', 'https://example.com/b')
    >>> cache.get('aaaaaaaaaaaa')
    'https://example.com/a'
    >>> cache.put('cccccccccccc', 'https://example.com/c')  # evicts 'bbbbbbbbbbbb'
    >>> cache.get('bbbbbbbbbbbb') is None
    True
"""

import threading
from collections import OrderedDict

from shortlink.utils.constants import DEFAULT_CACHE_CAPACITY


class ResolutionCache:
    """Thread-safe least-recently-used cache of token -> target URL

    Attributes:
        capacity (int):
            Maximum number of entries, fixed at construction.

    Methods:
        get(token: str) -> str | None:
            Return the cached target and mark it most recently used, or None on miss.

        put(token: str, target: str) -> None:
            Insert or refresh an entry, evicting the LRU entry when full.

        invalidate(token: str) -> bool:
            Drop an entry. Returns True if it was present.
    """

    def __init__(self, capacity: int = DEFAULT_CACHE_CAPACITY):
        if not isinstance(capacity, int) or isinstance(capacity, bool):
            raise TypeError(f'Capacity must be of type integer (given type: {type(capacity)}).')
        if capacity <= 0:
            raise ValueError(f'Capacity must be a positive integer (given value: {capacity}).')

        self.capacity = capacity
        self._entries: OrderedDict[str, str] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, token: str) -> str | None:
        with self._lock:
            target = self._entries.get(token)
            if target is not None:
                self._entries.move_to_end(token)
            return target

    def put(self, token: str, target: str) -> None:
        with self._lock:
            if token in self._entries:
                self._entries.move_to_end(token)
            elif len(self._entries) >= self.capacity:
                self._entries.popitem(last=False)
            self._entries[token] = target

    def invalidate(self, token: str) -> bool:
        with self._lock:
            return self._entries.pop(token, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, token: object) -> bool:
        # Membership checks do not refresh recency
        with self._lock:
            return token in self._entries
