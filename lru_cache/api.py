"""
The LRU cache facade.

`LRUCache` coordinates the lookup index (a dict of key -> CacheEntry) and the
recency list (`LRUPolicy`) so that both always hold exactly the same keys.
Every public operation is O(1) except `clear`, `close` and iteration.

The cache is not thread-safe. Callers sharing one instance across threads
must serialize access themselves, e.g. with a `threading.Lock`.

Example:
    cache = LRUCache(2, dispose=release_handle)
    cache.insert("a", open_handle("a"))
    cache.insert("b", open_handle("b"))
    cache.get("a")                        # "a" becomes most recently used
    cache.insert("c", open_handle("c"))   # evicts "b", release_handle is called on its value
"""

import logging
import operator
from typing import (
    Callable,
    Dict,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    NamedTuple,
    Optional,
    Tuple,
    TypeVar,
)

from .allocator import Locator
from .eviction_policy import LRUPolicy
from .exceptions import EmptyCacheError, MissingCreatePolicyError, ReentrantHookError

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

CreatePolicy = Callable[[K], V]
DisposePolicy = Callable[[V], None]


class CacheStats(NamedTuple):
    hits: int
    misses: int
    evictions: int
    size: int
    capacity: int


class CacheEntry(Generic[K, V]):
    """A cached value plus its position in the recency list.

    The locator is assigned once at insertion; moving the entry to the front
    relinks the same slot, so it never changes.
    """

    def __init__(self, key: K, value: V, locator: Locator):
        self.key = key
        self.value = value
        self.locator = locator

    def __repr__(self) -> str:
        return f"CacheEntry(key={self.key!r}, value={self.value!r})"


def _check_capacity(capacity: int) -> int:
    capacity = operator.index(capacity)
    if capacity < 0:
        raise ValueError(f"Cache capacity must be non-negative, got {capacity}")
    return capacity


class LRUCache(Generic[K, V]):
    """
    Fixed-capacity cache with strict least-recently-used eviction.

    Inputs:
        - capacity: maximum number of entries (0 means nothing is retained)
        - create: optional key -> value hook used by `get` on a miss
        - dispose: optional value -> None hook, called exactly once whenever a
          value leaves the cache (eviction, erase, overwrite, resize, clear, close).
          It must not raise; if it does, the entry is already gone from the
          cache and the exception propagates to the caller.

    Hooks must not modify the cache that invoked them: insert, get, touch,
    assign, erase, erase_oldest, clear and resize raise ReentrantHookError
    from inside a hook. Read-only calls (at, contains, size, iteration) are fine.
    """
    def __init__(
        self,
        capacity: int,
        create: Optional[CreatePolicy] = None,
        dispose: Optional[DisposePolicy] = None,
    ):
        self._capacity = _check_capacity(capacity)
        self._create = create
        self._dispose = dispose
        self.eviction_policy: LRUPolicy[K] = LRUPolicy()

        # Lookup index: Key -> CacheEntry
        # The entry carries the locator of its node in the recency list
        self._key_map: Dict[K, CacheEntry[K, V]] = {}

        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._in_hook = False

        logger.debug(
            "LRU cache initialized: capacity=%d, create=%s, dispose=%s",
            self._capacity,
            "set" if create else "none",
            "set" if dispose else "none",
        )

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[Tuple[K, V]],
        capacity: Optional[int] = None,
        create: Optional[CreatePolicy] = None,
        dispose: Optional[DisposePolicy] = None,
    ) -> "LRUCache[K, V]":
        """
        Builds a cache from (key, value) pairs, applied in order with insert_or_assign.
        A later duplicate key overwrites the earlier value and becomes most recently used.
        Capacity defaults to the number of pairs given.
        """
        pairs = list(pairs)
        cache = cls(len(pairs) if capacity is None else capacity, create=create, dispose=dispose)
        for key, value in pairs:
            cache.insert_or_assign(key, value)
        return cache

    # --- Accessors ---

    def size(self) -> int:
        return len(self._key_map)

    def capacity(self) -> int:
        return self._capacity

    def empty(self) -> bool:
        return not self._key_map

    def __len__(self) -> int:
        return len(self._key_map)

    def contains(self, key: K) -> bool:
        """Membership test. Does not affect recency."""
        return key in self._key_map

    __contains__ = contains

    def stats(self) -> CacheStats:
        return CacheStats(
            hits=self._hits,
            misses=self._misses,
            evictions=self._evictions,
            size=len(self._key_map),
            capacity=self._capacity,
        )

    # --- Hooks ---

    def set_create_policy(self, create: Optional[CreatePolicy]) -> None:
        self._create = create

    def set_dispose_policy(self, dispose: Optional[DisposePolicy]) -> None:
        self._dispose = dispose

    # --- Core operations ---

    def insert(self, key: K, value: V) -> bool:
        """
        Inserts a new entry as most recently used, evicting the least recently
        used entry first if the cache is full.
        Returns False (and changes nothing) if the key is already cached.
        """
        self._check_reentry()
        if key in self._key_map:
            return False

        if self._capacity and len(self._key_map) >= self._capacity:
            self._evict_oldest()

        locator = self.eviction_policy.track_new(key)
        self._key_map[key] = CacheEntry(key, value, locator)

        if not self._capacity:
            # Nothing can be retained at capacity 0; the new entry is its own victim
            self._evict_oldest()
        return True

    def insert_or_assign(self, key: K, value: V) -> None:
        if not self.assign(key, value):
            self.insert(key, value)

    def at(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """
        Returns the cached value without touching recency, or default on a miss.
        """
        entry = self._key_map.get(key)
        if entry is None:
            self._misses += 1
            return default
        self._hits += 1
        return entry.value

    def get(self, key: K) -> V:
        """
        Returns the cached value and marks it most recently used.

        On a miss the create policy synthesizes a value, which is inserted
        (possibly evicting the least recently used entry) and returned.
        Raises MissingCreatePolicyError on a miss when no create policy is set;
        use `at` for a lookup without side effects.
        """
        self._check_reentry()
        entry = self._key_map.get(key)
        if entry is not None:
            self._hits += 1
            self.eviction_policy.record_access(entry.locator)
            return entry.value

        self._misses += 1
        if self._create is None:
            raise MissingCreatePolicyError(key)

        self._in_hook = True
        try:
            value = self._create(key)
        finally:
            self._in_hook = False
        self.insert(key, value)
        return value

    def touch(self, key: K) -> bool:
        """Marks the entry most recently used without reading it. False if absent."""
        self._check_reentry()
        entry = self._key_map.get(key)
        if entry is None:
            return False
        self.eviction_policy.record_access(entry.locator)
        return True

    def assign(self, key: K, value: V) -> bool:
        """
        Replaces the value of a cached key and marks it most recently used.
        The old value is disposed. False (and no disposal) if absent.
        """
        self._check_reentry()
        entry = self._key_map.get(key)
        if entry is None:
            return False

        self.eviction_policy.record_access(entry.locator)
        old_value = entry.value
        entry.value = value
        self._release(old_value)
        return True

    def erase(self, key: K) -> bool:
        """Removes and disposes the entry. False if absent."""
        self._check_reentry()
        entry = self._key_map.pop(key, None)
        if entry is None:
            return False
        self.eviction_policy.remove(entry.locator)
        self._release(entry.value)
        return True

    def erase_oldest(self) -> None:
        """
        Removes and disposes the least recently used entry.
        Raises EmptyCacheError if the cache is empty.
        """
        self._check_reentry()
        self._evict_oldest()

    def clear(self) -> None:
        """Removes and disposes every entry, least recently used first. Capacity is kept."""
        self._check_reentry()
        if self._key_map:
            logger.debug("Clearing %d entries", len(self._key_map))
        while self._key_map:
            entry = self._pop_oldest()
            self._release(entry.value)
        self.eviction_policy.clear()

    def resize(self, new_capacity: int) -> None:
        """Sets the capacity, evicting least recently used entries until the cache fits."""
        self._check_reentry()
        self._capacity = _check_capacity(new_capacity)
        overflow = len(self._key_map) - self._capacity
        if overflow > 0:
            logger.debug("Resized to %d, trimming %d entries", self._capacity, overflow)
        while len(self._key_map) > self._capacity:
            self._evict_oldest()

    def close(self) -> None:
        """Tears the cache down, disposing every remaining value."""
        logger.debug("Closing LRU cache with %d entries", len(self._key_map))
        self.clear()

    def __enter__(self) -> "LRUCache[K, V]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # --- Iteration (lookup index order, not recency order) ---

    def items(self) -> Iterator[Tuple[K, V]]:
        for key, entry in self._key_map.items():
            yield key, entry.value

    __iter__ = items

    def keys(self) -> Iterator[K]:
        return iter(self._key_map)

    def values(self) -> Iterator[V]:
        for entry in self._key_map.values():
            yield entry.value

    def keys_by_recency(self) -> Iterator[K]:
        """Yields keys from most to least recently used."""
        return self.eviction_policy.keys_by_recency()

    # --- No copies: locators are identities owned by this instance ---

    def __copy__(self):
        raise TypeError(f"{type(self).__name__} cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError(f"{type(self).__name__} cannot be copied")

    def __reduce_ex__(self, protocol):
        raise TypeError(f"{type(self).__name__} cannot be pickled")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={len(self._key_map)}, capacity={self._capacity})"

    # --- Internal helpers ---

    def _pop_oldest(self) -> CacheEntry[K, V]:
        """Unlinks the least recently used entry from both structures."""
        if not self._key_map:
            raise EmptyCacheError("Cannot evict from an empty cache")
        # None is a valid key, so emptiness is checked on the index above
        victim_key = self.eviction_policy.select_victim()
        entry = self._key_map.pop(victim_key)
        self.eviction_policy.remove(entry.locator)
        return entry

    def _evict_oldest(self) -> None:
        entry = self._pop_oldest()
        self._evictions += 1
        logger.debug("Evicting LRU victim: %r", entry.key)
        self._release(entry.value)

    def _release(self, value: V) -> None:
        # Both structures are already updated when the hook runs
        if self._dispose is not None:
            self._in_hook = True
            try:
                self._dispose(value)
            finally:
                self._in_hook = False

    def _check_reentry(self) -> None:
        if self._in_hook:
            raise ReentrantHookError("Cache hooks must not modify the cache that invoked them")
