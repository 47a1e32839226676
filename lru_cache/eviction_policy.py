from typing import Any, Generic, Hashable, Iterator, List, Optional, TypeVar

from .allocator import Locator, SlotAllocator
from .exceptions import StaleLocatorError

K = TypeVar("K", bound=Hashable)

# Link value for "no neighbour"
NIL = -1


class EvictionPolicy(Generic[K]):
    """Base interface for eviction strategies."""
    def record_access(self, locator: Locator) -> None:
        """Mark the entry at locator as recently used."""
        raise NotImplementedError

    def track_new(self, key: K) -> Locator:
        """Track a new item in the cache. Returns its locator."""
        raise NotImplementedError

    def select_victim(self) -> Optional[K]:
        """Selects a key to evict. Returns None if empty."""
        raise NotImplementedError

    def remove(self, locator: Locator) -> K:
        """Removes an entry from tracking (eviction or manual deletion). Returns its key."""
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def __len__(self) -> int:
        raise NotImplementedError


class LRUPolicy(EvictionPolicy[K]):
    """
    Least Recently Used (LRU) implementation using a doubly linked list
    threaded through the slots of a SlotAllocator.

    Front (head) is the most recently used key, back (tail) the least.
    Relinking a node never moves its slot, so every other locator stays valid.
    """
    def __init__(self):
        # Private arena: clear() resets it and its slots map 1:1 onto the arrays below
        self.allocator = SlotAllocator()
        # Parallel arrays indexed by slot
        self._keys: List[Any] = []
        self._prev: List[int] = []
        self._next: List[int] = []
        self._head = NIL
        self._tail = NIL

    def __len__(self) -> int:
        return self.allocator.in_use

    def track_new(self, key: K) -> Locator:
        locator = self.allocator.allocate()
        slot = locator.slot
        if slot == len(self._keys):
            # Arena grew by one slot
            self._keys.append(key)
            self._prev.append(NIL)
            self._next.append(NIL)
        else:
            self._keys[slot] = key
        self._link_front(slot)
        return locator

    def record_access(self, locator: Locator) -> None:
        slot = self._check(locator)
        if slot == self._head:
            return
        self._unlink(slot)
        self._link_front(slot)

    def select_victim(self) -> Optional[K]:
        if self._tail == NIL:
            return None
        # Return the last item (least recently used)
        return self._keys[self._tail]

    def remove(self, locator: Locator) -> K:
        slot = self._check(locator)
        key = self._keys[slot]
        self._unlink(slot)
        # Drop the reference so the key can be collected
        self._keys[slot] = None
        self.allocator.free(locator)
        return key

    def keys_by_recency(self) -> Iterator[K]:
        """Yields keys from most to least recently used."""
        slot = self._head
        while slot != NIL:
            yield self._keys[slot]
            slot = self._next[slot]

    def clear(self) -> None:
        self.allocator.reset()
        self._keys = [None] * len(self._keys)
        self._head = NIL
        self._tail = NIL

    def _check(self, locator: Locator) -> int:
        if not self.allocator.is_live(locator):
            raise StaleLocatorError(f"Locator {locator} does not refer to a live node")
        return locator.slot

    def _link_front(self, slot: int) -> None:
        self._prev[slot] = NIL
        self._next[slot] = self._head
        if self._head != NIL:
            self._prev[self._head] = slot
        else:
            self._tail = slot
        self._head = slot

    def _unlink(self, slot: int) -> None:
        prev_slot = self._prev[slot]
        next_slot = self._next[slot]
        if prev_slot != NIL:
            self._next[prev_slot] = next_slot
        else:
            self._head = next_slot
        if next_slot != NIL:
            self._prev[next_slot] = prev_slot
        else:
            self._tail = prev_slot
        self._prev[slot] = NIL
        self._next[slot] = NIL
