from typing import List, NamedTuple


class Locator(NamedTuple):
    """Represents a reserved node slot in the recency list."""
    slot: int        # Index into the arena's parallel arrays
    generation: int  # Bumped every time the slot is freed


class SlotAllocator:
    """
    Manages an index-stable pool of node slots for the recency list.
    Focuses solely on slot bookkeeping: which slots are live and which can be reused.
    """
    def __init__(self):
        self._generations: List[int] = []
        self._live: List[bool] = []
        self._free_list: List[int] = []
        self._used = 0

    @property
    def capacity(self) -> int:
        """Number of slots ever created (live + free)."""
        return len(self._generations)

    @property
    def in_use(self) -> int:
        return self._used

    @property
    def available(self) -> int:
        return len(self._free_list)

    def allocate(self) -> Locator:
        """
        Reserves a slot. Freed slots are reused before the arena grows,
        so a slot index never moves once handed out.
        """
        if self._free_list:
            slot = self._free_list.pop()
        else:
            slot = len(self._generations)
            self._generations.append(0)
            self._live.append(False)

        self._live[slot] = True
        self._used += 1
        return Locator(slot=slot, generation=self._generations[slot])

    def free(self, locator: Locator) -> None:
        """Releases the slot back to the pool and invalidates outstanding locators to it."""
        slot = locator.slot
        self._live[slot] = False
        self._generations[slot] += 1
        self._free_list.append(slot)
        self._used -= 1

    def is_live(self, locator: Locator) -> bool:
        slot = locator.slot
        if slot < 0 or slot >= len(self._generations):
            return False
        return self._live[slot] and self._generations[slot] == locator.generation

    def reset(self) -> None:
        """Frees every live slot. All previously issued locators become stale."""
        for slot, live in enumerate(self._live):
            if live:
                self._live[slot] = False
                self._generations[slot] += 1
        # Hand out low slots first again
        self._free_list = list(reversed(range(len(self._generations))))
        self._used = 0
