"""Fixed-capacity in-process cache with strict least-recently-used eviction."""

from .allocator import Locator, SlotAllocator
from .api import CacheEntry, CacheStats, LRUCache
from .eviction_policy import EvictionPolicy, LRUPolicy
from .exceptions import (
    CacheError,
    EmptyCacheError,
    MissingCreatePolicyError,
    ReentrantHookError,
    StaleLocatorError,
)

__all__ = [
    "CacheEntry",
    "CacheError",
    "CacheStats",
    "EmptyCacheError",
    "EvictionPolicy",
    "LRUCache",
    "LRUPolicy",
    "Locator",
    "MissingCreatePolicyError",
    "ReentrantHookError",
    "SlotAllocator",
    "StaleLocatorError",
]

__version__ = "0.1.0"
