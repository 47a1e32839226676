"""Errors raised by the cache engine.

Lookup misses are not errors: `at`, `touch`, `assign` and `erase` report them
through their return value. The types below cover the few conditions that
cannot be expressed that way.
"""


class CacheError(Exception):
    """Base class for cache engine errors."""


class MissingCreatePolicyError(CacheError, KeyError):
    """`get` missed and no create policy is configured to synthesize a value."""

    def __init__(self, key):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Key {self.key!r} not cached and no create policy configured"


class EmptyCacheError(CacheError, IndexError):
    """An operation that needs at least one entry ran on an empty cache."""


class StaleLocatorError(CacheError, LookupError):
    """A locator no longer refers to a live node in the recency list."""


class ReentrantHookError(CacheError, RuntimeError):
    """A create or dispose hook tried to modify the cache that invoked it."""
