"""Test suite for the LRU recency list."""

import pytest

from lru_cache.allocator import SlotAllocator
from lru_cache.eviction_policy import EvictionPolicy, LRUPolicy
from lru_cache.exceptions import StaleLocatorError


class TestLRUPolicy:
    """Test LRUPolicy class."""

    @pytest.fixture
    def policy(self):
        """Policy tracking a, b, c (c most recent)."""
        policy = LRUPolicy()
        policy.locators = {key: policy.track_new(key) for key in "abc"}
        return policy

    def test_track_new_goes_to_front(self, policy):
        """Test new keys are most recently used."""
        assert list(policy.keys_by_recency()) == ["c", "b", "a"]
        assert len(policy) == 3

    def test_select_victim_is_back(self, policy):
        """Test the victim is the least recently used key."""
        assert policy.select_victim() == "a"

    def test_select_victim_empty(self):
        """Test empty policy has no victim."""
        assert LRUPolicy().select_victim() is None

    def test_record_access_moves_to_front(self, policy):
        """Test access moves only the touched key."""
        policy.record_access(policy.locators["a"])

        assert list(policy.keys_by_recency()) == ["a", "c", "b"]
        assert policy.select_victim() == "b"

    def test_record_access_front_is_noop(self, policy):
        """Test touching the front key keeps the order."""
        policy.record_access(policy.locators["c"])

        assert list(policy.keys_by_recency()) == ["c", "b", "a"]

    def test_record_access_keeps_locators(self, policy):
        """Test relinking keeps every locator usable."""
        policy.record_access(policy.locators["b"])
        policy.record_access(policy.locators["a"])

        for locator in policy.locators.values():
            assert policy.allocator.is_live(locator)

    def test_remove_middle(self, policy):
        """Test removing from the middle keeps neighbours linked."""
        key = policy.remove(policy.locators["b"])

        assert key == "b"
        assert list(policy.keys_by_recency()) == ["c", "a"]
        assert len(policy) == 2

    def test_remove_head_and_tail(self, policy):
        """Test removing both ends."""
        policy.remove(policy.locators["c"])
        policy.remove(policy.locators["a"])

        assert list(policy.keys_by_recency()) == ["b"]
        assert policy.select_victim() == "b"

    def test_remove_last_empties(self):
        """Test removing the only key leaves an empty list."""
        policy = LRUPolicy()
        locator = policy.track_new("x")

        policy.remove(locator)

        assert list(policy.keys_by_recency()) == []
        assert policy.select_victim() is None

    def test_stale_locator_rejected(self, policy):
        """Test a removed locator cannot be reused."""
        locator = policy.locators["a"]
        policy.remove(locator)

        with pytest.raises(StaleLocatorError):
            policy.record_access(locator)
        with pytest.raises(StaleLocatorError):
            policy.remove(locator)

    def test_slot_reuse_after_remove(self, policy):
        """Test freed slots back new nodes."""
        old = policy.locators["b"]
        policy.remove(old)

        new = policy.track_new("d")

        assert new.slot == old.slot
        assert list(policy.keys_by_recency()) == ["d", "c", "a"]
        assert policy.allocator.capacity == 3

    def test_owns_private_allocator(self):
        """Test each policy gets its own arena, so slots start at zero."""
        first = LRUPolicy()
        first.track_new("a")

        second = LRUPolicy()
        locator = second.track_new("x")

        assert second.allocator is not first.allocator
        assert locator.slot == 0
        assert list(second.keys_by_recency()) == ["x"]
        with pytest.raises(TypeError):
            LRUPolicy(SlotAllocator())

    def test_clear(self, policy):
        """Test clear empties the list and stales locators."""
        policy.clear()

        assert len(policy) == 0
        assert policy.select_victim() is None
        with pytest.raises(StaleLocatorError):
            policy.record_access(policy.locators["a"])

        policy.track_new("z")
        assert list(policy.keys_by_recency()) == ["z"]


class TestEvictionPolicyInterface:
    """Test the abstract base."""

    def test_base_methods_not_implemented(self):
        """Test the base interface refuses to act."""
        policy = EvictionPolicy()

        with pytest.raises(NotImplementedError):
            policy.track_new("a")
        with pytest.raises(NotImplementedError):
            policy.select_victim()
