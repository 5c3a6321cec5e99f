"""Tests for InMemoryStore -- the Redis-compatible in-process store."""
import threading

import pytest


class TestCounters:
    def test_increment_starts_at_one(self, store):
        assert store.increment("c") == 1
        assert store.increment("c") == 2

    def test_expired_counter_restarts(self, store, clock):
        store.increment("c")
        store.expire("c", 30)
        clock.advance(30)
        assert store.increment("c") == 1

    def test_counter_alive_before_deadline(self, store, clock):
        store.increment("c")
        store.expire("c", 30)
        clock.advance(29.9)
        assert store.increment("c") == 2

    def test_concurrent_increments_are_not_lost(self, store):
        def bump():
            for _ in range(200):
                store.increment("hot")

        threads = [threading.Thread(target=bump) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert store.increment("hot") == 8 * 200 + 1


class TestExpire:
    def test_expire_missing_key_returns_false(self, store):
        assert store.expire("nope", 10) is False

    def test_key_without_deadline_never_expires(self, store, clock):
        store.hash_set("h", {"a": "1"})
        clock.advance(10 ** 9)
        assert store.hash_get_all("h") == {"a": "1"}


class TestSweep:
    def test_unread_expired_keys_are_dropped(self, store, clock):
        for i in range(5):
            store.increment(f"rl:10.0.0.{i}")
            store.expire(f"rl:10.0.0.{i}", 30)
        clock.advance(store.SWEEP_INTERVAL_SECONDS + 1)
        store.increment("rl:other")
        assert list(store._counters) == ["rl:other"]
        assert store._deadlines == {}

    def test_live_keys_survive_sweep(self, store, clock):
        store.hash_set("run:x", {"name": "Carl"})
        store.expire("run:x", 10 ** 6)
        clock.advance(store.SWEEP_INTERVAL_SECONDS + 1)
        store.increment("c")
        assert store.hash_get_all("run:x") == {"name": "Carl"}


class TestHashes:
    def test_values_stored_as_strings(self, store):
        store.hash_set("h", {"n": 5, "s": "x"})
        assert store.hash_get_all("h") == {"n": "5", "s": "x"}

    def test_missing_hash_is_empty(self, store):
        assert store.hash_get_all("missing") == {}

    def test_hash_expires(self, store, clock):
        store.hash_set("h", {"a": "1"})
        store.expire("h", 5)
        clock.advance(6)
        assert store.hash_get_all("h") == {}

    def test_returned_mapping_is_a_copy(self, store):
        store.hash_set("h", {"a": "1"})
        store.hash_get_all("h")["a"] = "changed"
        assert store.hash_get_all("h") == {"a": "1"}


class TestSortedSets:
    @pytest.fixture
    def ranked(self, store):
        for member, score in [("a", 10), ("b", 30), ("c", 20), ("d", 40)]:
            store.sorted_set_insert("z", score, member)
        return store

    def test_insert_reports_new_members(self, store):
        assert store.sorted_set_insert("z", 1, "m") == 1
        assert store.sorted_set_insert("z", 2, "m") == 0
        assert store.sorted_set_cardinality("z") == 1

    def test_range_descending_inclusive(self, ranked):
        assert ranked.sorted_set_range_desc_with_scores("z", 0, 1) == [("d", 40.0), ("b", 30.0)]

    def test_range_past_end_is_clamped(self, ranked):
        assert len(ranked.sorted_set_range_desc_with_scores("z", 0, 99)) == 4

    def test_range_negative_stop(self, ranked):
        rows = ranked.sorted_set_range_desc_with_scores("z", 0, -1)
        assert [m for m, _ in rows] == ["d", "b", "c", "a"]

    def test_range_empty_when_start_beyond(self, ranked):
        assert ranked.sorted_set_range_desc_with_scores("z", 10, 20) == []

    def test_rev_rank(self, ranked):
        assert ranked.sorted_set_rev_rank("z", "d") == 0
        assert ranked.sorted_set_rev_rank("z", "a") == 3
        assert ranked.sorted_set_rev_rank("z", "ghost") is None

    def test_equal_scores_order_like_redis(self, store):
        store.sorted_set_insert("z", 5, "alpha")
        store.sorted_set_insert("z", 5, "beta")
        rows = store.sorted_set_range_desc_with_scores("z", 0, -1)
        assert [m for m, _ in rows] == ["beta", "alpha"]

    def test_cardinality_of_missing_key(self, store):
        assert store.sorted_set_cardinality("none") == 0

    def test_update_moves_member(self, ranked):
        ranked.sorted_set_insert("z", 100, "a")
        assert ranked.sorted_set_rev_rank("z", "a") == 0


class TestPing:
    def test_ping(self, store):
        assert store.ping() is True
        assert store.backend == "memory"
