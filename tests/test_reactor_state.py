import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

from app.services.reactor_state import MemoryReactorState, RedisReactorState


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_old_type_is_kept_per_product():
    state = MemoryReactorState()
    state.set_old_type(1, "simple")
    state.set_old_type(2, "variable")

    assert state.get_old_type(1) == "simple"
    assert state.get_old_type(2) == "variable"
    assert state.get_old_type(3) is None


def test_claim_rejects_repeated_fingerprint():
    state = MemoryReactorState()

    assert state.claim(1, "abc") is True
    assert state.claim(1, "abc") is False
    assert state.claim(2, "abc") is True
    assert state.claim(1, "def") is True
    assert state.claim(1, "abc") is True


def test_entries_expire_after_ttl():
    clock = FakeClock()
    state = MemoryReactorState(ttl_seconds=60, clock=clock)
    state.set_old_type(1, "simple")
    state.claim(1, "abc")

    clock.now += 61

    assert state.get_old_type(1) is None
    assert state.claim(1, "abc") is True


def test_oldest_entries_are_evicted_when_full():
    state = MemoryReactorState(max_entries=2)
    state.set_old_type(1, "simple")
    state.set_old_type(2, "simple")
    state.set_old_type(3, "variable")

    assert len(state) == 2
    assert state.get_old_type(1) is None
    assert state.get_old_type(3) == "variable"


def test_redis_state_uses_namespaced_keys_with_ttl():
    redis = MagicMock()
    redis.get.return_value = b"variable"
    state = RedisReactorState(redis, ttl_seconds=120)

    state.set_old_type(5, "simple")
    redis.set.assert_called_once_with("catalog_sync:old_type:5", "simple", ex=120)
    assert state.get_old_type(5) == "variable"
    redis.get.assert_called_once_with("catalog_sync:old_type:5")


def test_redis_claim_compares_previous_fingerprint():
    redis = MagicMock()
    state = RedisReactorState(redis, ttl_seconds=120)

    redis.set.return_value = None
    assert state.claim(5, "abc") is True
    redis.set.assert_called_with("catalog_sync:fingerprint:5", "abc", ex=120, get=True)

    redis.set.return_value = b"abc"
    assert state.claim(5, "abc") is False


def test_concurrent_claims_admit_one_firing():
    state = MemoryReactorState()
    barrier = threading.Barrier(8)

    def claim():
        barrier.wait()
        return state.claim(1, "abc")

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: claim(), range(8)))

    assert results.count(True) == 1


def test_concurrent_access_across_products():
    state = MemoryReactorState(max_entries=50)

    def churn(worker):
        for i in range(500):
            product_id = worker * 1000 + i
            state.set_old_type(product_id, "simple")
            state.claim(product_id, "abc")
            state.get_old_type(product_id - 1)

    with ThreadPoolExecutor(max_workers=4) as pool:
        list(pool.map(churn, range(4)))

    assert len(state) <= 50
