import pytest

from pokecollect.core.bounded_cache import BoundedCache


def test_get_missing():
    assert BoundedCache(count_limit=2, cost_limit=100).get("a") is None


def test_count_limit_evicts_least_recently_used():
    cache = BoundedCache(count_limit=2, cost_limit=100)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.get("a")
    cache.put("c", 3)

    assert "b" not in cache
    assert cache.get("a") == 1
    assert cache.get("c") == 3


def test_cost_limit_evicts_until_under():
    cache = BoundedCache(count_limit=10, cost_limit=100)
    cache.put("a", "A", cost=40)
    cache.put("b", "B", cost=40)
    cache.put("c", "C", cost=40)

    assert "a" not in cache
    assert len(cache) == 2
    assert cache.total_cost == 80


def test_oversized_value_rejected():
    cache = BoundedCache(count_limit=10, cost_limit=100)
    cache.put("a", "A", cost=10)

    assert cache.put("big", "B", cost=101) is False
    assert "big" not in cache
    assert cache.get("a") == "A"


def test_replace_updates_cost():
    cache = BoundedCache(count_limit=10, cost_limit=100)
    cache.put("a", "old", cost=60)
    cache.put("a", "new", cost=30)

    assert cache.get("a") == "new"
    assert cache.total_cost == 30


def test_remove_and_clear():
    cache = BoundedCache(count_limit=10, cost_limit=100)
    cache.put("a", 1, cost=5)
    cache.put("b", 2, cost=5)
    cache.remove("a")

    assert "a" not in cache
    assert cache.total_cost == 5

    cache.clear()
    assert len(cache) == 0
    assert cache.total_cost == 0


@pytest.mark.parametrize("count_limit, cost_limit", [(0, 10), (10, 0)])
def test_limits_must_be_positive(count_limit, cost_limit):
    with pytest.raises(ValueError):
        BoundedCache(count_limit=count_limit, cost_limit=cost_limit)


def test_negative_cost_rejected():
    with pytest.raises(ValueError):
        BoundedCache(count_limit=1, cost_limit=1).put("a", 1, cost=-1)
