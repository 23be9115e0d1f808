"""
Thread-safe LRU cache bounded by entry count and aggregate cost.
"""
from collections import OrderedDict
from threading import Lock
from typing import Generic, Hashable, Optional, Tuple, TypeVar

from pokecollect.utils.logger import logger

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class BoundedCache(Generic[K, V]):
    """
    Least-recently-used cache with two ceilings.

    Inserting past either ``count_limit`` entries or ``cost_limit`` total
    cost evicts the least recently used entries until both hold again. A
    single value costing more than ``cost_limit`` is never stored.
    """

    def __init__(self, count_limit: int, cost_limit: int):
        if count_limit <= 0 or cost_limit <= 0:
            raise ValueError("Cache limits must be positive")
        self.count_limit = count_limit
        self.cost_limit = cost_limit
        self._entries: "OrderedDict[K, Tuple[V, int]]" = OrderedDict()
        self._total_cost = 0
        self._lock = Lock()

    def get(self, key: K) -> Optional[V]:
        with self._lock:
            item = self._entries.get(key)
            if item is None:
                return None
            self._entries.move_to_end(key)
            return item[0]

    def put(self, key: K, value: V, cost: int = 0) -> bool:
        """
        Store ``value`` under ``key``, replacing any previous value.

        Returns:
            False if the value alone exceeds the cost ceiling
        """
        if cost < 0:
            raise ValueError("Cost must not be negative")

        with self._lock:
            self._discard(key)
            if cost > self.cost_limit:
                logger.debug(f"Not caching {key!r}: cost {cost} exceeds limit {self.cost_limit}")
                return False

            self._entries[key] = (value, cost)
            self._total_cost += cost

            while len(self._entries) > self.count_limit or self._total_cost > self.cost_limit:
                evicted_key, (_, evicted_cost) = self._entries.popitem(last=False)
                self._total_cost -= evicted_cost
                logger.debug(f"Evicted {evicted_key!r} from cache")
            return True

    def remove(self, key: K) -> None:
        with self._lock:
            self._discard(key)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._total_cost = 0

    @property
    def total_cost(self) -> int:
        with self._lock:
            return self._total_cost

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: K) -> bool:
        with self._lock:
            return key in self._entries

    def _discard(self, key: K) -> None:
        item = self._entries.pop(key, None)
        if item is not None:
            self._total_cost -= item[1]
